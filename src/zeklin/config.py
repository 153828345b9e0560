from __future__ import annotations

from typing import Callable, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .errors import InputValidationError, MissingInput
from .inputs import optional_input, required_input, required_multiline_input

T = TypeVar("T")


class ActionConfig(BaseModel):
    """Configuration loaded from GitHub Actions inputs."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: SecretStr = Field(description="Zeklin API key")
    api_key_id: str = Field(description="Identifier of the API key")
    cmd: tuple[str, ...] = Field(description="Benchmark command lines, run in order")
    output_file_path: str = Field(description="JSON results file written by the command")
    workdir: Optional[str] = Field(default=None, description="Directory the commands run in")

    @field_validator("api_key_id", "output_file_path")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("must not be empty")
        return trimmed

    @field_validator("api_key")
    @classmethod
    def _non_empty_secret(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("cmd")
    @classmethod
    def _non_empty_commands(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one command is required")
        return value

    @classmethod
    def from_inputs(cls, environ: Optional[Mapping[str, str]] = None) -> "ActionConfig":
        """Read every input, then fail once with all missing names."""
        errors: list[MissingInput] = []

        def collect(reader: Callable[..., T], name: str) -> Optional[T]:
            try:
                return reader(name, environ)
            except MissingInput as exc:
                errors.append(exc)
                return None

        api_key = collect(required_input, "api-key")
        api_key_id = collect(required_input, "api-key-id")
        cmd = collect(required_multiline_input, "cmd")
        output_file_path = collect(required_input, "output-file-path")
        workdir = optional_input("workdir", environ)

        if errors:
            raise InputValidationError(errors)

        return cls(
            api_key=api_key,
            api_key_id=api_key_id,
            cmd=cmd,
            output_file_path=output_file_path,
            workdir=workdir,
        )
