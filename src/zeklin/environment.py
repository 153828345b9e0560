from __future__ import annotations

from typing import Any, Dict

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_SERVER_URL
from .errors import InvalidFormat, MissingVariable
from .models import Ref, RunnerArch, RunnerOs, make_ref

# Documentation of GitHub variables:
# https://docs.github.com/en/actions/learn-github-actions/variables


class EnvironmentSnapshot(BaseSettings):
    """CI-provided environment, read once at startup."""

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
        case_sensitive=True,
    )

    server_url: str = Field(default=DEFAULT_SERVER_URL, validation_alias="ZEKLIN_SERVER_URL")

    # Unique per workflow run; unchanged by re-runs.
    run_id: int = Field(validation_alias="GITHUB_RUN_ID")
    # Starts at 1 for the workflow's first run; unchanged by re-runs.
    run_number: int = Field(validation_alias="GITHUB_RUN_NUMBER")
    # Starts at 1 and increments with each re-run.
    run_attempt: int = Field(validation_alias="GITHUB_RUN_ATTEMPT")

    runner_name: str = Field(validation_alias="RUNNER_NAME")
    # "github-hosted" on GitHub's runners, "self-hosted" otherwise.
    runner_environment: str = Field(validation_alias="RUNNER_ENVIRONMENT")
    runner_os: RunnerOs = Field(validation_alias="RUNNER_OS")
    runner_arch: RunnerArch = Field(validation_alias="RUNNER_ARCH")

    repository: str = Field(validation_alias="GITHUB_REPOSITORY")
    repository_id: int = Field(validation_alias="GITHUB_REPOSITORY_ID")
    repository_owner_id: int = Field(validation_alias="GITHUB_REPOSITORY_OWNER_ID")

    sha: str = Field(validation_alias="GITHUB_SHA")
    ref_name: str = Field(validation_alias="GITHUB_REF_NAME")
    ref_type: str = Field(validation_alias="GITHUB_REF_TYPE")

    api_url: str = Field(validation_alias="GITHUB_API_URL")
    github_server_url: str = Field(validation_alias="GITHUB_SERVER_URL")

    actor: str = Field(validation_alias="GITHUB_ACTOR")
    actor_id: int = Field(validation_alias="GITHUB_ACTOR_ID")

    @field_validator(
        "server_url",
        "runner_name",
        "runner_environment",
        "repository",
        "sha",
        "ref_name",
        "ref_type",
        "actor",
        mode="before",
    )
    @classmethod
    def _non_empty(cls, value: Any) -> Any:
        if isinstance(value, str):
            trimmed = value.strip()
            if not trimmed:
                raise ValueError("must not be empty")
            return trimmed
        return value

    @field_validator("api_url", "github_server_url", mode="before")
    @classmethod
    def _https_url(cls, value: Any) -> Any:
        if isinstance(value, str):
            trimmed = value.strip()
            if not trimmed.startswith("https://"):
                raise ValueError("must start with https://")
            return trimmed
        return value

    @field_validator("runner_os", "runner_arch", mode="before")
    @classmethod
    def _normalize_lowercase(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("ref_type")
    @classmethod
    def _known_ref_type(cls, value: str) -> str:
        make_ref(value, "-")
        return value

    @classmethod
    def from_environment(cls) -> "EnvironmentSnapshot":
        """Read the process environment, translating validation failures."""
        try:
            return cls()
        except ValidationError as exc:
            raise _translate(exc) from exc

    @property
    def ref(self) -> Ref:
        return make_ref(self.ref_type, self.ref_name)

    @property
    def workflow_url(self) -> str:
        return f"{self.github_server_url}/{self.repository}/actions/runs/{self.run_id}"

    def debug_fields(self) -> Dict[str, Any]:
        fields = {
            _alias(name): getattr(self, name) for name in type(self).model_fields
        }
        fields["WORKFLOW_URL"] = self.workflow_url
        fields["REF"] = repr(self.ref)
        return fields


def _alias(field_name: str) -> str:
    field = EnvironmentSnapshot.model_fields.get(field_name)
    if field is not None and isinstance(field.validation_alias, str):
        return field.validation_alias
    return field_name


def _translate(exc: ValidationError) -> Exception:
    """Report the first failing variable by its environment name."""
    first = exc.errors()[0]
    loc = first.get("loc") or ("<unknown>",)
    variable = _alias(str(loc[0]))
    if first.get("type") == "missing":
        return MissingVariable(variable)
    return InvalidFormat(variable, str(first.get("msg", "invalid value")))
