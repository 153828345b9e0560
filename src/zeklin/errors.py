from __future__ import annotations

from typing import Optional, Sequence

from .constants import ExitCode


class ZeklinError(Exception):
    """Base exception for all action errors."""

    exit_code: ExitCode = ExitCode.FAILURE


class MissingInput(ZeklinError):
    """A required action input is empty or unset."""

    def __init__(self, name: str):
        super().__init__(f"Input required and not supplied: {name}")
        self.name = name


class InputValidationError(ZeklinError):
    """One or more action inputs failed validation."""

    def __init__(self, errors: Sequence[MissingInput]):
        self.errors = tuple(errors)
        names = ", ".join(err.name for err in self.errors)
        super().__init__(f"Invalid action inputs: missing {names}")

    @property
    def names(self) -> list[str]:
        return [err.name for err in self.errors]


class EnvironmentVariableError(ZeklinError):
    """A CI environment variable is missing or malformed."""

    def __init__(self, variable: str, message: str):
        super().__init__(message)
        self.variable = variable


class MissingVariable(EnvironmentVariableError):
    def __init__(self, variable: str):
        super().__init__(variable, f"Missing environment variable: {variable}")


class InvalidFormat(EnvironmentVariableError):
    def __init__(self, variable: str, reason: str):
        super().__init__(variable, f"Invalid environment variable {variable}: {reason}")
        self.reason = reason


class CommandFailed(ZeklinError):
    """Benchmark command exited non-zero or could not be started."""

    def __init__(self, exit_code: Optional[int], message: str):
        super().__init__(message)
        self.command_exit_code = exit_code


class ResultsError(ZeklinError):
    """Results file could not be loaded."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class ResultsFileNotFound(ResultsError):
    def __init__(self, path: str):
        super().__init__(path, f"Results file not found: {path}")


class ResultsFileUnreadable(ResultsError):
    def __init__(self, path: str, reason: str):
        super().__init__(path, f"Results file unreadable: {path} ({reason})")


class ResultsFileMalformed(ResultsError):
    def __init__(self, path: str, diagnostic: str):
        super().__init__(path, f"Results file is not valid JSON: {path} ({diagnostic})")
        self.diagnostic = diagnostic


class UnhandledEventShape(ZeklinError):
    """Provenance cannot be derived from the triggering event."""


class ServerUnreachable(ZeklinError):
    """Liveness check exhausted its retries."""


class UploadFailed(ZeklinError):
    """Results upload exhausted its retries."""
