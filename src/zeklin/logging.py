from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator

_SENSITIVE_TOKENS = (
    "token",
    "secret",
    "password",
    "api_key",
    "apikey",
    "authorization",
    "credential",
)


def escape_workflow_command(value: str) -> str:
    """
    Escape a string for GitHub workflow commands (annotation messages).

    See: https://docs.github.com/actions/using-workflows/workflow-commands-for-github-actions
    """
    if value is None:
        return ""
    return str(value).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ZeklinLogger:
    """Structured JSON logger with GitHub Actions integration."""

    def __init__(self, invocation_id: str):
        self.invocation_id = invocation_id

    def debug(self, message: str, **kwargs: Any) -> None:
        self._emit("debug", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._emit("info", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._emit("warning", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._emit("error", message, **kwargs)

    def stream(self, line: str, source: str = "stdout") -> None:
        """Echo one line of subprocess output as-is."""
        target = sys.stderr if source == "stderr" else sys.stdout
        target.write(line + "\n")
        target.flush()

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Context manager that tracks stage timing."""
        start = datetime.now(timezone.utc)
        self.info("stage_start", stage=name)
        status = "ok"
        try:
            yield
        except Exception as exc:
            status = "error"
            self.debug("stage_error", stage=name, error=str(exc))
            raise
        finally:
            end = datetime.now(timezone.utc)
            duration_ms = int((end - start).total_seconds() * 1000)
            self.info("stage_end", stage=name, duration_ms=duration_ms, status=status)

    def _emit(self, level: str, message: str, **kwargs: Any) -> None:
        """Emit structured JSON log + GitHub workflow command where relevant."""
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "invocation_id": self.invocation_id,
            "message": message,
        }
        payload.update(self._sanitize(kwargs))
        line = json.dumps(payload, ensure_ascii=False, default=str)

        if level == "debug":
            # Only rendered by the runner when step debugging is enabled.
            sys.stderr.write(f"::debug::{escape_workflow_command(line)}\n")
            sys.stderr.flush()
            return

        sys.stderr.write(line + "\n")
        sys.stderr.flush()

        if level == "error":
            sys.stderr.write(f"::error::{escape_workflow_command(message)}\n")
            sys.stderr.flush()
        elif level == "warning":
            sys.stderr.write(f"::warning::{escape_workflow_command(message)}\n")
            sys.stderr.flush()

    @staticmethod
    def _sanitize(fields: Dict[str, Any]) -> Dict[str, Any]:
        redacted: Dict[str, Any] = {}
        for key, value in fields.items():
            if ZeklinLogger._is_sensitive_key(key):
                redacted[key] = "***"
            else:
                redacted[key] = value
        return redacted

    @staticmethod
    def _is_sensitive_key(key: str) -> bool:
        lowered = key.lower()
        return any(token in lowered for token in _SENSITIVE_TOKENS)
