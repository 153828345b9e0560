from __future__ import annotations

from enum import Enum

ACTION_NAME = "zeklin-action"
DEFAULT_SERVER_URL = "https://api.zeklin.io"

PING_PATH = "/ping"
UPLOAD_PATH = "/api/runs/jmh"


class ExitCode(int, Enum):
    """Process exit codes."""

    SUCCESS = 0
    FAILURE = 1


class RetryPolicy:
    """Fixed policy shared by the liveness check and the upload."""

    MAX_ATTEMPTS = 4  # 1 try + 3 retries
    SPACING_SECONDS = 1.0
    REQUEST_TIMEOUT_SECONDS = 30.0
