from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any


def compact_json(obj: Any) -> str:
    """Deterministic wire serialization; rejects NaN/Infinity."""
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def json_dumps(obj: Any) -> str:
    return json.dumps(obj, indent=2, sort_keys=True)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-01-02T03:04:05.678Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def strip_prefix(value: str, prefix: str) -> str:
    if value.startswith(prefix):
        return value[len(prefix):]
    return value
