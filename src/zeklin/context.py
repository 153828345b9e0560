from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import UnhandledEventShape
from .models import PullRequest


def _load_event(event_path: Optional[str]) -> Dict[str, Any]:
    if not event_path:
        return {}
    try:
        event = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return event if isinstance(event, dict) else {}


def _required_str(obj: Dict[str, Any], key: str, where: str) -> str:
    value = obj.get(key)
    text = str(value).strip() if value is not None else ""
    if not text:
        raise UnhandledEventShape(f"Missing {where}.{key} in event payload")
    return text


def _required_int(obj: Dict[str, Any], key: str, where: str) -> int:
    value = obj.get(key)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise UnhandledEventShape(
            f"Missing or invalid {where}.{key} in event payload"
        ) from None


def _parse_pull_request(pr: Optional[Dict[str, Any]]) -> Optional[PullRequest]:
    if not pr:
        return None
    base = pr.get("base") or {}
    head = pr.get("head") or {}
    user = pr.get("user") or {}
    return PullRequest(
        pr_id=_required_int(pr, "id", "pull_request"),
        pr_number=_required_int(pr, "number", "pull_request"),
        pr_title=_required_str(pr, "title", "pull_request"),
        base_label=_required_str(base, "label", "pull_request.base"),
        base_ref=_required_str(base, "ref", "pull_request.base"),
        base_sha=_required_str(base, "sha", "pull_request.base"),
        head_label=_required_str(head, "label", "pull_request.head"),
        head_ref=_required_str(head, "ref", "pull_request.head"),
        head_sha=_required_str(head, "sha", "pull_request.head"),
        user_id=_required_int(user, "id", "pull_request.user"),
    )


@dataclass(frozen=True)
class EventContext:
    """Immutable view of the event that triggered the workflow."""

    event_name: str
    ref: str  # full ref, e.g. refs/heads/main
    action: Optional[str]

    # Present together or not at all (push, pull_request synchronize).
    before: Optional[str]
    after: Optional[str]

    # Raw payload; validated on first use so a malformed one fails at upload time.
    pull_request_payload: Optional[Dict[str, Any]]
    commit_message: str

    @property
    def is_pull_request(self) -> bool:
        return bool(self.pull_request_payload)

    @property
    def pull_request(self) -> Optional[PullRequest]:
        return _parse_pull_request(self.pull_request_payload)

    @classmethod
    def from_event(cls, event_name: str, ref: str, event: Dict[str, Any]) -> "EventContext":
        before = event.get("before")
        after = event.get("after")
        if not (isinstance(before, str) and before.strip() and isinstance(after, str) and after.strip()):
            before = after = None

        head_commit = event.get("head_commit") or {}
        action = event.get("action")
        pull_request = event.get("pull_request")
        if not isinstance(pull_request, dict):
            pull_request = None

        return cls(
            event_name=event_name,
            ref=ref or str(event.get("ref") or ""),
            action=str(action) if action else None,
            before=before.strip() if before else None,
            after=after.strip() if after else None,
            pull_request_payload=pull_request or None,
            commit_message=str(head_commit.get("message") or ""),
        )

    @classmethod
    def from_environment(cls) -> "EventContext":
        """Load context from GitHub Actions environment."""
        event = _load_event(os.environ.get("GITHUB_EVENT_PATH"))
        return cls.from_event(
            event_name=os.environ.get("GITHUB_EVENT_NAME", ""),
            ref=os.environ.get("GITHUB_REF", ""),
            event=event,
        )
