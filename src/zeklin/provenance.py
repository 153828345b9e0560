"""Build the upload payload from CI provenance and benchmark results.

Everything here is pure: the timestamp is passed in and nothing touches
the network, the filesystem or the process environment.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from .context import EventContext
from .environment import EnvironmentSnapshot
from .errors import UnhandledEventShape
from .models import EventShape, ExplicitCommits, PullRequestOpened, UploadPayload
from .utils import strip_prefix

BRANCH_REF_PREFIX = "refs/heads/"


def event_shape(context: EventContext) -> Optional[EventShape]:
    """Classify the event; None when before/after cannot be derived."""
    if context.before and context.after:
        return ExplicitCommits(before=context.before, after=context.after)
    if context.is_pull_request and context.action == "opened":
        return PullRequestOpened(pull_request=context.pull_request)
    return None


def commit_range(context: EventContext) -> tuple[str, str]:
    """Return (before, after) commit shas for the triggering event."""
    shape = event_shape(context)
    if isinstance(shape, ExplicitCommits):
        return shape.before, shape.after
    if isinstance(shape, PullRequestOpened):
        return shape.pull_request.base_sha, shape.pull_request.head_sha
    raise UnhandledEventShape(
        f"Cannot determine commits for event '{context.event_name}'"
        f" (action: {context.action or 'none'})"
    )


def branch_name(context: EventContext) -> str:
    pull_request = context.pull_request
    if pull_request is not None:
        name = pull_request.head_ref
    else:
        name = strip_prefix(context.ref, BRANCH_REF_PREFIX)
    name = name.strip()
    if not name:
        raise UnhandledEventShape(
            f"Cannot determine branch name for event '{context.event_name}'"
        )
    return name


def assemble(
    env: EnvironmentSnapshot,
    context: EventContext,
    computed_at: datetime,
    results: Any,
) -> UploadPayload:
    before, after = commit_range(context)
    return UploadPayload(
        workflow_run_id=env.run_id,
        workflow_run_number=env.run_number,
        workflow_runner_name=env.runner_name,
        workflow_run_attempt=env.run_attempt,
        runner_environment=env.runner_environment,
        runner_os=env.runner_os,
        runner_arch=env.runner_arch,
        org_id=env.repository_owner_id,
        project_id=env.repository_id,
        branch_name=branch_name(context),
        commit_message=context.commit_message,
        commit_hash=after,
        previous_commit_hash=before,
        actor=env.actor,
        actor_id=env.actor_id,
        pr=context.pull_request,
        data=results,
        computed_at=computed_at,
    )
