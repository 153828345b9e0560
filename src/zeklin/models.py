from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Literal, Optional, Union

from .utils import format_timestamp

RunnerOs = Literal["linux", "windows", "macos"]
RunnerArch = Literal["x86", "x64", "arm", "arm64"]


@dataclass(frozen=True)
class Branch:
    name: str


@dataclass(frozen=True)
class Tag:
    name: str


Ref = Union[Branch, Tag]


def make_ref(ref_type: str, name: str) -> Ref:
    """Build a Ref from GITHUB_REF_TYPE / GITHUB_REF_NAME."""
    kind = ref_type.strip().lower()
    if kind == "branch":
        return Branch(name)
    if kind == "tag":
        return Tag(name)
    raise ValueError(f"Invalid ref type: {ref_type}")


@dataclass(frozen=True)
class PullRequest:
    pr_id: int
    pr_number: int
    pr_title: str
    base_label: str
    base_ref: str
    base_sha: str
    head_label: str
    head_ref: str
    head_sha: str
    user_id: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prId": self.pr_id,
            "prNumber": self.pr_number,
            "prTitle": self.pr_title,
            "baseLabel": self.base_label,
            "baseRef": self.base_ref,
            "baseSha": self.base_sha,
            "headLabel": self.head_label,
            "headRef": self.head_ref,
            "headSha": self.head_sha,
            "userId": self.user_id,
        }


@dataclass(frozen=True)
class ExplicitCommits:
    """Event payload names both commits (push, pull_request synchronize)."""

    before: str
    after: str


@dataclass(frozen=True)
class PullRequestOpened:
    """Freshly opened PR: commits come from its base and head."""

    pull_request: PullRequest


EventShape = Union[ExplicitCommits, PullRequestOpened]


@dataclass(frozen=True)
class UploadPayload:
    workflow_run_id: int
    workflow_run_number: int
    workflow_runner_name: str
    workflow_run_attempt: int
    runner_environment: str
    runner_os: RunnerOs
    runner_arch: RunnerArch
    org_id: int
    project_id: int
    branch_name: str
    commit_message: str
    commit_hash: str
    previous_commit_hash: str
    actor: str
    actor_id: int
    pr: Optional[PullRequest]
    data: Any
    computed_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "workflowRunId": self.workflow_run_id,
            "workflowRunNumber": self.workflow_run_number,
            "workflowRunnerName": self.workflow_runner_name,
            "workflowRunAttempt": self.workflow_run_attempt,
            "runnerEnvironment": self.runner_environment,
            "runnerOs": self.runner_os,
            "runnerArch": self.runner_arch,
            "orgId": self.org_id,
            "projectId": self.project_id,
            "branchName": self.branch_name,
            "commitMessage": self.commit_message,
            "commitHash": self.commit_hash,
            "previousCommitHash": self.previous_commit_hash,
            "actor": self.actor,
            "actorId": self.actor_id,
        }
        # Absent, not null, outside pull requests.
        if self.pr is not None:
            body["pr"] = self.pr.to_dict()
        body["data"] = self.data
        body["computedAt"] = format_timestamp(self.computed_at)
        return body
