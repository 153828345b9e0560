from __future__ import annotations

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from zeklin.logging import ZeklinLogger

GITHUB_ENV = {
    "GITHUB_RUN_ID": "1658821493",
    "GITHUB_RUN_NUMBER": "3",
    "GITHUB_RUN_ATTEMPT": "1",
    "RUNNER_NAME": "GitHub Actions 2",
    "RUNNER_ENVIRONMENT": "github-hosted",
    "RUNNER_OS": "Linux",
    "RUNNER_ARCH": "X64",
    "GITHUB_REPOSITORY": "octo/repo",
    "GITHUB_REPOSITORY_ID": "123456789",
    "GITHUB_REPOSITORY_OWNER_ID": "7654321",
    "GITHUB_SHA": "aftersha222",
    "GITHUB_REF_NAME": "main",
    "GITHUB_REF_TYPE": "branch",
    "GITHUB_API_URL": "https://api.github.com",
    "GITHUB_SERVER_URL": "https://github.com",
    "GITHUB_ACTOR": "octo",
    "GITHUB_ACTOR_ID": "1234567",
}


@pytest.fixture(params=["asyncio"])
def anyio_backend(request):
    """Restrict anyio tests to asyncio only (trio is not installed)."""
    return request.param


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def event_push_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "event_push.json"


@pytest.fixture
def event_pr_opened_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "event_pr_opened.json"


@pytest.fixture
def event_pr_synchronize_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "event_pr_synchronize.json"


@pytest.fixture
def event_workflow_dispatch_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "event_workflow_dispatch.json"


@pytest.fixture
def github_env(monkeypatch: pytest.MonkeyPatch) -> dict:
    """A complete, valid set of runner variables."""
    monkeypatch.delenv("ZEKLIN_SERVER_URL", raising=False)
    for key, value in GITHUB_ENV.items():
        monkeypatch.setenv(key, value)
    return dict(GITHUB_ENV)


@pytest.fixture
def logger() -> ZeklinLogger:
    return ZeklinLogger("test-invocation")
