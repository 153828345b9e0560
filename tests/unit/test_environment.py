from __future__ import annotations

import pytest

from zeklin.constants import DEFAULT_SERVER_URL
from zeklin.environment import EnvironmentSnapshot
from zeklin.errors import InvalidFormat, MissingVariable
from zeklin.models import Branch, Tag


def test_snapshot_reads_and_coerces(github_env: dict) -> None:
    env = EnvironmentSnapshot.from_environment()

    assert env.run_id == 1658821493
    assert env.run_number == 3
    assert env.run_attempt == 1
    assert env.runner_os == "linux"
    assert env.runner_arch == "x64"
    assert env.repository_id == 123456789
    assert env.repository_owner_id == 7654321
    assert env.actor == "octo"
    assert env.actor_id == 1234567
    assert env.ref == Branch("main")


def test_server_url_defaults_and_overrides(
    github_env: dict, monkeypatch: pytest.MonkeyPatch
) -> None:
    assert EnvironmentSnapshot.from_environment().server_url == DEFAULT_SERVER_URL

    monkeypatch.setenv("ZEKLIN_SERVER_URL", "https://zeklin.example.com")
    assert EnvironmentSnapshot.from_environment().server_url == "https://zeklin.example.com"


def test_workflow_url(github_env: dict) -> None:
    env = EnvironmentSnapshot.from_environment()
    assert env.workflow_url == "https://github.com/octo/repo/actions/runs/1658821493"


def test_tag_ref(github_env: dict, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_REF_TYPE", "Tag")
    monkeypatch.setenv("GITHUB_REF_NAME", "v1.2.0")
    assert EnvironmentSnapshot.from_environment().ref == Tag("v1.2.0")


def test_missing_variable_is_named(github_env: dict, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_ACTOR_ID")

    with pytest.raises(MissingVariable) as excinfo:
        EnvironmentSnapshot.from_environment()

    assert excinfo.value.variable == "GITHUB_ACTOR_ID"


@pytest.mark.parametrize(
    ("variable", "value"),
    [
        ("GITHUB_RUN_ID", "not-a-number"),
        ("RUNNER_OS", "solaris"),
        ("RUNNER_ARCH", "riscv"),
        ("GITHUB_REF_TYPE", "commit"),
        ("GITHUB_API_URL", "http://api.github.com"),
        ("RUNNER_NAME", "   "),
    ],
)
def test_invalid_values_are_named(
    github_env: dict, monkeypatch: pytest.MonkeyPatch, variable: str, value: str
) -> None:
    monkeypatch.setenv(variable, value)

    with pytest.raises(InvalidFormat) as excinfo:
        EnvironmentSnapshot.from_environment()

    assert excinfo.value.variable == variable


def test_snapshot_is_frozen(github_env: dict) -> None:
    env = EnvironmentSnapshot.from_environment()
    with pytest.raises(Exception):
        env.actor = "someone-else"


def test_debug_fields_use_variable_names(github_env: dict) -> None:
    fields = EnvironmentSnapshot.from_environment().debug_fields()
    assert fields["GITHUB_RUN_ID"] == 1658821493
    assert fields["ZEKLIN_SERVER_URL"] == DEFAULT_SERVER_URL
    assert "WORKFLOW_URL" in fields
