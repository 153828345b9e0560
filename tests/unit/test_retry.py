from __future__ import annotations

from unittest.mock import AsyncMock, call

import pytest

from zeklin.retry import with_retry


class Flaky:
    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError(f"attempt {self.calls} failed")
        return "ok"


@pytest.mark.anyio
async def test_succeeds_on_fourth_attempt(monkeypatch: pytest.MonkeyPatch) -> None:
    sleep_mock = AsyncMock()
    monkeypatch.setattr("zeklin.retry.asyncio.sleep", sleep_mock)
    operation = Flaky(failures=3)

    assert await with_retry(operation) == "ok"
    assert operation.calls == 4
    assert sleep_mock.await_args_list == [call(1.0)] * 3


@pytest.mark.anyio
async def test_gives_up_after_four_attempts(monkeypatch: pytest.MonkeyPatch) -> None:
    sleep_mock = AsyncMock()
    monkeypatch.setattr("zeklin.retry.asyncio.sleep", sleep_mock)
    operation = Flaky(failures=100)

    with pytest.raises(ConnectionError, match="attempt 4 failed"):
        await with_retry(operation)
    assert operation.calls == 4
    assert sleep_mock.await_count == 3


@pytest.mark.anyio
async def test_no_sleep_on_first_success(monkeypatch: pytest.MonkeyPatch) -> None:
    sleep_mock = AsyncMock()
    monkeypatch.setattr("zeklin.retry.asyncio.sleep", sleep_mock)

    assert await with_retry(Flaky(failures=0)) == "ok"
    sleep_mock.assert_not_awaited()


@pytest.mark.anyio
async def test_unlisted_errors_propagate_immediately(monkeypatch: pytest.MonkeyPatch) -> None:
    sleep_mock = AsyncMock()
    monkeypatch.setattr("zeklin.retry.asyncio.sleep", sleep_mock)
    operation = Flaky(failures=1)

    with pytest.raises(ConnectionError):
        await with_retry(operation, retry_on=(TimeoutError,))
    assert operation.calls == 1
    sleep_mock.assert_not_awaited()


@pytest.mark.anyio
async def test_custom_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    sleep_mock = AsyncMock()
    monkeypatch.setattr("zeklin.retry.asyncio.sleep", sleep_mock)
    operation = Flaky(failures=5)

    with pytest.raises(ConnectionError):
        await with_retry(operation, attempts=2, spacing=0.5)
    assert operation.calls == 2
    sleep_mock.assert_awaited_once_with(0.5)
