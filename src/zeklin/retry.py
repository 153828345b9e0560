from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from .constants import RetryPolicy
from .logging import ZeklinLogger

T = TypeVar("T")


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    attempts: int = RetryPolicy.MAX_ATTEMPTS,
    spacing: float = RetryPolicy.SPACING_SECONDS,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    description: str = "operation",
    logger: Optional[ZeklinLogger] = None,
) -> T:
    """
    Await `operation` up to `attempts` times, sleeping `spacing` seconds between tries.

    Fixed spacing, no jitter. The last failure is re-raised once attempts are
    exhausted; exceptions outside `retry_on` propagate immediately.
    """
    if attempts < 1:
        raise ValueError("attempts must be >= 1")

    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except retry_on as exc:
            if attempt == attempts:
                if logger:
                    logger.debug(
                        f"{description} failed, retries exhausted",
                        attempt=attempt,
                        error=str(exc),
                    )
                raise
            if logger:
                logger.warning(
                    f"{description} failed, retrying",
                    attempt=attempt,
                    max_attempts=attempts,
                    error=str(exc),
                )
        await asyncio.sleep(spacing)

    raise AssertionError("unreachable")
