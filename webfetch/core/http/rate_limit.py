"""
Rate limiter construction and permit acquisition.

aiolimiter's AsyncLimiter is a leaky bucket: it admits ``max_rate``
acquisitions per ``time_period`` and drains continuously. Sizing it as
``AsyncLimiter(burst, burst * interval)`` gives a bucket that holds ``burst``
permits and frees one every ``interval`` seconds.
"""

import asyncio
import time
from typing import Optional

from aiolimiter import AsyncLimiter

from webfetch.core.http.exceptions import RateLimitWaitError
from webfetch.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_RATE_LIMIT_INTERVAL = 1.0  # seconds per permit
DEFAULT_RATE_LIMIT_BURST = 5


def new_rate_limiter(
    interval: float = DEFAULT_RATE_LIMIT_INTERVAL,
    burst: int = DEFAULT_RATE_LIMIT_BURST
) -> AsyncLimiter:
    """
    Create a limiter that allows ``burst`` immediate calls, then one per ``interval``.

    Args:
        interval: Seconds between permits once the burst is spent
        burst: Permits available up front

    Returns:
        AsyncLimiter instance

    Raises:
        ValueError: If interval or burst is not positive
    """
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")
    if burst <= 0:
        raise ValueError(f"burst must be positive, got {burst}")

    return AsyncLimiter(max_rate=burst, time_period=burst * interval)


async def wait_for_permit(
    limiter: AsyncLimiter,
    timeout: Optional[float] = None,
    url: Optional[str] = None
) -> None:
    """
    Block until the limiter hands out one permit.

    Args:
        limiter: Limiter to acquire from
        timeout: Seconds to wait before giving up (None waits indefinitely)
        url: URL the permit is for, attached to the error (optional)

    Raises:
        RateLimitWaitError: If no permit became available within timeout
    """
    if not limiter.has_capacity():
        logger.debug(f"Rate limiter exhausted, waiting for a permit (timeout={timeout})")

    started = time.monotonic()
    try:
        await asyncio.wait_for(limiter.acquire(), timeout)
    except asyncio.TimeoutError as e:
        raise RateLimitWaitError(
            message=f"error waiting on rate limiter: no permit after {time.monotonic() - started:.3f}s",
            url=url,
            original_error=e
        )
