"""
Retry Helper

Re-invokes an async operation with a fixed delay between attempts.
"""

# Standard library
import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

# Configure logging
logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = 2,
    delay_seconds: float = 1.0,
    should_retry: Optional[Callable[[Exception], bool]] = None,
) -> T:
    """
    Runs `operation` until it succeeds or the attempt budget is spent.

    The whole operation is re-invoked from scratch on every attempt. The
    delay is fixed; there is no backoff growth.

    Args:
        operation: Zero-argument coroutine function.
        max_attempts: Total number of attempts, including the first one.
        delay_seconds: Pause between attempts.
        should_retry: Predicate deciding whether a failure is worth another
            attempt. When omitted every exception is retried.

    Returns:
        The operation's result.

    Raises:
        ValueError: If max_attempts is lower than 1.
        Exception: The last failure, unchanged, once retries are exhausted or
            `should_retry` rejects it.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except Exception as exc:
            if attempt >= max_attempts:
                raise
            if should_retry is not None and not should_retry(exc):
                raise
            logger.warning(
                "Attempt %d/%d failed (%s: %s); retrying in %.1fs",
                attempt,
                max_attempts,
                type(exc).__name__,
                exc,
                delay_seconds,
            )
            await asyncio.sleep(delay_seconds)

    # Unreachable: the loop either returns or raises.
    raise AssertionError("retry_async exhausted without result")
