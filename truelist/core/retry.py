"""Retry utilities for calls to the verification API.

The Truelist client retries quickly a couple of times with a fixed delay
between attempts.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

from truelist.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    delay: float = 0.1  # Seconds between attempts
    retryable_exceptions: tuple[type[Exception], ...] = field(default_factory=lambda: (Exception,))


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
    operation_name: str = "operation",
) -> T:
    """
    Execute async function, retrying on the configured exceptions.

    Exceptions not listed in ``config.retryable_exceptions`` propagate
    immediately without a retry.

    Args:
        fn: Async function to execute (no arguments)
        config: Retry configuration, uses defaults if not provided
        operation_name: Name for logging purposes

    Returns:
        Result of fn()

    Raises:
        Exception: The last exception if all retries are exhausted
    """
    config = config or RetryConfig()
    attempts = max(config.max_attempts, 1)

    for attempt in range(attempts):
        try:
            return await fn()
        except config.retryable_exceptions as e:
            if attempt + 1 == attempts:
                logger.bind(
                    operation=operation_name,
                    attempts=attempts,
                    error=str(e),
                ).warning("retry_exhausted")
                raise

            logger.bind(
                operation=operation_name,
                attempt=attempt + 1,
                max_attempts=attempts,
                delay_seconds=config.delay,
                error=str(e),
            ).debug("retry_attempt")
            await asyncio.sleep(config.delay)

    raise RuntimeError("Unexpected state in retry_with_backoff")
