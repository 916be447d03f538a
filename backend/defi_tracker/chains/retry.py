"""
Bounded retry with exponential backoff for async RPC work.
"""
import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RetryConfig:
    """
    Configuration for retry behavior.

    `max_retries` counts retries after the first attempt, so a call is
    attempted at most `max_retries + 1` times.
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 5.0,
        exponential_base: float = 2.0,
    ) -> None:
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def get_delay(self, attempt: int) -> float:
        """
        Delay before the retry that follows a failed `attempt` (0-indexed).

        Args:
            attempt: Number of the attempt that just failed

        Returns:
            Delay in seconds, capped at `max_delay`
        """
        delay = self.base_delay * (self.exponential_base ** attempt)
        return min(delay, self.max_delay)


async def call_with_retry(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    config: RetryConfig | None = None,
    no_retry: tuple[type[BaseException], ...] = (),
    label: str = "",
    **kwargs: Any,
) -> T:
    """
    Await `func(*args, **kwargs)`, retrying on exceptions.

    Args:
        func: Coroutine function to call
        config: Retry configuration (defaults to 3 retries, 1s..5s backoff)
        no_retry: Exception types that are raised immediately
        label: Text used in log messages

    Returns:
        The first successful result

    Raises:
        Exception: The last exception once all attempts are exhausted
    """
    if config is None:
        config = RetryConfig()

    last_exception: BaseException | None = None

    for attempt in range(config.max_attempts):
        try:
            return await func(*args, **kwargs)
        except no_retry:
            raise
        except Exception as e:
            last_exception = e

            # Don't wait after the last attempt
            if attempt == config.max_retries:
                break

            delay = config.get_delay(attempt)
            logger.warning(
                f"{label or func.__name__} failed (attempt {attempt + 1}/{config.max_attempts}): "
                f"{e!r}; retrying in {delay:.1f}s"
            )
            await asyncio.sleep(delay)

    raise last_exception  # type: ignore[misc]
