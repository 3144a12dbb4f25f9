from __future__ import annotations

import logging
from typing import Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .errors import is_retryable

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def call_with_retry(
    func: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 3,
    initial_s: float = 1.0,
    max_s: float = 10.0,
) -> T:
    """Run ``func`` and retry transient LLMErrors with exponential backoff."""
    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=initial_s, min=initial_s, max=max_s),
        retry=retry_if_exception(is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            return await func()
    raise RuntimeError("retry loop exited without a result")  # pragma: no cover
