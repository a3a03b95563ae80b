"""Retry with exponential backoff for boundary I/O (listing store, campus API)."""

from __future__ import annotations

import random
import time
from typing import Callable, Iterable, Type, TypeVar

from loguru import logger

T = TypeVar("T")


def _compute_backoff(attempt: int, base_delay: float, factor: float, jitter: float) -> float:
    delay = base_delay * (factor ** attempt)
    if jitter:
        delay += random.uniform(0, jitter)
    return delay


def retry_with_backoff(
    fn: Callable[[], T],
    *,
    retries: int = 2,
    base_delay: float = 0.5,
    factor: float = 2.0,
    jitter: float = 0.1,
    retry_exceptions: Iterable[Type[BaseException]] = (Exception,),
) -> T:
    """
    Call ``fn`` up to ``retries`` times, sleeping between attempts.
    The last failure is re-raised.
    """
    attempts = max(1, retries)
    exc_types = tuple(retry_exceptions)
    for attempt in range(attempts):
        try:
            return fn()
        except exc_types as e:
            if attempt >= attempts - 1:
                raise
            delay = _compute_backoff(attempt, base_delay, factor, jitter)
            logger.debug("Attempt {} failed ({!s}); retrying in {:.2f}s", attempt + 1, e, delay)
            time.sleep(delay)
    raise AssertionError("unreachable")
