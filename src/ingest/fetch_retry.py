"""Capped exponential backoff for trends queries.

This module retries transient query failures with jittered delays
so one rate-limit response does not cost a keyword its whole cycle.
"""

from __future__ import annotations

import random
import time
from typing import Callable, TypeVar

from core.constants import DEFAULT_RETRY_JITTER_FRACTION
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)

T = TypeVar("T")


def exponential_backoff(attempt: int, base_seconds: float, cap_seconds: float) -> float:
    """Return the un-jittered delay after a failed attempt (1-based)."""
    return min(cap_seconds, base_seconds * (2 ** max(0, attempt - 1)))


def with_retries(
    func: Callable[[], T],
    max_attempts: int,
    base_seconds: float,
    cap_seconds: float,
    retry_on: tuple[type[BaseException], ...],
    jitter_fraction: float = DEFAULT_RETRY_JITTER_FRACTION,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``func`` until it succeeds or attempts run out.

    Args:
        func: Zero-argument callable to run.
        max_attempts: Total attempts including the first one.
        base_seconds: Delay after the first failure.
        cap_seconds: Upper bound for any single delay.
        retry_on: Exception types treated as transient.
        jitter_fraction: Relative jitter applied to each delay.
        sleep: Sleep function, injectable for tests.

    Returns:
        Result of the first successful call.

    Raises:
        Exception: The last transient error once attempts are exhausted,
            or any non-transient error immediately.
    """
    attempt = 1
    while True:
        try:
            return func()
        except retry_on as error:
            if attempt >= max_attempts:
                raise
            delay = exponential_backoff(attempt, base_seconds, cap_seconds)
            jitter = delay * jitter_fraction * (2 * random.random() - 1)
            delay = max(0.0, delay + jitter)
            _LOGGER.warning(
                "trend_query_retry",
                attempt=attempt,
                max_attempts=max_attempts,
                delay_seconds=round(delay, 3),
                error=str(error),
            )
            sleep(delay)
            attempt += 1
