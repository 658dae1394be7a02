"""Retry with exponential backoff for outbound side effects."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

BACKOFF_FACTOR = 1.5


def backoff_delay(base_delay: float, attempt: int) -> float:
    """Delay before retry number ``attempt + 1``."""
    return base_delay * BACKOFF_FACTOR ** attempt


def call_with_retry(
    func: Callable[[], T],
    *,
    retries: int = 3,
    base_delay: float = 1.5,
    label: str = "call",
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run ``func``, retrying up to ``retries`` times; the last error propagates."""
    attempt = 0
    while True:
        try:
            return func()
        except Exception as exc:
            if attempt >= retries:
                raise
            delay = backoff_delay(base_delay, attempt)
            logger.warning("%s failed (attempt %d/%d): %s; retrying in %.1fs", label, attempt + 1, retries + 1, exc, delay)
            sleep(delay)
            attempt += 1
