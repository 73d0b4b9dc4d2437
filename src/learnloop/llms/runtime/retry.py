"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/retry.py.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ..utils import backoff_delay
from .contracts import RetryPolicy

T = TypeVar("T")

logger = logging.getLogger("learnloop.llms.runtime.retry")

SleepFn = Callable[[float], Awaitable[None]]


async def call_with_retry(
    fn: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy,
    sleep: SleepFn = asyncio.sleep,
    label: str = "call",
) -> T:
    """
    Execute callable under bounded retry policy.

    Attempt `i` failing is followed by a `base_delay_s * factor**i` pause when
    attempts remain. Once the budget is spent the last error is re-raised as is.
    """
    attempts = policy.total_attempts
    for attempt in range(attempts):
        try:
            return await fn()
        except Exception as error:
            logger.warning(
                "%s attempt %d/%d failed: %s", label, attempt + 1, attempts, error
            )
            if attempt + 1 >= attempts:
                raise
            await sleep(
                backoff_delay(attempt, policy.base_delay_s, policy.backoff_factor)
            )
    raise RuntimeError("Retry loop exhausted")
