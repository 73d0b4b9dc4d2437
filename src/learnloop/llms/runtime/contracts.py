"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Typed runtime policies for AI request execution.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import AIConfigurationError


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Bounded retry with exponential backoff and no jitter."""

    max_retries: int = 3
    base_delay_s: float = 1.0
    backoff_factor: float = 1.5

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise AIConfigurationError("max_retries must be >= 0")
        if self.base_delay_s < 0:
            raise AIConfigurationError("base_delay_s must be >= 0")

    @property
    def total_attempts(self) -> int:
        return self.max_retries + 1
