"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/__init__.py.
"""

from .client import AIOrchestrator
from .contracts import RetryPolicy
from .health import HealthChecker
from .retry import call_with_retry
from .timeouts import await_with_timeout

__all__ = [
    "AIOrchestrator",
    "RetryPolicy",
    "HealthChecker",
    "call_with_retry",
    "await_with_timeout",
]
