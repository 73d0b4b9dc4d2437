"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Small helpers shared by runtime modules.
"""

from __future__ import annotations

import asyncio
import os
import uuid
from collections.abc import Coroutine
from typing import Any, TypeVar

from .errors import AIConfigurationError

T = TypeVar("T")


def new_id(prefix: str = "user") -> str:
    return f"{prefix}_{uuid.uuid4().hex}"


def backoff_delay(attempt: int, base_s: float, factor: float = 1.5) -> float:
    """Return `base_s * factor ** attempt` for zero-based attempt index."""
    return base_s * (factor ** max(0, attempt))


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Run coroutine to completion from synchronous code."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    coro.close()
    raise RuntimeError(
        "run_sync() cannot be called from a running event loop; await the coroutine instead"
    )


def env_str(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def env_bool(name: str, default: bool) -> bool:
    raw = env_str(name)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    raise AIConfigurationError(f"{name} must be a boolean, got '{raw}'")


def env_int(name: str, default: int) -> int:
    raw = env_str(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise AIConfigurationError(f"{name} must be an integer, got '{raw}'") from e


def env_float(name: str, default: float) -> float:
    raw = env_str(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise AIConfigurationError(f"{name} must be a number, got '{raw}'") from e
