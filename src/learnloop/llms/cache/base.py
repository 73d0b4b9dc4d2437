"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/base.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

DEFAULT_CACHE_TTL_S = 3600.0


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """One cached response keyed by the trimmed prompt."""

    text: str
    timestamp: float

    def is_fresh(self, now: float, ttl_s: float) -> bool:
        return now - self.timestamp < ttl_s


def cache_key(prompt: str) -> str:
    """Fingerprint used as cache key: the prompt with outer whitespace trimmed."""
    return prompt.strip()


class ResponseCacheBackend(Protocol):
    """
    Protocol implemented by response cache backends.

    `get` returns `None` both for absent and for expired rows. Expired rows
    stay in storage until overwritten by `set` or dropped by `clear`.
    """

    backend_id: str

    async def get(self, key: str) -> CacheEntry | None: ...

    async def set(self, key: str, text: str) -> None: ...

    async def clear(self) -> None: ...
