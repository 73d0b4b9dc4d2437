"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/inmemory.py.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from .base import DEFAULT_CACHE_TTL_S, CacheEntry, ResponseCacheBackend


@dataclass(slots=True)
class InMemoryResponseCache(ResponseCacheBackend):
    """Process-local response cache with read-time TTL and no eviction."""

    ttl_s: float = DEFAULT_CACHE_TTL_S
    clock: Callable[[], float] = field(default=time.time, repr=False)
    backend_id: str = "inmemory"
    _rows: dict[str, CacheEntry] = field(default_factory=dict, init=False, repr=False)

    async def get(self, key: str) -> CacheEntry | None:
        row = self._rows.get(key)
        if row is None:
            return None
        if not row.is_fresh(self.clock(), self.ttl_s):
            return None
        return row

    async def set(self, key: str, text: str) -> None:
        self._rows[key] = CacheEntry(text=text, timestamp=self.clock())

    async def clear(self) -> None:
        self._rows.clear()

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, key: object) -> bool:
        return key in self._rows
