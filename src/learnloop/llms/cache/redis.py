"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/redis.py.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable

from .base import DEFAULT_CACHE_TTL_S, CacheEntry, ResponseCacheBackend

logger = logging.getLogger("learnloop.llms.cache.redis")


def _decode_row(blob: str) -> CacheEntry | None:
    try:
        row = json.loads(blob)
    except (ValueError, TypeError):
        return None
    if not isinstance(row, dict):
        return None
    text = row.get("text")
    timestamp = row.get("timestamp")
    if not isinstance(text, str) or not text:
        return None
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        return None
    return CacheEntry(text=text, timestamp=float(timestamp))


class RedisResponseCache(ResponseCacheBackend):
    """
    Redis-backed response cache for multi-process deployments.

    Rows carry no Redis expiry; freshness is decided on read.
    """

    backend_id = "redis"

    def __init__(
        self,
        redis_client,
        *,
        prefix: str = "learnloop:ai:cache",
        ttl_s: float = DEFAULT_CACHE_TTL_S,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._redis = redis_client
        self._prefix = prefix.rstrip(":")
        self.ttl_s = ttl_s
        self.clock = clock

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisResponseCache":
        import redis.asyncio as redis

        return cls(redis.from_url(url, decode_responses=True), **kwargs)

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def get(self, key: str) -> CacheEntry | None:
        blob = await self._redis.get(self._key(key))
        if blob is None:
            return None
        entry = _decode_row(blob)
        if entry is None:
            logger.warning("Ignoring malformed cache row for key prefix %s", self._prefix)
            return None
        if not entry.is_fresh(self.clock(), self.ttl_s):
            return None
        return entry

    async def set(self, key: str, text: str) -> None:
        payload = {"text": text, "timestamp": self.clock()}
        await self._redis.set(self._key(key), json.dumps(payload, ensure_ascii=True))

    async def clear(self) -> None:
        keys = [k async for k in self._redis.scan_iter(match=f"{self._prefix}:*")]
        if keys:
            await self._redis.delete(*keys)
