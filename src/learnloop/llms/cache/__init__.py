"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/__init__.py.
"""

from .base import DEFAULT_CACHE_TTL_S, CacheEntry, ResponseCacheBackend, cache_key
from .inmemory import InMemoryResponseCache
from .redis import RedisResponseCache
from .registry import (
    ResponseCacheError,
    create_response_cache,
    list_response_cache_backends,
    register_response_cache_backend,
)

__all__ = [
    "DEFAULT_CACHE_TTL_S",
    "CacheEntry",
    "ResponseCacheBackend",
    "cache_key",
    "InMemoryResponseCache",
    "RedisResponseCache",
    "ResponseCacheError",
    "register_response_cache_backend",
    "create_response_cache",
    "list_response_cache_backends",
]
