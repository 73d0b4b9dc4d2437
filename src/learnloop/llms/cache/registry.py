"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/registry.py.
"""

from __future__ import annotations

from threading import Lock

from .base import DEFAULT_CACHE_TTL_S, ResponseCacheBackend
from .inmemory import InMemoryResponseCache

_REGISTRY: dict[str, ResponseCacheBackend] = {}
_LOCK = Lock()


class ResponseCacheError(RuntimeError):
    """Raised when cache backend resolution fails."""


def register_response_cache_backend(
    backend: ResponseCacheBackend,
    *,
    overwrite: bool = False,
) -> None:
    """Register one cache backend by `backend_id`."""
    key = backend.backend_id.strip().lower()
    if not key:
        raise ResponseCacheError("Cache backend id must be non-empty")

    with _LOCK:
        if key in _REGISTRY and not overwrite:
            raise ResponseCacheError(f"Cache backend already registered: {key}")
        _REGISTRY[key] = backend


def create_response_cache(
    backend: str | ResponseCacheBackend | None = None,
    *,
    ttl_s: float = DEFAULT_CACHE_TTL_S,
) -> ResponseCacheBackend:
    """
    Resolve cache backend from id/instance/default.

    `None` and `"inmemory"` without a registered instance build a fresh
    `InMemoryResponseCache` so each orchestrator owns its own store.
    """
    if backend is None:
        return InMemoryResponseCache(ttl_s=ttl_s)

    if not isinstance(backend, str):
        return backend

    key = backend.strip().lower()
    with _LOCK:
        resolved = _REGISTRY.get(key)
    if resolved is not None:
        return resolved
    if key == "inmemory":
        return InMemoryResponseCache(ttl_s=ttl_s)
    raise ResponseCacheError(f"Unknown response cache backend '{backend}'")


def list_response_cache_backends() -> list[str]:
    """List registered cache backend ids."""
    with _LOCK:
        return sorted(_REGISTRY.keys())
