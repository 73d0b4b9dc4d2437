"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: builder.py.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

from .cache.base import ResponseCacheBackend
from .cache.redis import RedisResponseCache
from .cache.registry import create_response_cache
from .providers.contracts import ProviderClient
from .providers.http import HTTPProviderClient
from .runtime.client import AIOrchestrator
from .runtime.retry import SleepFn
from .session import (
    ApiKeyStore,
    ConversationState,
    InMemoryStorage,
    JSONFileStorage,
    KeyValueStorage,
    UserIdentityStore,
)
from .settings import AIServiceSettings
from .types import ProviderName


class AIServiceBuilder:
    """Builder for assembling an `AIOrchestrator` from settings and overrides."""

    def __init__(self, settings: AIServiceSettings | None = None) -> None:
        self._settings = settings or AIServiceSettings.from_env()
        self._providers: dict[ProviderName, ProviderClient] = {}
        self._cache: ResponseCacheBackend | str | None = None
        self._storage: KeyValueStorage | None = None
        self._sleep: SleepFn | None = None

    @property
    def current_settings(self) -> AIServiceSettings:
        return self._settings

    def settings(self, settings: AIServiceSettings) -> "AIServiceBuilder":
        """Replace builder settings with an explicit `AIServiceSettings` instance."""
        self._settings = settings
        return self

    def request_defaults(self, **fields: Any) -> "AIServiceBuilder":
        """Adjust the process-wide default request config the orchestrator starts with."""
        merged = self._settings.request_defaults.merged(fields)
        self._settings = replace(self._settings, request_defaults=merged)
        return self

    def retry_base_delay(self, seconds: float) -> "AIServiceBuilder":
        self._settings = replace(self._settings, retry_base_delay_s=seconds)
        return self

    def provider_client(
        self,
        name: ProviderName | str,
        client: ProviderClient,
    ) -> "AIServiceBuilder":
        """Use an explicit client instead of the HTTP client built from settings."""
        self._providers[ProviderName(name)] = client
        return self

    def cache(self, backend: ResponseCacheBackend | str) -> "AIServiceBuilder":
        self._cache = backend
        return self

    def storage(self, storage: KeyValueStorage) -> "AIServiceBuilder":
        self._storage = storage
        return self

    def sleep(self, sleep: SleepFn) -> "AIServiceBuilder":
        """Override the backoff sleep (tests use a recording fake)."""
        self._sleep = sleep
        return self

    def _resolve_storage(self) -> KeyValueStorage:
        if self._storage is not None:
            return self._storage
        path: Path | None = self._settings.storage_path
        if path is None:
            return InMemoryStorage()
        return JSONFileStorage(path)

    def _resolve_cache(self) -> ResponseCacheBackend:
        backend = self._cache if self._cache is not None else self._settings.cache_backend
        if backend == "redis":
            return RedisResponseCache.from_url(
                self._settings.redis_url,
                ttl_s=self._settings.cache_ttl_s,
            )
        return create_response_cache(backend, ttl_s=self._settings.cache_ttl_s)

    def build(self) -> AIOrchestrator:
        storage = self._resolve_storage()
        providers: dict[ProviderName, ProviderClient] = {}
        api_keys: dict[ProviderName, ApiKeyStore] = {}
        for name in ProviderName:
            endpoint = self._settings.endpoint(name)
            api_keys[name] = ApiKeyStore(storage, name, fallback=endpoint.api_key)
            explicit = self._providers.get(name)
            if explicit is not None:
                providers[name] = explicit
                continue
            providers[name] = HTTPProviderClient.from_endpoint(
                name,
                endpoint,
                api_key=api_keys[name],
            )

        return AIOrchestrator(
            providers=providers,
            cache=self._resolve_cache(),
            conversation=ConversationState(UserIdentityStore(storage)),
            config=self._settings.request_defaults,
            retry_base_delay_s=self._settings.retry_base_delay_s,
            sleep=self._sleep,
            api_keys=api_keys,
        )
