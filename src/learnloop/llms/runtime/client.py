"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/client.py.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from ..cache.base import CacheEntry, ResponseCacheBackend, cache_key
from ..cache.registry import create_response_cache
from ..config import DEFAULT_REQUEST_CONFIG, RequestConfig, RequestConfigOverride
from ..errors import AggregateFailureError, AIConfigurationError
from ..providers.contracts import ProviderClient
from ..session import ApiKeyStore, ConversationState
from ..types import ProviderHealth, ProviderName
from .contracts import RetryPolicy
from .health import HealthChecker
from .retry import SleepFn, call_with_retry

logger = logging.getLogger("learnloop.llms.runtime.client")

OverrideLike = RequestConfigOverride | Mapping[str, Any] | None


class AIOrchestrator:
    """
    Entry point coordinating cache, retry and fallback across two providers.

    The orchestrator owns its process-wide default config, response cache and
    conversation state. Nothing here is locked: concurrent `fetch_ai` calls
    may interleave cache writes (last write wins) and history appends.
    """

    def __init__(
        self,
        *,
        providers: Mapping[ProviderName | str, ProviderClient],
        cache: ResponseCacheBackend | None = None,
        conversation: ConversationState | None = None,
        config: RequestConfig | None = None,
        retry_base_delay_s: float = 1.0,
        health_checker: HealthChecker | None = None,
        sleep: SleepFn | None = None,
        api_keys: Mapping[ProviderName, ApiKeyStore] | None = None,
    ) -> None:
        self._providers: dict[ProviderName, ProviderClient] = {
            ProviderName(name): client for name, client in providers.items()
        }
        missing = [p.value for p in ProviderName if p not in self._providers]
        if missing:
            raise AIConfigurationError(
                f"Missing provider clients: {', '.join(missing)}"
            )
        self._cache = cache if cache is not None else create_response_cache()
        self._conversation = conversation if conversation is not None else ConversationState()
        self._config = config or DEFAULT_REQUEST_CONFIG
        self._retry_base_delay_s = retry_base_delay_s
        self._health = health_checker or HealthChecker(self._providers)
        self._sleep = sleep or asyncio.sleep
        self._api_keys = dict(api_keys or {})

    @property
    def cache(self) -> ResponseCacheBackend:
        return self._cache

    @property
    def conversation(self) -> ConversationState:
        return self._conversation

    def provider(self, name: ProviderName | str) -> ProviderClient:
        return self._providers[ProviderName(name)]

    def get_config(self) -> RequestConfig:
        """Return the current process-wide default config."""
        return self._config

    def configure(self, override: OverrideLike = None, **fields: Any) -> RequestConfig:
        """Merge a partial update into the process-wide default config."""
        updated = self._config.merged(override)
        if fields:
            updated = updated.merged(fields)
        self._config = updated
        return updated

    def effective_config(self, override: OverrideLike = None) -> RequestConfig:
        return self._config.merged(override)

    async def fetch_ai(self, prompt: str, override: OverrideLike = None) -> str:
        """
        Return generated text for `prompt`.

        Order of work: cache lookup (when enabled), then the preferred provider
        under its retry budget, then the other provider when fallback is on.
        Cache and history are only written after a success.
        A failing cache backend is logged and behaves as a miss.

        Raises:
            AggregateFailureError: every attempted provider failed.
        """
        config = self.effective_config(override)
        key = cache_key(prompt)

        if config.cache_responses:
            entry = await self._cache_lookup(key)
            if entry is not None:
                logger.info("Using cached AI response (%d chars prompt)", len(key))
                return entry.text

        context = self._conversation.context(
            include_history=config.include_history,
            conversation_id=config.conversation_id,
        )
        policy = RetryPolicy(
            max_retries=config.max_retries,
            base_delay_s=self._retry_base_delay_s,
        )

        errors: list[tuple[ProviderName, Exception]] = []
        for index, name in enumerate(config.provider_order):
            if index > 0:
                logger.info("Falling back to %s provider", name.value)
            provider = self._providers[name]
            try:
                text = await call_with_retry(
                    lambda provider=provider: provider.generate(
                        prompt, config.timeout_ms, context=context
                    ),
                    policy=policy,
                    label=f"{name.value} provider",
                    sleep=self._sleep,
                )
            except Exception as error:
                logger.error("AI provider %s failed: %s", name.value, error)
                errors.append((name, error))
                continue

            if config.cache_responses:
                await self._cache_store(key, text)
            self._conversation.add_message("user", prompt)
            self._conversation.add_message("assistant", text)
            return text

        raise AggregateFailureError(errors)

    async def _cache_lookup(self, key: str) -> CacheEntry | None:
        try:
            return await self._cache.get(key)
        except Exception as error:
            logger.warning("Response cache lookup failed; treating as miss: %s", error)
            return None

    async def _cache_store(self, key: str, text: str) -> None:
        try:
            await self._cache.set(key, text)
        except Exception as error:
            logger.warning("Response cache write failed: %s", error)

    async def check_health(self) -> ProviderHealth:
        return await self._health.check()

    async def auto_select_best_provider(self) -> ProviderName:
        """
        Point the default preference at the first healthy provider.

        When neither provider is healthy the preference stays as it was.
        """
        health = await self.check_health()
        for name in (ProviderName.PRIMARY, ProviderName.SECONDARY):
            if health.is_healthy(name):
                self.configure(preferred_provider=name)
                logger.info("Auto-selected %s as preferred AI provider", name.value)
                return name
        logger.warning(
            "No healthy AI providers detected; keeping %s as preferred",
            self._config.preferred_provider.value,
        )
        return self._config.preferred_provider

    def set_api_key(self, name: ProviderName | str, key: str) -> None:
        """Persist an API key used by the given provider from now on."""
        store = self._api_keys.get(ProviderName(name))
        if store is None:
            raise AIConfigurationError(
                f"Provider {ProviderName(name).value} has no API key storage configured"
            )
        store.set(key)

    async def clear_cache(self) -> None:
        await self._cache.clear()
        logger.info("AI response cache cleared")

    async def aclose(self) -> None:
        for provider in self._providers.values():
            await provider.aclose()
