"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

AI service settings and explicit environment loading.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import DEFAULT_REQUEST_CONFIG, RequestConfig
from .types import ProviderName
from .utils import env_bool, env_float, env_int, env_str


def _default_health_url(base_url: str) -> str:
    return base_url.rstrip("/") + "/health"


@dataclass(frozen=True, slots=True)
class ProviderEndpoint:
    """Network location and credentials for one upstream provider."""

    base_url: str
    health_url: str | None = None
    api_key: str | None = None
    requires_api_key: bool = False

    @property
    def resolved_health_url(self) -> str:
        return self.health_url or _default_health_url(self.base_url)


@dataclass(frozen=True, slots=True)
class AIServiceSettings:
    """Explicit settings used by providers, cache and the orchestrator."""

    primary: ProviderEndpoint = ProviderEndpoint(base_url="http://localhost:4001/api/groq")
    secondary: ProviderEndpoint = ProviderEndpoint(
        base_url="http://localhost:5174/api/gemini",
        requires_api_key=True,
    )
    request_defaults: RequestConfig = DEFAULT_REQUEST_CONFIG

    retry_base_delay_s: float = 1.0
    cache_ttl_s: float = 3600.0
    cache_backend: str = "inmemory"
    redis_url: str = "redis://localhost:6379/0"
    storage_path: Path | None = None

    @staticmethod
    def from_env() -> "AIServiceSettings":
        """Load settings from `LEARNLOOP_*` environment variables."""
        primary_url = env_str("LEARNLOOP_PRIMARY_URL", "http://localhost:4001/api/groq")
        secondary_url = env_str("LEARNLOOP_SECONDARY_URL", "http://localhost:5174/api/gemini")
        storage_path = env_str("LEARNLOOP_STORAGE_PATH", "~/.learnloop/storage.json")
        return AIServiceSettings(
            primary=ProviderEndpoint(
                base_url=primary_url,
                health_url=env_str("LEARNLOOP_PRIMARY_HEALTH_URL"),
                api_key=env_str("LEARNLOOP_PRIMARY_API_KEY"),
                requires_api_key=env_bool("LEARNLOOP_PRIMARY_REQUIRES_API_KEY", False),
            ),
            secondary=ProviderEndpoint(
                base_url=secondary_url,
                health_url=env_str("LEARNLOOP_SECONDARY_HEALTH_URL"),
                api_key=env_str("LEARNLOOP_SECONDARY_API_KEY"),
                requires_api_key=env_bool("LEARNLOOP_SECONDARY_REQUIRES_API_KEY", True),
            ),
            request_defaults=RequestConfig(
                preferred_provider=env_str("LEARNLOOP_PREFERRED_PROVIDER", "primary"),
                enable_fallback=env_bool("LEARNLOOP_ENABLE_FALLBACK", True),
                max_retries=env_int("LEARNLOOP_MAX_RETRIES", 3),
                timeout_ms=env_int("LEARNLOOP_TIMEOUT_MS", 30_000),
                cache_responses=env_bool("LEARNLOOP_CACHE_RESPONSES", True),
            ),
            retry_base_delay_s=env_float("LEARNLOOP_RETRY_BASE_DELAY_S", 1.0),
            cache_ttl_s=env_float("LEARNLOOP_CACHE_TTL_S", 3600.0),
            cache_backend=env_str("LEARNLOOP_CACHE_BACKEND", "inmemory").lower(),
            redis_url=env_str("LEARNLOOP_REDIS_URL", "redis://localhost:6379/0"),
            storage_path=Path(storage_path).expanduser() if storage_path else None,
        )

    def endpoint(self, provider: ProviderName | str) -> ProviderEndpoint:
        if ProviderName(provider) is ProviderName.PRIMARY:
            return self.primary
        return self.secondary
