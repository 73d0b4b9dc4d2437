"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

AI request orchestration: two interchangeable text-generation providers behind
one `fetch_ai` call with retry, fallback, caching and health-based selection.
"""

from __future__ import annotations

from .builder import AIServiceBuilder
from .cache import (
    CacheEntry,
    InMemoryResponseCache,
    RedisResponseCache,
    ResponseCacheBackend,
    ResponseCacheError,
    create_response_cache,
    list_response_cache_backends,
    register_response_cache_backend,
)
from .config import DEFAULT_REQUEST_CONFIG, RequestConfig, RequestConfigOverride
from .errors import (
    AggregateFailureError,
    AIConfigurationError,
    AIServiceError,
    InvalidResponseError,
    ProviderError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)
from .providers import HTTPProviderClient, ProviderClient
from .runtime import AIOrchestrator, HealthChecker, RetryPolicy, call_with_retry
from .service import (
    auto_select_best_ai_service,
    check_ai_services_health,
    clear_response_cache,
    configure_ai_service,
    fetch_ai,
    fetch_ai_sync,
    get_ai_service_config,
    get_default_orchestrator,
    set_default_orchestrator,
    set_provider_api_key,
)
from .session import (
    ApiKeyStore,
    ConversationState,
    InMemoryStorage,
    JSONFileStorage,
    KeyValueStorage,
    UserIdentityStore,
)
from .settings import AIServiceSettings, ProviderEndpoint
from .types import ConversationMessage, GenerationContext, ProviderHealth, ProviderName

__all__ = [
    "AIOrchestrator",
    "AIServiceBuilder",
    "AIServiceSettings",
    "ProviderEndpoint",
    "RequestConfig",
    "RequestConfigOverride",
    "DEFAULT_REQUEST_CONFIG",
    "ProviderName",
    "ProviderHealth",
    "ConversationMessage",
    "GenerationContext",
    "ProviderClient",
    "HTTPProviderClient",
    "RetryPolicy",
    "call_with_retry",
    "HealthChecker",
    "CacheEntry",
    "ResponseCacheBackend",
    "InMemoryResponseCache",
    "RedisResponseCache",
    "ResponseCacheError",
    "create_response_cache",
    "register_response_cache_backend",
    "list_response_cache_backends",
    "ConversationState",
    "UserIdentityStore",
    "ApiKeyStore",
    "KeyValueStorage",
    "InMemoryStorage",
    "JSONFileStorage",
    "AIServiceError",
    "AIConfigurationError",
    "ProviderError",
    "ProviderUnavailableError",
    "InvalidResponseError",
    "ProviderTimeoutError",
    "AggregateFailureError",
    "fetch_ai",
    "fetch_ai_sync",
    "configure_ai_service",
    "get_ai_service_config",
    "check_ai_services_health",
    "auto_select_best_ai_service",
    "clear_response_cache",
    "set_provider_api_key",
    "get_default_orchestrator",
    "set_default_orchestrator",
]
