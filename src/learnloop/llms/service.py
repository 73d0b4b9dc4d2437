"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Process-wide facade over one default `AIOrchestrator`.

The default instance is built lazily from `AIServiceSettings.from_env()` on
first use and lives for the rest of the process. Tests and embedding
applications can swap it with `set_default_orchestrator`.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

from .builder import AIServiceBuilder
from .config import RequestConfig
from .runtime.client import AIOrchestrator, OverrideLike
from .types import ProviderHealth, ProviderName
from .utils import run_sync

_DEFAULT: AIOrchestrator | None = None
_LOCK = threading.Lock()


def get_default_orchestrator() -> AIOrchestrator:
    global _DEFAULT
    with _LOCK:
        if _DEFAULT is None:
            _DEFAULT = AIServiceBuilder().build()
        return _DEFAULT


def set_default_orchestrator(orchestrator: AIOrchestrator | None) -> None:
    """Install `orchestrator` as the process default; `None` resets it."""
    global _DEFAULT
    with _LOCK:
        _DEFAULT = orchestrator


def _merge_override(override: OverrideLike, fields: dict[str, Any]) -> OverrideLike:
    if not fields:
        return override
    if override is None:
        return fields
    if isinstance(override, Mapping):
        return {**override, **fields}
    return {**override.as_changes(), **fields}


async def fetch_ai(prompt: str, override: OverrideLike = None, **fields: Any) -> str:
    """Generate text for `prompt` through the default orchestrator."""
    return await get_default_orchestrator().fetch_ai(
        prompt,
        _merge_override(override, fields),
    )


def fetch_ai_sync(prompt: str, override: OverrideLike = None, **fields: Any) -> str:
    """Synchronous wrapper around `fetch_ai`."""
    return run_sync(fetch_ai(prompt, override, **fields))


def configure_ai_service(override: OverrideLike = None, **fields: Any) -> None:
    get_default_orchestrator().configure(override, **fields)


def get_ai_service_config() -> RequestConfig:
    return get_default_orchestrator().get_config()


async def check_ai_services_health() -> ProviderHealth:
    return await get_default_orchestrator().check_health()


async def auto_select_best_ai_service() -> None:
    await get_default_orchestrator().auto_select_best_provider()


async def clear_response_cache() -> None:
    await get_default_orchestrator().clear_cache()


def set_provider_api_key(provider: ProviderName | str, key: str) -> None:
    """Persist an API key for `provider`; blank keys are ignored."""
    get_default_orchestrator().set_api_key(provider, key)
