"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Request configuration and its three-tier merge.

Precedence, highest first: per-call override, process-wide default held by
the orchestrator, and `DEFAULT_REQUEST_CONFIG`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from .errors import AIConfigurationError
from .types import ProviderName


def _coerce_provider(value: ProviderName | str) -> ProviderName:
    if isinstance(value, ProviderName):
        return value
    try:
        return ProviderName(str(value).strip().lower())
    except ValueError as e:
        raise AIConfigurationError(f"Unknown provider '{value}'") from e


@dataclass(frozen=True, slots=True)
class RequestConfig:
    """Fully resolved settings for one `fetch_ai` call."""

    preferred_provider: ProviderName = ProviderName.PRIMARY
    enable_fallback: bool = True
    max_retries: int = 3
    timeout_ms: int = 30_000
    cache_responses: bool = True
    include_history: bool = False
    conversation_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "preferred_provider", _coerce_provider(self.preferred_provider)
        )
        for name in ("enable_fallback", "cache_responses", "include_history"):
            if not isinstance(getattr(self, name), bool):
                raise AIConfigurationError(f"{name} must be a boolean")
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise AIConfigurationError("max_retries must be an integer")
        if self.max_retries < 0:
            raise AIConfigurationError("max_retries must be >= 0")
        if isinstance(self.timeout_ms, bool) or not isinstance(self.timeout_ms, int):
            raise AIConfigurationError("timeout_ms must be an integer")
        if self.timeout_ms <= 0:
            raise AIConfigurationError("timeout_ms must be > 0")

    @property
    def provider_order(self) -> list[ProviderName]:
        """Providers to attempt, preferred first."""
        if not self.enable_fallback:
            return [self.preferred_provider]
        return [self.preferred_provider, self.preferred_provider.other]

    def merged(
        self,
        override: "RequestConfigOverride | Mapping[str, Any] | None" = None,
    ) -> "RequestConfig":
        """Return a copy with every set field of `override` applied."""
        if override is None:
            return self
        if isinstance(override, Mapping):
            override = RequestConfigOverride.from_mapping(override)
        changes = override.as_changes()
        if not changes:
            return self
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class RequestConfigOverride:
    """Partial config layer; `None` means the field is not overridden."""

    preferred_provider: ProviderName | str | None = None
    enable_fallback: bool | None = None
    max_retries: int | None = None
    timeout_ms: int | None = None
    cache_responses: bool | None = None
    include_history: bool | None = None
    conversation_id: str | None = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "RequestConfigOverride":
        known = {f.name for f in fields(cls)}
        unknown = sorted(key for key in row if key not in known)
        if unknown:
            raise AIConfigurationError(
                f"Unknown request config fields: {', '.join(unknown)}"
            )
        return cls(**dict(row))

    def as_changes(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


DEFAULT_REQUEST_CONFIG = RequestConfig()
