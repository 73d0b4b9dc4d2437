"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error hierarchy for the AI request orchestration layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import ProviderName


class AIServiceError(Exception):
    """Base error for all orchestration-layer failures."""


class AIConfigurationError(AIServiceError, ValueError):
    """Raised when request config or settings hold invalid values."""


class ProviderError(AIServiceError):
    """Failure of one attempt against one provider."""

    def __init__(self, message: str, *, provider: ProviderName | str | None = None) -> None:
        super().__init__(message)
        self.provider = provider


class ProviderUnavailableError(ProviderError):
    """Transport failure or non-2xx response."""

    def __init__(
        self,
        message: str,
        *,
        provider: ProviderName | str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, provider=provider)
        self.status_code = status_code


class InvalidResponseError(ProviderError):
    """Provider answered but the body carried no usable `text`."""


class ProviderTimeoutError(ProviderError):
    """One attempt exceeded its `timeout_ms` budget."""


class AggregateFailureError(AIServiceError):
    """
    Every attempted provider exhausted its retry budget.

    `errors` holds `(provider, error)` pairs in attempt order.
    """

    def __init__(self, errors: list[tuple[ProviderName, Exception]]) -> None:
        self.errors = tuple(errors)
        parts = [f"{getattr(name, 'value', name)}: {error}" for name, error in self.errors]
        super().__init__("All AI providers failed. " + "; ".join(parts))

    @property
    def last_error(self) -> Exception | None:
        return self.errors[-1][1] if self.errors else None
