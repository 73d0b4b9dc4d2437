"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

HTTP provider client speaking the proxy JSON contract.

Each `generate` call is one POST; transport, status and payload problems are
translated into the `ProviderError` family so the retry loop and the
orchestrator only ever see package errors.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

import httpx
from pydantic import ValidationError

from ..errors import InvalidResponseError, ProviderTimeoutError, ProviderUnavailableError
from ..runtime.timeouts import await_with_timeout
from ..settings import ProviderEndpoint
from ..types import GenerationContext, ProviderName
from .wire import ErrorResponseBody, GenerateRequestBody, GenerateResponseBody

logger = logging.getLogger("learnloop.llms.providers.http")

API_KEY_HEADER = "X-API-KEY"
ANONYMOUS_USER_ID = "anonymous"

ApiKeySource = str | Callable[[], str | None] | None


class HTTPProviderClient:
    """`ProviderClient` implementation backed by `httpx.AsyncClient`."""

    def __init__(
        self,
        provider: ProviderName | str,
        *,
        base_url: str,
        health_url: str | None = None,
        api_key: ApiKeySource = None,
        requires_api_key: bool = False,
        probe_timeout_s: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._provider = ProviderName(provider)
        self._base_url = base_url
        self._health_url = health_url or base_url.rstrip("/") + "/health"
        self._api_key = api_key
        self._requires_api_key = requires_api_key
        self._probe_timeout_s = probe_timeout_s
        self._client = client
        self._owns_client = client is None

    @classmethod
    def from_endpoint(
        cls,
        provider: ProviderName | str,
        endpoint: ProviderEndpoint,
        *,
        api_key: ApiKeySource = None,
        client: httpx.AsyncClient | None = None,
    ) -> "HTTPProviderClient":
        return cls(
            provider,
            base_url=endpoint.base_url,
            health_url=endpoint.resolved_health_url,
            api_key=api_key if api_key is not None else endpoint.api_key,
            requires_api_key=endpoint.requires_api_key,
            client=client,
        )

    @property
    def provider(self) -> ProviderName:
        return self._provider

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazily create the shared async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            )
        return self._client

    def _resolve_api_key(self) -> str | None:
        source = self._api_key
        key = source() if callable(source) else source
        if isinstance(key, str) and key.strip():
            return key.strip()
        return None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        key = self._resolve_api_key()
        if key is not None:
            headers[API_KEY_HEADER] = key
        return headers

    async def generate(
        self,
        prompt: str,
        timeout_ms: int,
        *,
        context: GenerationContext | None = None,
    ) -> str:
        """Send one generation request and return the response text."""
        body = GenerateRequestBody.build(
            prompt,
            context or GenerationContext(user_id=ANONYMOUS_USER_ID),
        )
        timeout_s = timeout_ms / 1000.0
        name = self._provider.value

        try:
            response = await await_with_timeout(
                self.client.post(
                    self._base_url,
                    json=body.to_payload(),
                    headers=self._headers(),
                    timeout=timeout_s,
                ),
                timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise ProviderTimeoutError(
                f"{name} did not respond within {timeout_ms} ms",
                provider=self._provider,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(
                f"{name} request failed: {e}",
                provider=self._provider,
            ) from e

        if not response.is_success:
            raise ProviderUnavailableError(
                f"{name} returned HTTP {response.status_code}{self._error_suffix(response)}",
                provider=self._provider,
                status_code=response.status_code,
            )

        try:
            parsed = GenerateResponseBody.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise InvalidResponseError(
                f"{name} returned a response without usable text",
                provider=self._provider,
            ) from e
        return parsed.text

    @staticmethod
    def _error_suffix(response: httpx.Response) -> str:
        try:
            detail = ErrorResponseBody.model_validate(response.json()).error
        except (ValueError, ValidationError):
            return ""
        return f": {detail}" if detail else ""

    async def probe(self) -> bool:
        """Lightweight reachability check against the health endpoint."""
        if self._requires_api_key and self._resolve_api_key() is None:
            logger.info("Provider %s has no API key configured", self._provider.value)
            return False
        try:
            response = await self.client.get(
                self._health_url,
                headers=self._headers(),
                timeout=self._probe_timeout_s,
            )
        except httpx.HTTPError as e:
            logger.info("Health probe for %s failed: %s", self._provider.value, e)
            return False
        return response.is_success

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
