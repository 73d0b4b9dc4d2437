"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Provider contracts consumed by the orchestrator and health checker.
"""

from __future__ import annotations

from typing import Protocol

from ..types import GenerationContext, ProviderName


class ProviderClient(Protocol):
    """
    One upstream text-generation service.

    `generate` performs exactly one network attempt and never retries.
    """

    @property
    def provider(self) -> ProviderName: ...

    async def generate(
        self,
        prompt: str,
        timeout_ms: int,
        *,
        context: GenerationContext | None = None,
    ) -> str: ...

    async def probe(self) -> bool: ...

    async def aclose(self) -> None: ...
