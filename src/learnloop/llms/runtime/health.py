"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/health.py.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

from ..providers.contracts import ProviderClient
from ..types import ProviderHealth, ProviderName

logger = logging.getLogger("learnloop.llms.runtime.health")


class HealthChecker:
    """Probe provider reachability, independent of content generation."""

    def __init__(self, providers: Mapping[ProviderName, ProviderClient]) -> None:
        self._providers = dict(providers)

    async def _probe(self, name: ProviderName) -> bool:
        provider = self._providers.get(name)
        if provider is None:
            return False
        try:
            return bool(await provider.probe())
        except Exception:
            logger.exception("Health probe raised for provider %s", name.value)
            return False

    async def check(self) -> ProviderHealth:
        primary, secondary = await asyncio.gather(
            self._probe(ProviderName.PRIMARY),
            self._probe(ProviderName.SECONDARY),
        )
        health = ProviderHealth(primary=primary, secondary=secondary)
        logger.debug("Provider health: %s", health.to_dict())
        return health
