"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Persisted identity and credential lookups.
"""

from __future__ import annotations

import logging

from ..types import ProviderName
from ..utils import new_id
from .storage import KeyValueStorage

logger = logging.getLogger("learnloop.llms.session.identity")

USER_ID_KEY = "learnloop_user_id"


class UserIdentityStore:
    """Opaque user id, created once on first access and reused afterwards."""

    def __init__(self, storage: KeyValueStorage, *, key: str = USER_ID_KEY) -> None:
        self._storage = storage
        self._key = key
        self._user_id: str | None = None

    @property
    def user_id(self) -> str:
        if self._user_id is None:
            stored = self._storage.get_item(self._key)
            if stored is None or not stored.strip():
                stored = new_id("user")
                self._storage.set_item(self._key, stored)
                logger.info("Created new user identity")
            self._user_id = stored
        return self._user_id


class ApiKeyStore:
    """Per-provider API key: a stored key wins over the configured fallback."""

    def __init__(
        self,
        storage: KeyValueStorage,
        provider: ProviderName,
        *,
        fallback: str | None = None,
    ) -> None:
        self._storage = storage
        self._provider = provider
        self._fallback = fallback

    @property
    def storage_key(self) -> str:
        return f"learnloop_{self._provider.value}_api_key"

    def get(self) -> str | None:
        stored = self._storage.get_item(self.storage_key)
        if stored is not None and stored.strip():
            return stored
        return self._fallback

    def __call__(self) -> str | None:
        return self.get()

    def set(self, key: str) -> None:
        """Persist `key`; blank keys are ignored."""
        if not key or not key.strip():
            return
        self._storage.set_item(self.storage_key, key.strip())
