"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Conversation identity, history and client-side storage.
"""

from .conversation import ConversationState
from .identity import USER_ID_KEY, ApiKeyStore, UserIdentityStore
from .storage import InMemoryStorage, JSONFileStorage, KeyValueStorage

__all__ = [
    "ConversationState",
    "UserIdentityStore",
    "ApiKeyStore",
    "USER_ID_KEY",
    "KeyValueStorage",
    "InMemoryStorage",
    "JSONFileStorage",
]
