"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: session/conversation.py.
"""

from __future__ import annotations

from ..types import ConversationMessage, GenerationContext, Role
from .identity import UserIdentityStore
from .storage import InMemoryStorage


class ConversationState:
    """
    Identity plus ordered, append-only message history.

    One instance is owned by one orchestrator for the process lifetime. No
    locking is applied: concurrent exchanges append in completion order.
    """

    def __init__(self, identity: UserIdentityStore | None = None) -> None:
        self._identity = identity or UserIdentityStore(InMemoryStorage())
        self._messages: list[ConversationMessage] = []

    @property
    def user_id(self) -> str:
        return self._identity.user_id

    @property
    def messages(self) -> tuple[ConversationMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def add_message(self, role: Role, content: str) -> None:
        if role not in ("user", "assistant"):
            raise ValueError(f"Unsupported message role '{role}'")
        self._messages.append(ConversationMessage(role=role, content=content))

    def clear(self) -> None:
        """Drop history; identity is kept."""
        self._messages.clear()

    def context(
        self,
        *,
        include_history: bool = False,
        conversation_id: str | None = None,
    ) -> GenerationContext:
        """Build the provider request context for the next exchange."""
        previous = None
        if include_history and self._messages:
            previous = tuple(self._messages)
        return GenerationContext(
            user_id=self.user_id,
            previous_messages=previous,
            conversation_id=conversation_id,
        )
