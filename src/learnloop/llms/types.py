"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

This module defines the shared value types used across the orchestration layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

Role = Literal["user", "assistant"]


class ProviderName(str, Enum):
    """The two interchangeable upstream text-generation providers."""

    PRIMARY = "primary"
    SECONDARY = "secondary"

    @property
    def other(self) -> "ProviderName":
        if self is ProviderName.PRIMARY:
            return ProviderName.SECONDARY
        return ProviderName.PRIMARY


@dataclass(frozen=True, slots=True)
class ConversationMessage:
    """One exchanged message kept as conversational context."""

    role: Role
    content: str


@dataclass(frozen=True, slots=True)
class ProviderHealth:
    """Reachability snapshot, computed fresh on every check."""

    primary: bool
    secondary: bool

    def is_healthy(self, provider: ProviderName) -> bool:
        if provider is ProviderName.PRIMARY:
            return self.primary
        return self.secondary

    def to_dict(self) -> dict[str, bool]:
        return {"primary": self.primary, "secondary": self.secondary}


@dataclass(frozen=True, slots=True)
class GenerationContext:
    """Identity and optional history attached to one provider request."""

    user_id: str
    previous_messages: tuple[ConversationMessage, ...] | None = None
    conversation_id: str | None = None
