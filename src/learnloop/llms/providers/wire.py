"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

JSON payload models exchanged with the provider proxies.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..types import GenerationContext


class WireMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    content: str


class GenerateRequestBody(BaseModel):
    """Body posted to a provider endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str
    user_id: str = Field(alias="userId")
    previous_messages: list[WireMessage] | None = Field(default=None, alias="previousMessages")
    conversation_id: str | None = Field(default=None, alias="conversationId")

    @classmethod
    def build(cls, prompt: str, context: GenerationContext) -> "GenerateRequestBody":
        previous = None
        if context.previous_messages:
            previous = [
                WireMessage(role=m.role, content=m.content)
                for m in context.previous_messages
            ]
        return cls(
            prompt=prompt,
            user_id=context.user_id,
            previous_messages=previous,
            conversation_id=context.conversation_id,
        )

    def to_payload(self) -> dict:
        # Optional fields are left out entirely rather than sent as null.
        return self.model_dump(by_alias=True, exclude_none=True)


class GenerateResponseBody(BaseModel):
    """Successful provider answer; any extra fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    text: str

    @field_validator("text")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must be non-empty")
        return value


class ErrorResponseBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    error: str | None = None
