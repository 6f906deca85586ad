"""Schemas for the assistant chat proxy."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AssistantChatRequest(BaseModel):
    """Chat turn sent by the client.

    ``mode`` is accepted as an alias of ``persona`` and ``messages`` as an alias
    of ``history``. History items are validated by the use case so malformed
    entries are dropped rather than rejected.
    """

    model_config = ConfigDict(extra="ignore")

    persona: str | None = None
    mode: str | None = None
    history: list[Any] | None = None
    messages: list[Any] | None = None

    @property
    def persona_key(self) -> str | None:
        return self.persona or self.mode

    @property
    def chat_history(self) -> list[Any]:
        return self.history if self.history is not None else (self.messages or [])


class AssistantChatResponse(BaseModel):
    reply: str
    text: str
    stub: bool
    actions: list[str] = Field(default_factory=list)


class AssistantStatusResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool
    has_key: bool


__all__ = ["AssistantChatRequest", "AssistantChatResponse", "AssistantStatusResponse"]
