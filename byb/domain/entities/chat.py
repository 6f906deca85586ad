"""Domain types for the assistant chat proxy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Literal

ChatRole = Literal["system", "user", "assistant"]

CHAT_ROLES: Final[frozenset[str]] = frozenset({"system", "user", "assistant"})


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    content: str

    def as_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class Persona:
    """Assistant personality selected by the client."""

    key: str
    label: str
    display_name: str
    system_prompt: str


@dataclass(frozen=True)
class ChatReply:
    """Text produced for a chat turn plus the action lines found in it."""

    text: str
    stub: bool
    actions: list[str] = field(default_factory=list)


__all__ = ["CHAT_ROLES", "ChatMessage", "ChatReply", "ChatRole", "Persona"]
