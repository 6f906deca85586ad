"""Use case answering a chat turn through the configured language model."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Final

from byb.domain.entities import CHAT_ROLES, ChatMessage, ChatReply, Persona
from byb.infrastructure.openai_client import ChatCompletionService

from .action_bullets import extract_action_bullets
from .personas import DEFAULT_PERSONA_KEY, get_persona

HISTORY_LIMIT: Final[int] = 15


def normalize_history(raw_history: Iterable[Any] | None) -> list[ChatMessage]:
    """Keep well-formed ``{role, content}`` items with a known role and text."""

    messages: list[ChatMessage] = []
    for item in raw_history or []:
        if not isinstance(item, Mapping):
            continue
        role = item.get("role")
        content = item.get("content")
        if role not in CHAT_ROLES or not isinstance(content, str) or not content.strip():
            continue
        messages.append(ChatMessage(role=role, content=content))
    return messages


def build_prompt(persona: Persona, history: list[ChatMessage]) -> list[ChatMessage]:
    """Return the messages forwarded to the model.

    Client supplied system messages win over the persona prompt; only the most
    recent ``HISTORY_LIMIT`` conversation turns are kept.
    """

    system = [message for message in history if message.role == "system"]
    turns = [message for message in history if message.role != "system"]
    if not system:
        system = [ChatMessage(role="system", content=persona.system_prompt)]
    return [*system, *turns[-HISTORY_LIMIT:]]


def stub_reply(persona: Persona, history: list[ChatMessage]) -> str:
    last_user = next(
        (message.content for message in reversed(history) if message.role == "user"),
        "How can I help?",
    )
    return (
        f"{persona.display_name} (stub): I can't access the AI model yet. "
        f"Add OPENAI_API_KEY to the server environment. Your note: “{last_user[:200]}”."
    )


def reply_to_chat(
    raw_history: Iterable[Any] | None,
    *,
    persona_key: str | None = None,
    service: ChatCompletionService | None,
    default_persona: str = DEFAULT_PERSONA_KEY,
) -> ChatReply:
    """Produce the assistant reply for ``raw_history``.

    Without a ``service`` (no API key configured) a stub reply is returned.

    Raises:
        OpenAIServiceError: when the model request fails.
    """

    persona = get_persona(persona_key, default=default_persona)
    history = normalize_history(raw_history)

    if service is None:
        text = stub_reply(persona, history)
        return ChatReply(text=text, stub=True, actions=extract_action_bullets(text))

    text = service.complete(build_prompt(persona, history))
    return ChatReply(text=text, stub=False, actions=extract_action_bullets(text))
