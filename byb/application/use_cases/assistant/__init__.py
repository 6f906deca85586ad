"""Use cases for the assistant chat proxy."""

from .action_bullets import MAX_ACTIONS, extract_action_bullets
from .personas import DEFAULT_PERSONA_KEY, PERSONAS, get_persona
from .reply_to_chat import (
    HISTORY_LIMIT,
    build_prompt,
    normalize_history,
    reply_to_chat,
    stub_reply,
)

__all__ = [
    "MAX_ACTIONS",
    "extract_action_bullets",
    "DEFAULT_PERSONA_KEY",
    "PERSONAS",
    "get_persona",
    "HISTORY_LIMIT",
    "build_prompt",
    "normalize_history",
    "reply_to_chat",
    "stub_reply",
]
