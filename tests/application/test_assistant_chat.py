"""Tests for the assistant chat use case."""

from __future__ import annotations

import pytest

from byb.application.use_cases.assistant import (
    HISTORY_LIMIT,
    PERSONAS,
    build_prompt,
    extract_action_bullets,
    get_persona,
    normalize_history,
    reply_to_chat,
)
from byb.domain.entities import ChatMessage


class FakeChatService:
    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.requests: list[list[ChatMessage]] = []

    def complete(self, messages):
        self.requests.append(list(messages))
        return self.reply


def test_bullets_and_numbered_items_are_extracted() -> None:
    text = (
        "**Today**\n"
        "- Draft the invoice\n"
        "* Call the accountant\n"
        "• Book a desk\n"
        "1. Review cash flow\n"
        "2) File the VAT return\n"
        "Plain sentence without a bullet.\n"
    )

    assert extract_action_bullets(text) == [
        "Draft the invoice",
        "Call the accountant",
        "Book a desk",
        "Review cash flow",
        "File the VAT return",
    ]


def test_short_and_duplicate_bullets_are_dropped() -> None:
    text = "- ok\n- Walk outside\n-   walk OUTSIDE  \n3. Go\n"

    assert extract_action_bullets(text) == ["Walk outside"]


def test_bullets_are_capped() -> None:
    text = "\n".join(f"- Action number {index}" for index in range(20))

    assert len(extract_action_bullets(text)) == 12


@pytest.mark.parametrize(
    ("key", "default", "expected"),
    [
        ("financial", "business", "financial"),
        (" Health ", "business", "health"),
        (None, "business", "business"),
        ("unknown", "business", "business"),
        (None, "eva", "eva"),
    ],
)
def test_persona_lookup(key, default, expected) -> None:
    assert get_persona(key, default=default).key == expected


def test_history_keeps_only_well_formed_messages() -> None:
    raw = [
        {"role": "user", "content": "Hello"},
        {"role": "tool", "content": "ignored"},
        {"role": "assistant", "content": "   "},
        {"role": "assistant"},
        "not a message",
        {"role": "assistant", "content": "Hi there"},
    ]

    assert normalize_history(raw) == [
        ChatMessage(role="user", content="Hello"),
        ChatMessage(role="assistant", content="Hi there"),
    ]


def test_prompt_prepends_the_persona_and_truncates_history() -> None:
    persona = PERSONAS["friend"]
    history = [
        ChatMessage(role="user" if index % 2 == 0 else "assistant", content=f"turn {index}")
        for index in range(20)
    ]

    prompt = build_prompt(persona, history)

    assert prompt[0] == ChatMessage(role="system", content=persona.system_prompt)
    assert len(prompt) == HISTORY_LIMIT + 1
    assert prompt[-1].content == "turn 19"


def test_prompt_keeps_a_client_system_message() -> None:
    history = [
        ChatMessage(role="system", content="Answer in French."),
        ChatMessage(role="user", content="Bonjour"),
    ]

    prompt = build_prompt(PERSONAS["business"], history)

    assert [message.content for message in prompt] == ["Answer in French.", "Bonjour"]


def test_stub_reply_without_a_service() -> None:
    reply = reply_to_chat(
        [{"role": "user", "content": "Plan my week"}],
        persona_key="health",
        service=None,
    )

    assert reply.stub is True
    assert reply.text.startswith("Health Alfred (stub)")
    assert "OPENAI_API_KEY" in reply.text
    assert "Plan my week" in reply.text


def test_model_reply_carries_extracted_actions() -> None:
    service = FakeChatService("Here you go:\n- Drink water\n- Sleep by 11pm\n")

    reply = reply_to_chat(
        [{"role": "user", "content": "Help me rest"}],
        persona_key="health",
        service=service,
    )

    assert reply.stub is False
    assert reply.actions == ["Drink water", "Sleep by 11pm"]
    [request] = service.requests
    assert request[0].role == "system"
    assert request[0].content == PERSONAS["health"].system_prompt
    assert request[-1] == ChatMessage(role="user", content="Help me rest")
