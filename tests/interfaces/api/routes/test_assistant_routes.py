"""Integration tests for the assistant chat endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from byb.infrastructure.openai_client import OpenAIServiceError
from byb.interfaces.api.dependencies import get_chat_service


class FakeChatService:
    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.requests = []

    def complete(self, messages):
        self.requests.append(list(messages))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture()
def chat_service() -> FakeChatService:
    return FakeChatService()


@pytest.fixture()
def model_client(app, chat_service):
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.mark.parametrize("path", ["/api/alfred", "/api/eva"])
def test_status_reports_a_missing_key(client: TestClient, path: str) -> None:
    response = client.get(path)

    assert response.status_code == 200
    assert response.json() == {"ok": True, "hasKey": False}


@pytest.mark.parametrize(
    ("path", "payload", "speaker"),
    [
        ("/api/alfred", {}, "Business Alfred"),
        ("/api/alfred", {"mode": "financial"}, "Financial Alfred"),
        ("/api/alfred", {"persona": "friend"}, "Friend Alfred"),
        ("/api/eva", {}, "Eva"),
        ("/api/eva", {"persona": "health"}, "Health Alfred"),
    ],
)
def test_stub_reply_without_a_key(client: TestClient, path, payload, speaker) -> None:
    payload = {**payload, "history": [{"role": "user", "content": "I feel stuck"}]}

    response = client.post(path, json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["stub"] is True
    assert body["reply"] == body["text"]
    assert body["reply"].startswith(f"{speaker} (stub)")
    assert "I feel stuck" in body["reply"]


def test_model_reply_with_actions(model_client: TestClient, chat_service) -> None:
    chat_service.reply = "Plan:\n1. List your invoices\n2. Chase the oldest one\n"

    response = model_client.post(
        "/api/alfred",
        json={"messages": [{"role": "user", "content": "Cash is tight"}]},
    )

    assert response.status_code == 200
    assert response.json() == {
        "reply": chat_service.reply,
        "text": chat_service.reply,
        "stub": False,
        "actions": ["List your invoices", "Chase the oldest one"],
    }
    [request] = chat_service.requests
    assert request[0].role == "system"
    assert request[0].content.startswith("You are Alfred")


def test_model_failure_returns_the_error(model_client: TestClient, chat_service) -> None:
    chat_service.error = OpenAIServiceError("OpenAI error", detail="invalid_api_key")

    response = model_client.post("/api/eva", json={"history": []})

    assert response.status_code == 500
    assert response.json() == {"error": "OpenAI error", "detail": "invalid_api_key"}
