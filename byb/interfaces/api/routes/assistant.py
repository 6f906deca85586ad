"""Endpoints proxying chat turns to the language model ("Alfred" and "Eva")."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from byb.application.use_cases.assistant import reply_to_chat
from byb.config import get_settings
from byb.infrastructure.openai_client import ChatCompletionService, OpenAIServiceError
from byb.interfaces.api.dependencies import get_chat_service
from byb.interfaces.api.schemas import (
    AssistantChatRequest,
    AssistantChatResponse,
    AssistantStatusResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["assistant"])


def _answer(
    payload: AssistantChatRequest,
    service: ChatCompletionService | None,
    *,
    default_persona: str,
):
    try:
        reply = reply_to_chat(
            payload.chat_history,
            persona_key=payload.persona_key,
            service=service,
            default_persona=default_persona,
        )
    except OpenAIServiceError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc), "detail": exc.detail},
        )
    return AssistantChatResponse(
        reply=reply.text, text=reply.text, stub=reply.stub, actions=reply.actions
    )


def _status() -> AssistantStatusResponse:
    return AssistantStatusResponse(ok=True, has_key=bool(get_settings().openai_api_key))


@router.get("/alfred", response_model=AssistantStatusResponse)
def alfred_status() -> AssistantStatusResponse:
    """Report whether the model key is configured."""

    return _status()


@router.post("/alfred", response_model=AssistantChatResponse)
def alfred_chat(
    payload: AssistantChatRequest,
    service: ChatCompletionService | None = Depends(get_chat_service),
):
    """Answer a chat turn with one of the Alfred personas."""

    return _answer(payload, service, default_persona="business")


@router.get("/eva", response_model=AssistantStatusResponse)
def eva_status() -> AssistantStatusResponse:
    return _status()


@router.post("/eva", response_model=AssistantChatResponse)
def eva_chat(
    payload: AssistantChatRequest,
    service: ChatCompletionService | None = Depends(get_chat_service),
):
    """Same contract as ``/api/alfred`` with Eva as the default persona."""

    return _answer(payload, service, default_persona="eva")
