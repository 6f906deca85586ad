"""FastAPI dependency utilities."""

from __future__ import annotations

import logging
import secrets

from fastapi import Header, HTTPException, status

from byb.config import get_settings
from byb.infrastructure.openai_client import (
    ChatCompletionService,
    OpenAIConfigurationError,
)
from byb.infrastructure.push import PushSender, WebPushSender

logger = logging.getLogger(__name__)


def get_push_sender() -> PushSender:
    """Return a Web Push sender; raises ``PushConfigurationError`` without VAPID keys."""

    return WebPushSender(get_settings())


def get_chat_service() -> ChatCompletionService | None:
    """Return a configured chat service, or ``None`` so callers answer with a stub."""

    try:
        return ChatCompletionService(get_settings())
    except OpenAIConfigurationError as exc:
        logger.info("Assistant running in stub mode: %s", exc)
        return None


def verify_dispatch_token(authorization: str | None = Header(default=None)) -> None:
    """Require ``Authorization: Bearer <DISPATCH_TOKEN>`` when a token is configured."""

    expected = get_settings().dispatch_token
    if not expected:
        return
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not secrets.compare_digest(token.strip(), expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid dispatch token",
            headers={"WWW-Authenticate": "Bearer"},
        )
