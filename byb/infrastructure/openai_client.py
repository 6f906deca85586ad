"""Thin client forwarding chat histories to the OpenAI chat completions API."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Final

from openai import OpenAI, OpenAIError

from byb.config import Settings, get_settings
from byb.domain.entities import ChatMessage

logger = logging.getLogger(__name__)

DEFAULT_REPLY: Final[str] = "I'm here and ready to help."


class OpenAIConfigurationError(RuntimeError):
    """Raised when the API key is missing."""


class OpenAIServiceError(RuntimeError):
    """Raised when the OpenAI API does not answer as expected."""

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(message)


class ChatCompletionService:
    """Send a list of role/content messages and return the assistant text."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()

        api_key = (settings.openai_api_key or "").strip()
        if not api_key:
            raise OpenAIConfigurationError("OPENAI_API_KEY is not set.")

        base_url = (settings.openai_base_url or "").strip()
        max_output_tokens = settings.openai_max_output_tokens
        if max_output_tokens is not None and max_output_tokens <= 0:
            max_output_tokens = None

        client_kwargs: dict[str, Any] = {"api_key": api_key}
        if base_url:
            client_kwargs["base_url"] = base_url

        self._client = OpenAI(**client_kwargs)
        self._model = settings.openai_model.strip() or "gpt-4o-mini"
        self._temperature = float(settings.openai_temperature)
        self._max_output_tokens = max_output_tokens

    def complete(self, messages: Sequence[ChatMessage]) -> str:
        """Return the first choice's text, or a neutral reply when it is empty.

        Raises:
            OpenAIServiceError: when the request fails.
        """

        request_kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": [message.as_dict() for message in messages],
            "temperature": self._temperature,
        }
        if self._max_output_tokens is not None:
            request_kwargs["max_tokens"] = self._max_output_tokens

        try:
            response = self._client.chat.completions.create(**request_kwargs)
        except OpenAIError as exc:
            logger.warning("OpenAI chat completion failed: %s", exc)
            raise OpenAIServiceError("OpenAI error", detail=str(exc)) from exc

        choices = getattr(response, "choices", None) or []
        content = None
        if choices:
            message = getattr(choices[0], "message", None)
            content = getattr(message, "content", None)
        text = (content or "").strip()
        return text or DEFAULT_REPLY


__all__ = [
    "ChatCompletionService",
    "DEFAULT_REPLY",
    "OpenAIConfigurationError",
    "OpenAIServiceError",
]
