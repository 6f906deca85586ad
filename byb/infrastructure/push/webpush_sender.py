"""Web Push delivery through ``pywebpush``."""

from __future__ import annotations

import json
import logging
from typing import Any, Final, Protocol

from pywebpush import WebPushException, webpush

from byb.config import Settings, get_settings
from byb.domain.entities import PushSubscription

from .errors import PushConfigurationError, PushDeliveryError, PushGoneError

logger = logging.getLogger(__name__)

PUSH_TTL_SECONDS: Final[int] = 86400
GONE_STATUS_CODES: Final[frozenset[int]] = frozenset({404, 410})


class PushSender(Protocol):
    """Deliver one payload to one subscription."""

    def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None:
        """Raise :class:`PushGoneError` or :class:`PushDeliveryError` on failure."""


class WebPushSender:
    """Send notifications signed with the configured VAPID key pair."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        private_key = (settings.vapid_private_key or "").strip()
        if not private_key:
            raise PushConfigurationError(
                "VAPID_PRIVATE_KEY is not set; push notifications are disabled."
            )
        self._private_key = private_key
        self._claims = {"sub": settings.vapid_subject}

    def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None:
        try:
            webpush(
                subscription_info=subscription.subscription_info(),
                data=json.dumps(payload),
                vapid_private_key=self._private_key,
                # pywebpush fills in "aud" per endpoint and mutates the dict
                vapid_claims=dict(self._claims),
                ttl=PUSH_TTL_SECONDS,
            )
        except WebPushException as exc:
            response = getattr(exc, "response", None)
            status_code = getattr(response, "status_code", None)
            if status_code in GONE_STATUS_CODES:
                raise PushGoneError(subscription.endpoint, status_code=status_code) from exc
            raise PushDeliveryError(str(exc), status_code=status_code) from exc
        except Exception as exc:
            raise PushDeliveryError(str(exc)) from exc
        logger.debug("Push delivered to %s", subscription.endpoint[:60])


__all__ = ["GONE_STATUS_CODES", "PUSH_TTL_SECONDS", "PushSender", "WebPushSender"]
