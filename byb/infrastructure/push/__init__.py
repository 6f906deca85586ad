"""Push notification delivery helpers for the infrastructure layer."""

from .errors import PushConfigurationError, PushDeliveryError, PushGoneError
from .webpush_sender import GONE_STATUS_CODES, PUSH_TTL_SECONDS, PushSender, WebPushSender

__all__ = [
    "GONE_STATUS_CODES",
    "PUSH_TTL_SECONDS",
    "PushConfigurationError",
    "PushDeliveryError",
    "PushGoneError",
    "PushSender",
    "WebPushSender",
]
