"""Pydantic models describing push subscription and notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PushKeys(BaseModel):
    p256dh: str = Field(..., min_length=1)
    auth: str = Field(..., min_length=1)


class PushSubscriptionPayload(BaseModel):
    """Subscription object as produced by ``PushManager.subscribe()`` in browsers."""

    endpoint: str = Field(..., min_length=1)
    keys: PushKeys


class PushSubscribeRequest(_CamelModel):
    user_id: str = Field(..., min_length=1)
    subscription: PushSubscriptionPayload
    tz: str | None = None
    platform: str | None = None
    ua: str | None = None


class PushConfigRead(_CamelModel):
    enabled: bool
    public_key: str | None = None


class DispatchRead(BaseModel):
    sent: int


class NotificationPayload(BaseModel):
    """Message shown by the service worker; unknown keys are forwarded untouched."""

    model_config = ConfigDict(extra="allow")

    title: str = Field(..., min_length=1, max_length=120)
    body: str = ""
    tag: str | None = None
    url: str | None = None


class ScheduledNotificationCreate(_CamelModel):
    user_id: str = Field(..., min_length=1)
    fire_at: datetime
    payload: NotificationPayload

    def payload_dict(self) -> dict[str, Any]:
        return self.payload.model_dump(exclude_none=True)


class ScheduledNotificationRead(_CamelModel):
    id: int
    user_id: str
    fire_at: datetime
    payload: dict[str, Any] = Field(default_factory=dict)
    status: str
    attempts: int = 0
    sent_at: datetime | None = None


__all__ = [
    "DispatchRead",
    "NotificationPayload",
    "PushConfigRead",
    "PushKeys",
    "PushSubscribeRequest",
    "PushSubscriptionPayload",
    "ScheduledNotificationCreate",
    "ScheduledNotificationRead",
]
