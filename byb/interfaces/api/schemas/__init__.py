"""Pydantic schemas used by the API layer."""

from .assistant import AssistantChatRequest, AssistantChatResponse, AssistantStatusResponse
from .focus_session import FocusSessionCreate, FocusSessionRead, FocusSummaryRead
from .push import (
    DispatchRead,
    NotificationPayload,
    PushConfigRead,
    PushKeys,
    PushSubscribeRequest,
    PushSubscriptionPayload,
    ScheduledNotificationCreate,
    ScheduledNotificationRead,
)

__all__ = [
    "AssistantChatRequest",
    "AssistantChatResponse",
    "AssistantStatusResponse",
    "FocusSessionCreate",
    "FocusSessionRead",
    "FocusSummaryRead",
    "DispatchRead",
    "NotificationPayload",
    "PushConfigRead",
    "PushKeys",
    "PushSubscribeRequest",
    "PushSubscriptionPayload",
    "ScheduledNotificationCreate",
    "ScheduledNotificationRead",
]
