"""Repository implementations for infrastructure layer."""

from .focus_session_repository import FocusSessionRepository
from .push_subscription_repository import PushSubscriptionRepository
from .scheduled_notification_repository import ScheduledNotificationRepository

__all__ = [
    "FocusSessionRepository",
    "PushSubscriptionRepository",
    "ScheduledNotificationRepository",
]
