"""Use cases for scheduled push notifications."""

from .dispatch_due_notifications import DispatchResult, dispatch_due_notifications
from .register_push_subscription import register_push_subscription
from .schedule_notification import schedule_notification

__all__ = [
    "DispatchResult",
    "dispatch_due_notifications",
    "register_push_subscription",
    "schedule_notification",
]
