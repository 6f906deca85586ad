"""Aggregate application use cases."""

from .focus_sessions import log_focus_session, summarize_focus_minutes
from .push import dispatch_due_notifications, register_push_subscription, schedule_notification

__all__ = [
    "dispatch_due_notifications",
    "log_focus_session",
    "register_push_subscription",
    "schedule_notification",
    "summarize_focus_minutes",
]
