"""ORM models used by the application infrastructure."""

from .focus_session import FocusSessionModel
from .push_subscription import PushSubscriptionModel
from .scheduled_notification import ScheduledNotificationModel

__all__ = [
    "FocusSessionModel",
    "PushSubscriptionModel",
    "ScheduledNotificationModel",
]
