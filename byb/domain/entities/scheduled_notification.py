"""Domain entity representing a reminder scheduled for push delivery."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Final

NOTIFICATION_STATUS_PENDING: Final[str] = "pending"
NOTIFICATION_STATUS_PROCESSING: Final[str] = "processing"
NOTIFICATION_STATUS_SENT: Final[str] = "sent"
NOTIFICATION_STATUS_FAILED: Final[str] = "failed"


@dataclass
class ScheduledNotification:
    """Push message due for a user at ``fire_at`` (UTC).

    ``pending`` rows are picked up by the dispatcher, which claims them as
    ``processing`` before sending and settles them as ``sent`` or ``failed``.
    """

    id: int | None
    user_id: str
    fire_at: datetime
    payload: dict[str, Any] = field(default_factory=dict)
    status: str = NOTIFICATION_STATUS_PENDING
    attempts: int = 0
    sent_at: datetime | None = None
    claimed_at: datetime | None = None
    created_at: datetime | None = None


__all__ = [
    "NOTIFICATION_STATUS_FAILED",
    "NOTIFICATION_STATUS_PENDING",
    "NOTIFICATION_STATUS_PROCESSING",
    "NOTIFICATION_STATUS_SENT",
    "ScheduledNotification",
]
