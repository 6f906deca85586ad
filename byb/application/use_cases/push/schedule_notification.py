"""Use case for scheduling a reminder delivered later by the dispatcher."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from byb.domain.entities import ScheduledNotification
from byb.infrastructure.repositories import ScheduledNotificationRepository
from byb.utils import ensure_utc, now_utc


def schedule_notification(
    session: Session,
    *,
    user_id: str,
    fire_at: datetime,
    payload: dict[str, Any],
) -> ScheduledNotification:
    """Persist a pending notification for ``user_id`` due at ``fire_at``.

    Naive ``fire_at`` values are interpreted as UTC.
    """

    if not user_id:
        raise ValueError("userId is required")
    if not str(payload.get("title") or "").strip():
        raise ValueError("payload.title is required")

    notification = ScheduledNotification(
        id=None,
        user_id=user_id,
        fire_at=ensure_utc(fire_at),  # type: ignore[arg-type]
        payload=dict(payload),
        created_at=now_utc(),
    )
    return ScheduledNotificationRepository(session).create(notification)
