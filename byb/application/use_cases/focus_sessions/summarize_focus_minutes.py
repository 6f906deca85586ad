"""Use case computing focus minutes for today and the current week."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from byb.domain.entities import FocusSummary
from byb.infrastructure.repositories import FocusSessionRepository
from byb.utils import now_utc, start_of_day, start_of_week


def summarize_focus_minutes(
    session: Session, *, user_id: str, now: datetime | None = None
) -> FocusSummary:
    """Sum logged minutes since local midnight and since Monday 00:00."""

    now = now or now_utc()
    repository = FocusSessionRepository(session)
    return FocusSummary(
        today_minutes=repository.minutes_since(user_id, start_of_day(now)),
        week_minutes=repository.minutes_since(user_id, start_of_week(now)),
    )
