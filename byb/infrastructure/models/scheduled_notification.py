"""SQLAlchemy model for reminders awaiting push delivery."""

from sqlalchemy import Column, DateTime, Index, Integer, JSON, String

from byb.infrastructure.database import Base
from byb.utils import ensure_utc_naive, now_utc


def _utc_now_naive():
    return ensure_utc_naive(now_utc())


class ScheduledNotificationModel(Base):
    """Database representation of a scheduled push notification."""

    __tablename__ = "scheduled_notifications"
    __table_args__ = (Index("ix_scheduled_notifications_due", "status", "fire_at_utc"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    fire_at_utc = Column(DateTime(), nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    status = Column(String(20), nullable=False, default="pending")
    attempts = Column(Integer, nullable=False, default=0)
    claimed_at = Column(DateTime(), nullable=True)
    sent_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=_utc_now_naive)


__all__ = ["ScheduledNotificationModel"]
