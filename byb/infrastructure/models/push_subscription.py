"""SQLAlchemy model for browser push subscriptions."""

from sqlalchemy import Column, DateTime, String, Text

from byb.infrastructure.database import Base


class PushSubscriptionModel(Base):
    """Database representation of a Web Push endpoint; the endpoint is the key."""

    __tablename__ = "push_subscriptions"

    endpoint = Column(String(1024), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    p256dh = Column(String(255), nullable=False)
    auth = Column(String(255), nullable=False)
    tz = Column(String(64), nullable=True)
    platform = Column(String(64), nullable=True)
    ua = Column(Text, nullable=True)
    created_at = Column(DateTime(), nullable=True)
    last_seen_at = Column(DateTime(), nullable=True)


__all__ = ["PushSubscriptionModel"]
