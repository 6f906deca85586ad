"""Use case for registering a browser push subscription."""

from __future__ import annotations

from sqlalchemy.orm import Session

from byb.domain.entities import PushSubscription
from byb.infrastructure.repositories import PushSubscriptionRepository
from byb.utils import now_utc


def register_push_subscription(
    session: Session,
    *,
    user_id: str,
    endpoint: str,
    p256dh: str,
    auth: str,
    tz: str | None = None,
    platform: str | None = None,
    ua: str | None = None,
) -> PushSubscription:
    """Store the subscription, replacing any row with the same endpoint."""

    if not user_id or not endpoint or not p256dh or not auth:
        raise ValueError("Bad payload")

    subscription = PushSubscription(
        endpoint=endpoint,
        user_id=user_id,
        p256dh=p256dh,
        auth=auth,
        tz=tz or None,
        platform=platform or None,
        ua=ua or None,
        last_seen_at=now_utc(),
    )
    return PushSubscriptionRepository(session).upsert(subscription)
