"""Persistence helpers for push subscription entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from byb.domain.entities import PushSubscription
from byb.infrastructure.models import PushSubscriptionModel
from byb.utils import ensure_utc, ensure_utc_naive, now_utc


class PushSubscriptionRepository:
    """Provide lookups, upserts and pruning for :class:`PushSubscription`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def by_user(self, user_id: str) -> Sequence[PushSubscription]:
        query = (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.user_id == user_id)
            .order_by(PushSubscriptionModel.created_at.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, endpoint: str) -> PushSubscription | None:
        model = self.session.get(PushSubscriptionModel, endpoint)
        return self._to_entity(model) if model else None

    def upsert(self, subscription: PushSubscription) -> PushSubscription:
        """Insert or update the row keyed on ``subscription.endpoint``."""

        model = self.session.get(PushSubscriptionModel, subscription.endpoint)
        if model is None:
            model = PushSubscriptionModel(
                endpoint=subscription.endpoint,
                created_at=ensure_utc_naive(subscription.created_at or now_utc()),
            )
        model.user_id = subscription.user_id
        model.p256dh = subscription.p256dh
        model.auth = subscription.auth
        model.tz = subscription.tz
        model.platform = subscription.platform
        model.ua = subscription.ua
        model.last_seen_at = ensure_utc_naive(subscription.last_seen_at or now_utc())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, endpoint: str) -> bool:
        deleted = (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.endpoint == endpoint)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted > 0

    @staticmethod
    def _to_entity(model: PushSubscriptionModel) -> PushSubscription:
        return PushSubscription(
            endpoint=model.endpoint,
            user_id=model.user_id,
            p256dh=model.p256dh,
            auth=model.auth,
            tz=model.tz,
            platform=model.platform,
            ua=model.ua,
            created_at=ensure_utc(model.created_at),
            last_seen_at=ensure_utc(model.last_seen_at),
        )


__all__ = ["PushSubscriptionRepository"]
