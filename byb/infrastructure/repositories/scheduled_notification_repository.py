"""Persistence helpers for scheduled notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from byb.domain.entities import (
    NOTIFICATION_STATUS_FAILED,
    NOTIFICATION_STATUS_PENDING,
    NOTIFICATION_STATUS_PROCESSING,
    NOTIFICATION_STATUS_SENT,
    ScheduledNotification,
)
from byb.infrastructure.models import ScheduledNotificationModel
from byb.utils import ensure_utc, ensure_utc_naive, now_utc


class ScheduledNotificationRepository:
    """Provide queries and state transitions for :class:`ScheduledNotification`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> ScheduledNotification | None:
        model = self.session.get(ScheduledNotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def create(self, notification: ScheduledNotification) -> ScheduledNotification:
        model = ScheduledNotificationModel(
            user_id=notification.user_id,
            fire_at_utc=ensure_utc_naive(notification.fire_at),
            payload=notification.payload or {},
            status=notification.status,
            attempts=notification.attempts,
            created_at=ensure_utc_naive(notification.created_at or now_utc()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def due_before(
        self,
        moment: datetime,
        *,
        limit: int = 100,
        stale_claim_before: datetime | None = None,
    ) -> Sequence[ScheduledNotification]:
        """Return notifications due at ``moment`` that are still pending.

        When ``stale_claim_before`` is given, rows left in ``processing`` by a
        run that claimed them before that instant are returned as well.
        """

        query = (
            self.session.query(ScheduledNotificationModel)
            .filter(ScheduledNotificationModel.fire_at_utc <= ensure_utc_naive(moment))
            .filter(self._claimable(stale_claim_before))
            .order_by(
                ScheduledNotificationModel.fire_at_utc.asc(),
                ScheduledNotificationModel.id.asc(),
            )
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def claim(
        self,
        notification_id: int,
        *,
        now: datetime,
        stale_claim_before: datetime | None = None,
    ) -> bool:
        """Atomically move a claimable notification to ``processing``.

        Returns ``False`` when another run already claimed (or settled) it.
        """

        updated = (
            self.session.query(ScheduledNotificationModel)
            .filter(ScheduledNotificationModel.id == notification_id)
            .filter(self._claimable(stale_claim_before))
            .update(
                {
                    ScheduledNotificationModel.status: NOTIFICATION_STATUS_PROCESSING,
                    ScheduledNotificationModel.claimed_at: ensure_utc_naive(now),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated == 1

    def mark_sent(self, notification_id: int, *, sent_at: datetime) -> None:
        self._update(
            notification_id,
            {
                ScheduledNotificationModel.status: NOTIFICATION_STATUS_SENT,
                ScheduledNotificationModel.sent_at: ensure_utc_naive(sent_at),
                ScheduledNotificationModel.claimed_at: None,
            },
        )

    def mark_failed(self, notification_id: int, *, attempts: int | None = None) -> None:
        values: dict = {
            ScheduledNotificationModel.status: NOTIFICATION_STATUS_FAILED,
            ScheduledNotificationModel.claimed_at: None,
        }
        if attempts is not None:
            values[ScheduledNotificationModel.attempts] = attempts
        self._update(notification_id, values)

    def release(self, notification_id: int, *, attempts: int) -> None:
        """Return a claimed notification to ``pending`` for a later run."""

        self._update(
            notification_id,
            {
                ScheduledNotificationModel.status: NOTIFICATION_STATUS_PENDING,
                ScheduledNotificationModel.claimed_at: None,
                ScheduledNotificationModel.attempts: attempts,
            },
        )

    def _update(self, notification_id: int, values: dict) -> None:
        self.session.query(ScheduledNotificationModel).filter(
            ScheduledNotificationModel.id == notification_id
        ).update(values, synchronize_session=False)
        self.session.commit()

    @staticmethod
    def _claimable(stale_claim_before: datetime | None):
        pending = ScheduledNotificationModel.status == NOTIFICATION_STATUS_PENDING
        if stale_claim_before is None:
            return pending
        return or_(
            pending,
            and_(
                ScheduledNotificationModel.status == NOTIFICATION_STATUS_PROCESSING,
                ScheduledNotificationModel.claimed_at <= ensure_utc_naive(stale_claim_before),
            ),
        )

    @staticmethod
    def _to_entity(model: ScheduledNotificationModel) -> ScheduledNotification:
        return ScheduledNotification(
            id=model.id,
            user_id=model.user_id,
            fire_at=ensure_utc(model.fire_at_utc),
            payload=model.payload or {},
            status=model.status,
            attempts=model.attempts or 0,
            sent_at=ensure_utc(model.sent_at),
            claimed_at=ensure_utc(model.claimed_at),
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["ScheduledNotificationRepository"]
