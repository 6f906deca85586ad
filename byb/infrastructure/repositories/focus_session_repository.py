"""Persistence helpers for the focus session log."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from byb.domain.entities import FocusSession
from byb.infrastructure.models import FocusSessionModel
from byb.utils import ensure_utc, ensure_utc_naive


class FocusSessionRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, focus_session: FocusSession) -> FocusSession:
        model = FocusSessionModel(
            user_id=focus_session.user_id,
            started_at=ensure_utc_naive(focus_session.started_at),
            ended_at=ensure_utc_naive(focus_session.ended_at),
            phase=focus_session.phase,
            preset=focus_session.preset,
            minutes=focus_session.minutes,
            interruptions=focus_session.interruptions,
            task_title=focus_session.task_title,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def minutes_since(self, user_id: str, since: datetime) -> int:
        total = (
            self.session.query(func.coalesce(func.sum(FocusSessionModel.minutes), 0))
            .filter(FocusSessionModel.user_id == user_id)
            .filter(FocusSessionModel.started_at >= ensure_utc_naive(since))
            .scalar()
        )
        return int(total or 0)

    @staticmethod
    def _to_entity(model: FocusSessionModel) -> FocusSession:
        return FocusSession(
            id=model.id,
            user_id=model.user_id,
            started_at=ensure_utc(model.started_at),
            ended_at=ensure_utc(model.ended_at),
            minutes=model.minutes,
            preset=model.preset,
            phase=model.phase,
            interruptions=model.interruptions or 0,
            task_title=model.task_title,
        )


__all__ = ["FocusSessionRepository"]
