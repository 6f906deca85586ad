"""Use case for recording a completed focus block."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from byb.domain.entities import CompletedFocusBlock, FocusSession
from byb.infrastructure.repositories import FocusSessionRepository
from byb.utils import ensure_utc


def log_focus_session(
    session: Session,
    *,
    user_id: str,
    started_at: datetime,
    ended_at: datetime,
    minutes: int,
    preset: str,
    interruptions: int = 0,
    task_title: str | None = None,
) -> FocusSession:
    """Persist a focus block in the session log."""

    if not user_id:
        raise ValueError("userId is required")
    if minutes <= 0:
        raise ValueError("minutes must be positive")
    if ensure_utc(ended_at) < ensure_utc(started_at):  # type: ignore[operator]
        raise ValueError("ended_at must not precede started_at")

    focus_session = FocusSession(
        id=None,
        user_id=user_id,
        started_at=started_at,
        ended_at=ended_at,
        minutes=minutes,
        preset=preset,
        interruptions=max(0, interruptions),
        task_title=(task_title or "").strip()[:200] or None,
    )
    return FocusSessionRepository(session).create(focus_session)


def log_completed_block(
    session: Session, *, user_id: str, block: CompletedFocusBlock
) -> FocusSession:
    """Persist a block emitted by the timer engine."""

    return log_focus_session(
        session,
        user_id=user_id,
        started_at=block.started_at,
        ended_at=block.ended_at,
        minutes=block.minutes,
        preset=block.preset,
        interruptions=block.interruptions,
        task_title=block.task_title,
    )
