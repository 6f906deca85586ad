"""Endpoints for the focus session log."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from byb.application.use_cases.focus_sessions import (
    log_focus_session,
    summarize_focus_minutes,
)
from byb.infrastructure.database import get_db
from byb.interfaces.api.schemas import FocusSessionCreate, FocusSessionRead, FocusSummaryRead

router = APIRouter(prefix="/api/focus-sessions", tags=["focus"])


@router.post("", response_model=FocusSessionRead, status_code=status.HTTP_201_CREATED)
def create_focus_session(
    session_in: FocusSessionCreate,
    db: Session = Depends(get_db),
) -> FocusSessionRead:
    """Record a completed focus block."""

    try:
        focus_session = log_focus_session(
            db,
            user_id=session_in.user_id,
            started_at=session_in.started_at,
            ended_at=session_in.ended_at,
            minutes=session_in.minutes,
            preset=session_in.preset,
            interruptions=session_in.interruptions,
            task_title=session_in.task_title,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return FocusSessionRead(
        id=focus_session.id or 0,
        user_id=focus_session.user_id,
        started_at=focus_session.started_at,
        ended_at=focus_session.ended_at,
        phase=focus_session.phase,
        preset=focus_session.preset,
        minutes=focus_session.minutes,
        interruptions=focus_session.interruptions,
        task_title=focus_session.task_title,
    )


@router.get("/summary", response_model=FocusSummaryRead)
def focus_summary(
    user_id: str = Query(..., alias="userId", min_length=1),
    db: Session = Depends(get_db),
) -> FocusSummaryRead:
    """Minutes focused today and this week (weeks start on Monday)."""

    summary = summarize_focus_minutes(db, user_id=user_id)
    return FocusSummaryRead(
        today_minutes=summary.today_minutes, week_minutes=summary.week_minutes
    )
