"""Domain entities for completed focus blocks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class FocusSession:
    """Focus block persisted in the session log."""

    id: int | None
    user_id: str
    started_at: datetime
    ended_at: datetime
    minutes: int
    preset: str
    phase: str = "focus"
    interruptions: int = 0
    task_title: str | None = None


@dataclass(frozen=True)
class CompletedFocusBlock:
    """Emitted by the timer engine when a focus phase ends after at least a minute of focus."""

    started_at: datetime
    ended_at: datetime
    minutes: int
    preset: str
    interruptions: int
    task_title: str | None


@dataclass(frozen=True)
class FocusSummary:
    today_minutes: int
    week_minutes: int


__all__ = ["CompletedFocusBlock", "FocusSession", "FocusSummary"]
