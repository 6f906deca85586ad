"""Schemas for the focus session log."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from byb.utils import ensure_utc


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FocusSessionCreate(_CamelModel):
    user_id: str = Field(..., min_length=1)
    started_at: datetime
    ended_at: datetime
    minutes: int = Field(..., gt=0, le=24 * 60)
    preset: str = Field(..., min_length=1, max_length=32)
    interruptions: int = Field(default=0, ge=0)
    task_title: str | None = Field(default=None, max_length=200)

    @model_validator(mode="after")
    def _check_order(self) -> "FocusSessionCreate":
        if ensure_utc(self.ended_at) < ensure_utc(self.started_at):  # type: ignore[operator]
            raise ValueError("endedAt must not precede startedAt")
        return self


class FocusSessionRead(_CamelModel):
    id: int
    user_id: str
    started_at: datetime
    ended_at: datetime
    phase: str
    preset: str
    minutes: int
    interruptions: int
    task_title: str | None = None


class FocusSummaryRead(_CamelModel):
    today_minutes: int
    week_minutes: int


__all__ = ["FocusSessionCreate", "FocusSessionRead", "FocusSummaryRead"]
