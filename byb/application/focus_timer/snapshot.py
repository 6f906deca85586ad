"""Versioned serialization of :class:`FocusTimerState`.

The snapshot is a small JSON document kept under a versioned key. Anything
that does not validate against the current version (older schema, corrupt
JSON, unknown preset) is ignored so the timer falls back to defaults rather
than misreading stale data.
"""

from __future__ import annotations

import logging
from typing import Final, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from byb.domain.entities import (
    CUSTOM_PRESET_KEY,
    PRESETS,
    CustomDurations,
    FocusTimerState,
    Phase,
)

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION: Final[int] = 3
SNAPSHOT_KEY: Final[str] = f"byb:focus_timer_state:v{SNAPSHOT_VERSION}"


class SnapshotStore(Protocol):
    """Key/value storage holding serialized snapshots (local-storage semantics)."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class CustomDurationsSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    focus_minutes: int = Field(alias="focusMin")
    short_minutes: int = Field(alias="shortMin")
    long_minutes: int = Field(alias="longMin")
    cycles_before_long: int = Field(alias="cyclesBeforeLong")


class FocusTimerSnapshot(BaseModel):
    """Wire representation of the persisted timer state."""

    model_config = ConfigDict(populate_by_name=True)

    v: Literal[3]
    preset_key: str = Field(alias="presetKey")
    custom: CustomDurationsSnapshot | None = None
    phase: Phase
    running: bool
    cycle: int = Field(ge=0)
    target_at: int | None = Field(default=None, alias="targetAt")
    remaining: int = Field(ge=0)
    auto_start_next: bool = Field(default=True, alias="autoStartNext")
    sound_enabled: bool = Field(default=True, alias="soundEnabled")
    notifications_enabled: bool = Field(default=True, alias="notificationsEnabled")
    task_title: str = Field(default="", alias="taskTitle")

    @field_validator("preset_key")
    @classmethod
    def _known_preset(cls, value: str) -> str:
        if value != CUSTOM_PRESET_KEY and value not in PRESETS:
            raise ValueError(f"unknown preset '{value}'")
        return value


def serialize_state(state: FocusTimerState) -> str:
    """Return the JSON snapshot for ``state``."""

    snapshot = FocusTimerSnapshot(
        v=SNAPSHOT_VERSION,
        preset_key=state.preset_key,
        custom=CustomDurationsSnapshot(
            focus_minutes=state.custom.focus_minutes,
            short_minutes=state.custom.short_minutes,
            long_minutes=state.custom.long_minutes,
            cycles_before_long=state.custom.cycles_before_long,
        ),
        phase=state.phase,
        running=state.running,
        cycle=state.cycle,
        target_at=state.deadline if state.running else None,
        remaining=max(0, state.remaining_seconds),
        auto_start_next=state.auto_start_next,
        sound_enabled=state.sound_enabled,
        notifications_enabled=state.notifications_enabled,
        task_title=state.task_title,
    )
    return snapshot.model_dump_json(by_alias=True)


def parse_snapshot(raw: str | None) -> FocusTimerSnapshot | None:
    """Validate ``raw``; return ``None`` when absent or incompatible."""

    if not raw:
        return None
    try:
        return FocusTimerSnapshot.model_validate_json(raw)
    except ValidationError as exc:
        logger.info("Ignoring incompatible focus timer snapshot: %s", exc.error_count())
        return None


def state_from_snapshot(snapshot: FocusTimerSnapshot) -> FocusTimerState:
    """Rebuild the state exactly as stored; catch-up is the engine's job."""

    custom = (
        CustomDurations.clamped(
            focus_minutes=snapshot.custom.focus_minutes,
            short_minutes=snapshot.custom.short_minutes,
            long_minutes=snapshot.custom.long_minutes,
            cycles_before_long=snapshot.custom.cycles_before_long,
        )
        if snapshot.custom is not None
        else CustomDurations()
    )
    return FocusTimerState(
        preset_key=snapshot.preset_key,
        custom=custom,
        phase=snapshot.phase,
        cycle=snapshot.cycle,
        running=snapshot.running,
        deadline=snapshot.target_at,
        remaining_seconds=snapshot.remaining,
        auto_start_next=snapshot.auto_start_next,
        sound_enabled=snapshot.sound_enabled,
        notifications_enabled=snapshot.notifications_enabled,
        task_title=snapshot.task_title,
    )


__all__ = [
    "FocusTimerSnapshot",
    "SNAPSHOT_KEY",
    "SNAPSHOT_VERSION",
    "SnapshotStore",
    "parse_snapshot",
    "serialize_state",
    "state_from_snapshot",
]
