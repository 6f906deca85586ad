"""Focus timer engine and its persistence helpers."""

from .alerts import (
    BoundaryAlerts,
    BoundaryScheduler,
    ManualScheduler,
    SilentAlerts,
    boundary_message,
)
from .engine import MAX_CATCH_UP_STEPS, FocusTimer, seconds_until, system_clock
from .snapshot import (
    SNAPSHOT_KEY,
    SNAPSHOT_VERSION,
    FocusTimerSnapshot,
    SnapshotStore,
    parse_snapshot,
    serialize_state,
    state_from_snapshot,
)

__all__ = [
    "BoundaryAlerts",
    "BoundaryScheduler",
    "ManualScheduler",
    "SilentAlerts",
    "boundary_message",
    "MAX_CATCH_UP_STEPS",
    "FocusTimer",
    "seconds_until",
    "system_clock",
    "SNAPSHOT_KEY",
    "SNAPSHOT_VERSION",
    "FocusTimerSnapshot",
    "SnapshotStore",
    "parse_snapshot",
    "serialize_state",
    "state_from_snapshot",
]
