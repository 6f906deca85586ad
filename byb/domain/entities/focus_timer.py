"""Domain types describing the focus timer: presets, phases and state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final


class Phase(str, Enum):
    """Segments of a focus cycle. Values double as the snapshot wire format."""

    FOCUS = "focus"
    SHORT_BREAK = "short"
    LONG_BREAK = "long"

    @property
    def label(self) -> str:
        return _PHASE_LABELS[self]


_PHASE_LABELS: Final[dict[Phase, str]] = {
    Phase.FOCUS: "Focus",
    Phase.SHORT_BREAK: "Short break",
    Phase.LONG_BREAK: "Long break",
}


@dataclass(frozen=True)
class Preset:
    """Durations (in minutes) used to drive a focus cycle."""

    key: str
    label: str
    focus_minutes: int
    short_minutes: int
    long_minutes: int
    cycles_before_long: int

    def duration_seconds(self, phase: Phase) -> int:
        """Return the full length of ``phase`` in seconds."""

        if phase is Phase.FOCUS:
            minutes = self.focus_minutes
        elif phase is Phase.SHORT_BREAK:
            minutes = self.short_minutes
        else:
            minutes = self.long_minutes
        return minutes * 60


CUSTOM_PRESET_KEY: Final[str] = "custom"
DEFAULT_PRESET_KEY: Final[str] = "pomodoro"

PRESETS: Final[dict[str, Preset]] = {
    "pomodoro": Preset("pomodoro", "25 / 5 (x4 → 15)", 25, 5, 15, 4),
    "swift": Preset("swift", "20 / 5 (x4 → 15)", 20, 5, 15, 4),
    "deep": Preset("deep", "50 / 10 (x2 → 20)", 50, 10, 20, 2),
}

FOCUS_MINUTES_RANGE: Final[tuple[int, int]] = (1, 240)
SHORT_MINUTES_RANGE: Final[tuple[int, int]] = (1, 60)
LONG_MINUTES_RANGE: Final[tuple[int, int]] = (1, 120)
CYCLES_RANGE: Final[tuple[int, int]] = (1, 12)


def _clamp(value: Any, bounds: tuple[int, int], default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    low, high = bounds
    return max(low, min(high, number))


@dataclass(frozen=True)
class CustomDurations:
    """User-chosen durations for the ``custom`` preset, always within range."""

    focus_minutes: int = 25
    short_minutes: int = 5
    long_minutes: int = 15
    cycles_before_long: int = 4

    @classmethod
    def clamped(
        cls,
        *,
        focus_minutes: Any = None,
        short_minutes: Any = None,
        long_minutes: Any = None,
        cycles_before_long: Any = None,
    ) -> "CustomDurations":
        """Build durations clamping each value independently into its range.

        Missing or non-numeric values fall back to the classic Pomodoro default
        for that field.
        """

        defaults = cls()
        return cls(
            focus_minutes=_clamp(focus_minutes, FOCUS_MINUTES_RANGE, defaults.focus_minutes),
            short_minutes=_clamp(short_minutes, SHORT_MINUTES_RANGE, defaults.short_minutes),
            long_minutes=_clamp(long_minutes, LONG_MINUTES_RANGE, defaults.long_minutes),
            cycles_before_long=_clamp(
                cycles_before_long, CYCLES_RANGE, defaults.cycles_before_long
            ),
        )

    def as_preset(self) -> Preset:
        label = (
            f"{self.focus_minutes} / {self.short_minutes} "
            f"(x{self.cycles_before_long} → {self.long_minutes})"
        )
        return Preset(
            CUSTOM_PRESET_KEY,
            label,
            self.focus_minutes,
            self.short_minutes,
            self.long_minutes,
            self.cycles_before_long,
        )


def resolve_preset(key: str, custom: CustomDurations | None = None) -> Preset:
    """Return the preset identified by ``key``.

    Raises:
        ValueError: if ``key`` is neither a built-in preset nor ``custom``.
    """

    if key == CUSTOM_PRESET_KEY:
        return (custom or CustomDurations()).as_preset()
    try:
        return PRESETS[key]
    except KeyError:
        raise ValueError(f"Unknown focus preset '{key}'") from None


@dataclass(frozen=True)
class PhaseTransition:
    """Outcome of a phase boundary."""

    phase: Phase
    cycle: int
    deadline: int


def compute_next_phase(
    phase: Phase, cycle: int, preset: Preset, ended_at: int
) -> PhaseTransition:
    """Return the phase following ``phase`` when it ends at ``ended_at`` (epoch ms).

    A focus block increments the cycle count; reaching ``cycles_before_long``
    yields a long break and resets the count. Breaks always return to focus and
    keep the count.
    """

    if phase is Phase.FOCUS:
        next_cycle = cycle + 1
        if next_cycle >= preset.cycles_before_long:
            next_phase, next_cycle = Phase.LONG_BREAK, 0
        else:
            next_phase = Phase.SHORT_BREAK
    else:
        next_phase, next_cycle = Phase.FOCUS, cycle
    deadline = ended_at + preset.duration_seconds(next_phase) * 1000
    return PhaseTransition(phase=next_phase, cycle=next_cycle, deadline=deadline)


@dataclass
class FocusTimerState:
    """Mutable timer state mirrored into the snapshot store.

    While ``running`` the ``deadline`` (epoch ms) is the source of truth and
    ``remaining_seconds`` is a derived snapshot; while paused ``deadline`` is
    ``None`` and ``remaining_seconds`` holds the frozen value.
    """

    preset_key: str = DEFAULT_PRESET_KEY
    custom: CustomDurations = field(default_factory=CustomDurations)
    phase: Phase = Phase.FOCUS
    cycle: int = 0
    running: bool = False
    deadline: int | None = None
    remaining_seconds: int = PRESETS[DEFAULT_PRESET_KEY].focus_minutes * 60
    auto_start_next: bool = True
    sound_enabled: bool = True
    notifications_enabled: bool = True
    task_title: str = ""

    @property
    def preset(self) -> Preset:
        return resolve_preset(self.preset_key, self.custom)

    @classmethod
    def initial(
        cls,
        preset_key: str = DEFAULT_PRESET_KEY,
        custom: CustomDurations | None = None,
        **preferences: Any,
    ) -> "FocusTimerState":
        """Return the state a fresh timer starts from for ``preset_key``."""

        custom = custom or CustomDurations()
        preset = resolve_preset(preset_key, custom)
        preferences.setdefault(
            "remaining_seconds", preset.duration_seconds(preferences.get("phase", Phase.FOCUS))
        )
        return cls(preset_key=preset_key, custom=custom, **preferences)


__all__ = [
    "CUSTOM_PRESET_KEY",
    "CYCLES_RANGE",
    "CustomDurations",
    "DEFAULT_PRESET_KEY",
    "FOCUS_MINUTES_RANGE",
    "FocusTimerState",
    "LONG_MINUTES_RANGE",
    "PRESETS",
    "Phase",
    "PhaseTransition",
    "Preset",
    "SHORT_MINUTES_RANGE",
    "compute_next_phase",
    "resolve_preset",
]
