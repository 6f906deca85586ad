"""Deadline-based focus timer state machine.

The timer never decrements a counter: it stores the absolute instant at which
the current phase ends and recomputes the remaining time from the clock on
every tick. Time lost while the host was suspended or throttled is therefore
accounted for on the next tick, and a timer restored from a snapshot replays
the phase boundaries it missed.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from datetime import timedelta
from typing import Callable, Final

from byb.application.focus_timer.alerts import (
    BoundaryAlerts,
    BoundaryScheduler,
    SilentAlerts,
    boundary_message,
)
from byb.application.focus_timer.snapshot import (
    SNAPSHOT_KEY,
    SnapshotStore,
    parse_snapshot,
    serialize_state,
    state_from_snapshot,
)
from byb.domain.entities import (
    CompletedFocusBlock,
    CustomDurations,
    FocusTimerState,
    Phase,
    PhaseTransition,
    Preset,
    compute_next_phase,
    resolve_preset,
)
from byb.utils import from_epoch_ms

logger = logging.getLogger(__name__)

MAX_CATCH_UP_STEPS: Final[int] = 20

Clock = Callable[[], int]
SessionSink = Callable[[CompletedFocusBlock], None]


def system_clock() -> int:
    """Return the current wall-clock time in epoch milliseconds."""

    return int(time.time() * 1000)


def seconds_until(deadline: int, now: int) -> int:
    """Whole seconds left before ``deadline``, rounded up and never negative."""

    return max(0, math.ceil((deadline - now) / 1000))


class FocusTimer:
    """Drive a single countdown through focus, short break and long break.

    The host calls :meth:`tick` roughly once per second. ``alerts`` and
    ``scheduler`` are optional; when they fail the countdown continues
    silently.
    """

    def __init__(
        self,
        state: FocusTimerState | None = None,
        *,
        clock: Clock = system_clock,
        alerts: BoundaryAlerts | None = None,
        scheduler: BoundaryScheduler | None = None,
        store: SnapshotStore | None = None,
        session_sink: SessionSink | None = None,
    ) -> None:
        self._state = state or FocusTimerState.initial()
        self._clock = clock
        self._alerts = alerts or SilentAlerts()
        self._scheduler = scheduler
        self._store = store
        self._session_sink = session_sink
        self._interruptions = 0
        self._announced_deadline: int | None = None
        self._announce_lock = threading.Lock()

    @classmethod
    def restore(
        cls,
        store: SnapshotStore,
        *,
        clock: Clock = system_clock,
        alerts: BoundaryAlerts | None = None,
        scheduler: BoundaryScheduler | None = None,
        session_sink: SessionSink | None = None,
    ) -> "FocusTimer":
        """Load the persisted timer from ``store`` and catch up missed boundaries.

        A missing or incompatible snapshot yields a fresh timer.
        """

        try:
            raw = store.get(SNAPSHOT_KEY)
        except OSError:
            logger.warning("Could not read focus timer snapshot", exc_info=True)
            raw = None
        snapshot = parse_snapshot(raw)
        state = state_from_snapshot(snapshot) if snapshot else FocusTimerState.initial()
        timer = cls(
            state,
            clock=clock,
            alerts=alerts,
            scheduler=scheduler,
            store=store,
            session_sink=session_sink,
        )
        timer.catch_up()
        return timer

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def state(self) -> FocusTimerState:
        return self._state

    @property
    def preset(self) -> Preset:
        return self._state.preset

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def cycle(self) -> int:
        return self._state.cycle

    @property
    def running(self) -> bool:
        return self._state.running

    @property
    def deadline(self) -> int | None:
        return self._state.deadline

    @property
    def remaining_seconds(self) -> int:
        return self._state.remaining_seconds

    @property
    def interruptions(self) -> int:
        return self._interruptions

    def snapshot(self) -> str:
        """Return the JSON snapshot of the current state."""

        return serialize_state(self._state)

    def progress_percent(self) -> int:
        """Share of the current phase already elapsed, 0 to 100."""

        total = self.preset.duration_seconds(self._state.phase)
        if total <= 0:
            return 0
        done = max(0.0, min(1.0, 1 - self._state.remaining_seconds / total))
        return round(done * 100)

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Arm the countdown from the frozen remaining time or a full phase."""

        state = self._state
        if state.running:
            return
        base = (
            state.remaining_seconds
            if state.remaining_seconds > 0
            else self.preset.duration_seconds(state.phase)
        )
        state.deadline = self._clock() + base * 1000
        state.remaining_seconds = base
        state.running = True
        self._schedule_alert(state.deadline, state.phase)
        self._persist()

    def pause(self) -> None:
        """Freeze the remaining time and stop the countdown."""

        state = self._state
        if state.running and state.deadline is not None:
            state.remaining_seconds = seconds_until(state.deadline, self._clock())
        state.running = False
        state.deadline = None
        self._cancel_alert()
        self._persist()

    def toggle(self) -> None:
        if self._state.running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Return to the initial state of the current preset."""

        state = self._state
        state.phase = Phase.FOCUS
        state.cycle = 0
        state.running = False
        state.deadline = None
        state.remaining_seconds = self.preset.duration_seconds(Phase.FOCUS)
        self._interruptions = 0
        self._cancel_alert()
        self._persist()

    def select_preset(self, key: str, custom: CustomDurations | None = None) -> None:
        """Switch to another preset and reset.

        Raises:
            ValueError: if ``key`` is not a known preset.
        """

        custom = custom or self._state.custom
        resolve_preset(key, custom)
        self._state.preset_key = key
        self._state.custom = custom
        self.reset()

    def configure(
        self,
        *,
        auto_start_next: bool | None = None,
        sound_enabled: bool | None = None,
        notifications_enabled: bool | None = None,
        task_title: str | None = None,
    ) -> None:
        state = self._state
        if auto_start_next is not None:
            state.auto_start_next = auto_start_next
        if sound_enabled is not None:
            state.sound_enabled = sound_enabled
        if notifications_enabled is not None:
            state.notifications_enabled = notifications_enabled
        if task_title is not None:
            state.task_title = task_title
        self._persist()

    def skip(self) -> PhaseTransition:
        """End the current phase immediately."""

        return self.on_phase_boundary()

    def record_interruption(self) -> None:
        """Count the surface being hidden while a focus phase runs."""

        if self._state.running and self._state.phase is Phase.FOCUS:
            self._interruptions += 1

    def tick(self) -> int:
        """Recompute the remaining time from the deadline; fire the boundary at zero."""

        state = self._state
        if not state.running or state.deadline is None:
            return state.remaining_seconds
        state.remaining_seconds = seconds_until(state.deadline, self._clock())
        if state.remaining_seconds <= 0:
            self.on_phase_boundary()
        return state.remaining_seconds

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def on_phase_boundary(self) -> PhaseTransition:
        """Announce the end of the current phase and move to the next one."""

        state = self._state
        now = self._clock()
        ended = state.phase
        ended_deadline = state.deadline
        focused_seconds = self._elapsed_seconds(now) if ended is Phase.FOCUS else 0

        if state.sound_enabled:
            self._play_cue()
        self._announce(ended_deadline, ended)
        if ended is Phase.FOCUS:
            self._record_focus_block(now, focused_seconds)

        transition = compute_next_phase(ended, state.cycle, self.preset, now)
        state.phase = transition.phase
        state.cycle = transition.cycle
        if state.auto_start_next:
            state.running = True
            state.deadline = transition.deadline
            state.remaining_seconds = seconds_until(transition.deadline, now)
            self._schedule_alert(transition.deadline, transition.phase)
        else:
            state.running = False
            state.deadline = None
            state.remaining_seconds = self.preset.duration_seconds(transition.phase)
            self._cancel_alert()
        self._persist()
        return transition

    def catch_up(self) -> int:
        """Replay, silently, every boundary whose deadline is already past.

        Boundaries are anchored on the stored deadline so the timer lands where
        it would logically be. The replay stops after ``MAX_CATCH_UP_STEPS``
        and, when auto-start is off, after the first boundary since the timer
        would have stopped there. Returns the number of replayed boundaries.
        """

        state = self._state
        preset = self.preset
        if not state.running or state.deadline is None:
            state.running = False
            state.deadline = None
            if state.remaining_seconds <= 0:
                state.remaining_seconds = preset.duration_seconds(state.phase)
            return 0

        now = self._clock()
        steps = 0
        while state.deadline <= now and steps < MAX_CATCH_UP_STEPS:
            transition = compute_next_phase(state.phase, state.cycle, preset, state.deadline)
            state.phase = transition.phase
            state.cycle = transition.cycle
            steps += 1
            if not state.auto_start_next:
                state.running = False
                state.deadline = None
                state.remaining_seconds = preset.duration_seconds(transition.phase)
                break
            state.deadline = transition.deadline

        if state.running and state.deadline is not None:
            state.remaining_seconds = seconds_until(state.deadline, now)
            self._schedule_alert(state.deadline, state.phase)
        if steps:
            logger.debug("Focus timer caught up %d phase boundaries", steps)
        self._persist()
        return steps

    # ------------------------------------------------------------------
    # Side effects
    # ------------------------------------------------------------------
    def _play_cue(self) -> None:
        try:
            self._alerts.play_cue()
        except Exception:  # audio is optional
            logger.debug("Focus timer cue unavailable", exc_info=True)

    def _notify_if_hidden(self, ended: Phase) -> None:
        if not self._state.notifications_enabled:
            return
        try:
            if self._alerts.is_visible():
                return
            title, body = boundary_message(ended)
            self._alerts.notify(title, body)
        except Exception:  # permission denied or no notification backend
            logger.debug("Focus timer notification unavailable", exc_info=True)

    def _schedule_alert(self, deadline: int, phase: Phase) -> None:
        if self._scheduler is None:
            return

        def _fire() -> None:
            self._announce(deadline, phase)

        try:
            self._scheduler.schedule(deadline, _fire)
        except Exception:
            logger.debug("Could not schedule focus timer alert", exc_info=True)

    def _cancel_alert(self) -> None:
        if self._scheduler is None:
            return
        try:
            self._scheduler.cancel()
        except Exception:
            logger.debug("Could not cancel focus timer alert", exc_info=True)

    def _announce(self, deadline: int | None, ended: Phase) -> None:
        # the scheduler thread and tick() may both reach the same deadline
        with self._announce_lock:
            if deadline is not None:
                if deadline == self._announced_deadline:
                    return
                self._announced_deadline = deadline
        self._notify_if_hidden(ended)

    def _elapsed_seconds(self, now: int) -> int:
        """Seconds of the current phase actually spent; 0 when it never ran."""

        state = self._state
        if state.running and state.deadline is not None:
            remaining = seconds_until(state.deadline, now)
        else:
            remaining = state.remaining_seconds
        return max(0, self.preset.duration_seconds(state.phase) - remaining)

    def _record_focus_block(self, now: int, focused_seconds: int) -> None:
        interruptions, self._interruptions = self._interruptions, 0
        if self._session_sink is None or focused_seconds < 60:
            return
        ended_at = from_epoch_ms(now)
        block = CompletedFocusBlock(
            started_at=ended_at - timedelta(seconds=focused_seconds),
            ended_at=ended_at,
            minutes=focused_seconds // 60,
            preset=self.preset.key,
            interruptions=interruptions,
            task_title=self._state.task_title or None,
        )
        try:
            self._session_sink(block)
        except Exception:
            logger.warning("Could not record focus session", exc_info=True)

    def _persist(self) -> None:
        if self._store is None:
            return
        try:
            self._store.set(SNAPSHOT_KEY, self.snapshot())
        except OSError:
            logger.warning("Could not persist focus timer snapshot", exc_info=True)


__all__ = [
    "Clock",
    "FocusTimer",
    "MAX_CATCH_UP_STEPS",
    "SessionSink",
    "seconds_until",
    "system_clock",
]
