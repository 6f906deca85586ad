"""Tests for the deadline-based focus timer engine."""

from __future__ import annotations

import pytest

from byb.application.focus_timer import (
    MAX_CATCH_UP_STEPS,
    SNAPSHOT_KEY,
    FocusTimer,
    ManualScheduler,
    parse_snapshot,
    serialize_state,
    seconds_until,
)
from byb.domain.entities import (
    CompletedFocusBlock,
    CustomDurations,
    FocusTimerState,
    Phase,
)
from byb.infrastructure.snapshot_store import MemorySnapshotStore


class RecordingAlerts:
    def __init__(self, *, visible: bool = True) -> None:
        self.visible = visible
        self.cues = 0
        self.notifications: list[tuple[str, str]] = []

    def play_cue(self) -> None:
        self.cues += 1

    def notify(self, title: str, body: str) -> None:
        self.notifications.append((title, body))

    def is_visible(self) -> bool:
        return self.visible


class BrokenAlerts:
    def play_cue(self) -> None:
        raise RuntimeError("no audio device")

    def notify(self, title: str, body: str) -> None:
        raise PermissionError("notifications denied")

    def is_visible(self) -> bool:
        return False


@pytest.mark.parametrize(
    ("deadline", "now", "expected"),
    [
        (10_000, 0, 10),
        (10_000, 9_001, 1),
        (10_000, 10_000, 0),
        (10_000, 50_000, 0),
        (10_500, 0, 11),
    ],
)
def test_seconds_until_rounds_up_and_never_goes_negative(deadline, now, expected) -> None:
    assert seconds_until(deadline, now) == expected


def test_fresh_timer_is_paused_on_a_full_focus_block(clock) -> None:
    timer = FocusTimer(clock=clock)

    assert timer.phase is Phase.FOCUS
    assert timer.cycle == 0
    assert timer.running is False
    assert timer.deadline is None
    assert timer.remaining_seconds == 25 * 60
    assert timer.progress_percent() == 0


def test_start_sets_the_deadline_from_the_clock(clock) -> None:
    timer = FocusTimer(clock=clock)
    timer.start()

    assert timer.running is True
    assert timer.deadline == clock.now + 25 * 60 * 1000
    assert timer.remaining_seconds == 25 * 60


def test_start_while_running_keeps_the_deadline(clock) -> None:
    timer = FocusTimer(clock=clock)
    timer.start()
    deadline = timer.deadline

    clock.advance(30)
    timer.start()

    assert timer.deadline == deadline


def test_remaining_time_follows_the_clock_even_after_a_long_suspension(clock) -> None:
    timer = FocusTimer(clock=clock)
    timer.start()
    deadline = timer.deadline

    clock.now += 7 * 60 * 1000 + 200
    assert timer.tick() == seconds_until(deadline, clock.now) == 18 * 60

    clock.now = deadline - 1
    assert timer.tick() == 1
    assert timer.phase is Phase.FOCUS


def test_tick_at_the_deadline_moves_to_the_next_phase_anchored_on_now(clock) -> None:
    timer = FocusTimer(clock=clock)
    timer.start()

    # the host slept well past the deadline: one boundary, next phase starts now
    clock.advance(25 * 60 + 90)
    remaining = timer.tick()

    assert timer.phase is Phase.SHORT_BREAK
    assert timer.cycle == 1
    assert timer.running is True
    assert timer.deadline == clock.now + 5 * 60 * 1000
    assert remaining == 5 * 60


def test_cycle_rollover_into_the_long_break(clock) -> None:
    timer = FocusTimer(clock=clock)
    timer.start()

    observed = []
    for _ in range(8):
        transition = timer.skip()
        observed.append((transition.phase, transition.cycle))

    assert observed == [
        (Phase.SHORT_BREAK, 1),
        (Phase.FOCUS, 1),
        (Phase.SHORT_BREAK, 2),
        (Phase.FOCUS, 2),
        (Phase.SHORT_BREAK, 3),
        (Phase.FOCUS, 3),
        (Phase.LONG_BREAK, 0),
        (Phase.FOCUS, 0),
    ]


def test_pause_and_resume_preserve_the_remaining_time(clock) -> None:
    timer = FocusTimer(clock=clock)
    timer.start()
    clock.advance(100)

    timer.pause()
    assert timer.running is False
    assert timer.deadline is None
    assert timer.remaining_seconds == 1400

    clock.advance(3600)
    assert timer.tick() == 1400

    timer.start()
    assert timer.deadline == clock.now + 1400 * 1000
    timer.pause()
    assert timer.remaining_seconds == 1400


def test_toggle_switches_between_running_and_paused(clock) -> None:
    timer = FocusTimer(clock=clock)

    timer.toggle()
    assert timer.running is True
    timer.toggle()
    assert timer.running is False


def test_auto_start_off_stops_on_the_next_phase_with_its_full_duration(clock) -> None:
    timer = FocusTimer(FocusTimerState.initial(auto_start_next=False), clock=clock)
    timer.start()
    clock.advance(25 * 60)

    timer.tick()

    assert timer.phase is Phase.SHORT_BREAK
    assert timer.running is False
    assert timer.deadline is None
    assert timer.remaining_seconds == 5 * 60


def test_reset_returns_to_the_first_focus_block(clock) -> None:
    timer = FocusTimer(clock=clock)
    timer.start()
    timer.skip()
    timer.skip()
    timer.skip()

    timer.reset()

    assert (timer.phase, timer.cycle, timer.running) == (Phase.FOCUS, 0, False)
    assert timer.remaining_seconds == 25 * 60


def test_select_preset_switches_durations_and_resets(clock) -> None:
    timer = FocusTimer(clock=clock)
    timer.start()
    timer.skip()

    timer.select_preset("deep")

    assert timer.preset.key == "deep"
    assert timer.phase is Phase.FOCUS
    assert timer.running is False
    assert timer.remaining_seconds == 50 * 60


def test_select_custom_preset_uses_clamped_durations(clock) -> None:
    timer = FocusTimer(clock=clock)

    timer.select_preset(
        "custom", CustomDurations.clamped(focus_minutes=500, cycles_before_long=2)
    )

    assert timer.preset.focus_minutes == 240
    assert timer.preset.cycles_before_long == 2
    assert timer.remaining_seconds == 240 * 60


def test_select_unknown_preset_is_rejected(clock) -> None:
    timer = FocusTimer(clock=clock)

    with pytest.raises(ValueError):
        timer.select_preset("marathon")
    assert timer.preset.key == "pomodoro"


def test_failing_alerts_do_not_stop_the_countdown(clock) -> None:
    timer = FocusTimer(clock=clock, alerts=BrokenAlerts())
    timer.start()
    clock.advance(25 * 60)

    timer.tick()

    assert timer.phase is Phase.SHORT_BREAK
    assert timer.running is True


def test_boundary_notifies_only_when_the_surface_is_hidden(clock) -> None:
    visible = RecordingAlerts(visible=True)
    timer = FocusTimer(clock=clock, alerts=visible)
    timer.start()
    timer.skip()
    assert visible.cues == 1
    assert visible.notifications == []

    hidden = RecordingAlerts(visible=False)
    timer = FocusTimer(clock=clock, alerts=hidden)
    timer.start()
    timer.skip()
    timer.skip()
    assert hidden.notifications == [
        ("Break time!", "Focus block complete"),
        ("Back to focus!", "Break finished"),
    ]


def test_sound_and_notifications_can_be_disabled(clock) -> None:
    alerts = RecordingAlerts(visible=False)
    timer = FocusTimer(clock=clock, alerts=alerts)
    timer.configure(sound_enabled=False, notifications_enabled=False)
    timer.start()

    timer.skip()

    assert alerts.cues == 0
    assert alerts.notifications == []


def test_scheduled_alert_is_not_repeated_by_the_boundary(clock) -> None:
    alerts = RecordingAlerts(visible=False)
    scheduler = ManualScheduler()
    timer = FocusTimer(clock=clock, alerts=alerts, scheduler=scheduler)
    timer.start()
    assert scheduler.at_ms == timer.deadline

    clock.advance(25 * 60)
    assert scheduler.fire() is True
    timer.tick()

    assert alerts.notifications == [("Break time!", "Focus block complete")]
    assert scheduler.at_ms == timer.deadline


def test_pause_cancels_the_scheduled_alert(clock) -> None:
    scheduler = ManualScheduler()
    timer = FocusTimer(clock=clock, scheduler=scheduler)
    timer.start()

    timer.pause()

    assert scheduler.at_ms is None
    assert scheduler.fire() is False


def test_completed_focus_blocks_reach_the_session_sink(clock) -> None:
    blocks: list[CompletedFocusBlock] = []
    timer = FocusTimer(clock=clock, session_sink=blocks.append)
    timer.configure(task_title="Write report")
    timer.start()
    timer.record_interruption()
    timer.record_interruption()
    clock.advance(25 * 60)

    timer.tick()
    timer.skip()  # the break does not produce a block

    assert len(blocks) == 1
    block = blocks[0]
    assert block.minutes == 25
    assert block.preset == "pomodoro"
    assert block.interruptions == 2
    assert block.task_title == "Write report"
    assert (block.ended_at - block.started_at).total_seconds() == 25 * 60
    assert timer.interruptions == 0


def test_interruptions_are_only_counted_while_focusing(clock) -> None:
    timer = FocusTimer(clock=clock)
    timer.record_interruption()
    assert timer.interruptions == 0

    timer.start()
    timer.skip()
    timer.record_interruption()
    assert timer.interruptions == 0


def test_failing_session_sink_is_logged_and_ignored(clock) -> None:
    def _sink(block: CompletedFocusBlock) -> None:
        raise RuntimeError("database down")

    timer = FocusTimer(clock=clock, session_sink=_sink)
    timer.start()

    timer.skip()

    assert timer.phase is Phase.SHORT_BREAK


def test_every_change_is_persisted(clock) -> None:
    store = MemorySnapshotStore()
    timer = FocusTimer(clock=clock, store=store)

    timer.start()
    snapshot = parse_snapshot(store.get(SNAPSHOT_KEY))
    assert snapshot is not None
    assert snapshot.running is True
    assert snapshot.target_at == timer.deadline

    timer.pause()
    snapshot = parse_snapshot(store.get(SNAPSHOT_KEY))
    assert snapshot.running is False
    assert snapshot.target_at is None
    assert snapshot.remaining == 25 * 60


def test_restore_replays_missed_boundaries_like_manual_transitions(clock) -> None:
    store = MemorySnapshotStore()
    started_at = clock.now
    FocusTimer(clock=clock, store=store).start()

    # focus (25) + short (5) + focus (25) have all elapsed
    clock.advance(55 * 60 + 1)
    restored = FocusTimer.restore(store, clock=clock)

    manual = FocusTimer(clock=clock)
    manual.start()
    for _ in range(3):
        manual.on_phase_boundary()

    assert (restored.phase, restored.cycle) == (manual.phase, manual.cycle)
    assert (restored.phase, restored.cycle) == (Phase.SHORT_BREAK, 2)
    assert restored.running is True
    assert restored.deadline == started_at + 60 * 60 * 1000
    assert restored.remaining_seconds == seconds_until(restored.deadline, clock.now)


def test_restore_is_silent(clock) -> None:
    store = MemorySnapshotStore()
    FocusTimer(clock=clock, store=store).start()
    clock.advance(26 * 60)

    alerts = RecordingAlerts(visible=False)
    blocks: list[CompletedFocusBlock] = []
    FocusTimer.restore(store, clock=clock, alerts=alerts, session_sink=blocks.append)

    assert alerts.cues == 0
    assert alerts.notifications == []
    assert blocks == []


def test_catch_up_is_bounded(clock) -> None:
    state = FocusTimerState.initial(running=True, deadline=clock.now - 7 * 24 * 3600 * 1000)
    timer = FocusTimer(state, clock=clock)

    steps = timer.catch_up()

    assert steps == MAX_CATCH_UP_STEPS
    assert timer.running is True
    assert timer.deadline < clock.now
    assert timer.remaining_seconds == 0


def test_catch_up_with_auto_start_off_stops_after_one_boundary(clock) -> None:
    state = FocusTimerState.initial(
        running=True,
        deadline=clock.now - 2 * 3600 * 1000,
        auto_start_next=False,
    )
    timer = FocusTimer(state, clock=clock)

    assert timer.catch_up() == 1
    assert timer.phase is Phase.SHORT_BREAK
    assert timer.cycle == 1
    assert timer.running is False
    assert timer.remaining_seconds == 5 * 60


def test_restore_from_an_empty_store_gives_a_fresh_timer(clock) -> None:
    timer = FocusTimer.restore(MemorySnapshotStore(), clock=clock)

    assert timer.state == FocusTimerState.initial()


def test_restore_ignores_an_older_snapshot_version(clock) -> None:
    state = FocusTimerState.initial("deep", cycle=1)
    legacy = serialize_state(state).replace('"v":3', '"v":2')
    store = MemorySnapshotStore({SNAPSHOT_KEY: legacy})

    timer = FocusTimer.restore(store, clock=clock)

    assert timer.preset.key == "pomodoro"
    assert timer.cycle == 0


def test_restore_keeps_a_paused_timer_frozen(clock) -> None:
    store = MemorySnapshotStore()
    timer = FocusTimer(clock=clock, store=store)
    timer.start()
    clock.advance(600)
    timer.pause()

    clock.advance(24 * 3600)
    restored = FocusTimer.restore(store, clock=clock)

    assert restored.running is False
    assert restored.remaining_seconds == 15 * 60


def test_snapshot_matches_what_is_persisted(clock) -> None:
    store = MemorySnapshotStore()
    timer = FocusTimer(clock=clock, store=store)
    timer.start()
    clock.advance(750)
    timer.pause()

    assert timer.progress_percent() == 50
    assert store.get(SNAPSHOT_KEY) == timer.snapshot()
    assert parse_snapshot(timer.snapshot()).remaining == 750


def test_skipping_mid_focus_logs_only_the_time_spent(clock) -> None:
    blocks: list[CompletedFocusBlock] = []
    timer = FocusTimer(clock=clock, session_sink=blocks.append)
    timer.start()
    clock.advance(10 * 60 + 30)

    timer.skip()

    [block] = blocks
    assert block.minutes == 10
    assert (block.ended_at - block.started_at).total_seconds() == 10 * 60 + 30


def test_skipping_a_focus_block_that_never_ran_logs_nothing(clock) -> None:
    blocks: list[CompletedFocusBlock] = []
    timer = FocusTimer(clock=clock, session_sink=blocks.append)

    timer.skip()

    assert blocks == []
    assert timer.phase is Phase.SHORT_BREAK


def test_focus_under_a_minute_is_not_logged(clock) -> None:
    blocks: list[CompletedFocusBlock] = []
    timer = FocusTimer(clock=clock, session_sink=blocks.append)
    timer.start()
    clock.advance(10)

    timer.skip()

    assert blocks == []


def test_paused_focus_logs_the_time_before_the_pause(clock) -> None:
    blocks: list[CompletedFocusBlock] = []
    timer = FocusTimer(clock=clock, session_sink=blocks.append)
    timer.start()
    clock.advance(5 * 60)
    timer.pause()
    clock.advance(3600)

    timer.skip()

    assert [block.minutes for block in blocks] == [5]


class CapturingScheduler:
    def __init__(self) -> None:
        self.callbacks = []

    def schedule(self, at_ms, callback) -> None:
        self.callbacks.append((at_ms, callback))

    def cancel(self) -> None:
        return None


def test_late_scheduled_alert_does_not_repeat_the_boundary_notification(clock) -> None:
    alerts = RecordingAlerts(visible=False)
    scheduler = CapturingScheduler()
    timer = FocusTimer(clock=clock, alerts=alerts, scheduler=scheduler)
    timer.start()
    clock.advance(25 * 60)

    timer.tick()
    at_ms, callback = scheduler.callbacks[0]
    callback()

    assert alerts.notifications == [("Break time!", "Focus block complete")]
