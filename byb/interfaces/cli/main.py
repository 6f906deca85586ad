"""Command line entry point: terminal focus timer and the push dispatcher."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, Sequence, TextIO

from sqlalchemy.exc import SQLAlchemyError

from byb.application.focus_timer import FocusTimer
from byb.application.use_cases.focus_sessions import log_completed_block
from byb.application.use_cases.push import dispatch_due_notifications
from byb.domain.entities import (
    CUSTOM_PRESET_KEY,
    PRESETS,
    CompletedFocusBlock,
    CustomDurations,
)
from byb.infrastructure.alerts import TerminalAlerts, ThreadingBoundaryScheduler
from byb.infrastructure.database import SessionLocal, initialize_database
from byb.infrastructure.push import PushConfigurationError, WebPushSender
from byb.infrastructure.snapshot_store import JsonFileSnapshotStore

logger = logging.getLogger(__name__)

DEFAULT_STATE_FILE = Path.home() / ".byb" / "focus_timer.json"


def format_clock(seconds: int) -> str:
    """Return ``MM:SS`` for a non-negative number of seconds."""

    seconds = max(0, seconds)
    minutes, rest = divmod(seconds, 60)
    return f"{minutes:02d}:{rest:02d}"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(prog="byb", description="BYB focus timer and reminders.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    focus = subparsers.add_parser("focus", help="Run the focus timer in this terminal")
    focus.add_argument(
        "--preset",
        choices=[*PRESETS, CUSTOM_PRESET_KEY],
        default=None,
        help="Switch preset (resets the timer). Defaults to the restored preset.",
    )
    focus.add_argument("--focus", type=int, default=None, help="Custom focus minutes (1-240)")
    focus.add_argument("--short", type=int, default=None, help="Custom short break minutes (1-60)")
    focus.add_argument("--long", type=int, default=None, help="Custom long break minutes (1-120)")
    focus.add_argument(
        "--cycles", type=int, default=None, help="Custom focus cycles before a long break (1-12)"
    )
    focus.add_argument(
        "--no-auto-start",
        action="store_true",
        help="Stop after each phase instead of starting the next one",
    )
    focus.add_argument("--no-sound", action="store_true", help="Do not ring the terminal bell")
    focus.add_argument("--task", default=None, help="Title of the task being worked on")
    focus.add_argument(
        "--user-id",
        default=None,
        help="Log completed focus blocks to the database for this user",
    )
    focus.add_argument(
        "--state-file",
        type=Path,
        default=DEFAULT_STATE_FILE,
        help=f"Snapshot file (default: {DEFAULT_STATE_FILE})",
    )
    focus.set_defaults(handler=run_focus)

    dispatch = subparsers.add_parser("dispatch", help="Deliver due push notifications once")
    dispatch.set_defaults(handler=run_dispatch)

    return parser.parse_args(argv)


def _database_session_sink(user_id: str) -> Callable[[CompletedFocusBlock], None]:
    initialize_database()

    def _sink(block: CompletedFocusBlock) -> None:
        session = SessionLocal()
        try:
            log_completed_block(session, user_id=user_id, block=block)
        except SQLAlchemyError:
            session.rollback()
            raise
        finally:
            session.close()

    return _sink


def _custom_durations(args: argparse.Namespace) -> CustomDurations | None:
    values = (args.focus, args.short, args.long, args.cycles)
    if all(value is None for value in values):
        return None
    return CustomDurations.clamped(
        focus_minutes=args.focus,
        short_minutes=args.short,
        long_minutes=args.long,
        cycles_before_long=args.cycles,
    )


def run_focus(
    args: argparse.Namespace,
    *,
    stream: TextIO | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Restore the timer, start it and render it until interrupted or stopped."""

    stream = stream or sys.stdout
    store = JsonFileSnapshotStore(args.state_file)
    timer = FocusTimer.restore(
        store,
        alerts=TerminalAlerts(stream),
        scheduler=ThreadingBoundaryScheduler(),
        session_sink=_database_session_sink(args.user_id) if args.user_id else None,
    )

    custom = _custom_durations(args)
    if args.preset is not None:
        timer.select_preset(args.preset, custom)
    elif custom is not None and timer.state.preset_key == CUSTOM_PRESET_KEY:
        timer.select_preset(CUSTOM_PRESET_KEY, custom)

    timer.configure(
        auto_start_next=not args.no_auto_start,
        sound_enabled=not args.no_sound,
        task_title=args.task,
    )
    timer.start()

    try:
        while True:
            remaining = timer.tick()
            preset = timer.preset
            stream.write(
                f"\r{format_clock(remaining)} • {timer.phase.label:<11} "
                f"cycles {timer.cycle}/{preset.cycles_before_long}"
            )
            stream.flush()
            if not timer.running:
                stream.write(
                    f"\n{timer.phase.label} is next. Run 'byb focus' again to start it.\n"
                )
                return 0
            sleep(1)
    except KeyboardInterrupt:
        timer.pause()
        stream.write(f"\nPaused with {format_clock(timer.remaining_seconds)} left.\n")
        return 0


def run_dispatch(args: argparse.Namespace) -> int:
    """Run the push dispatcher once; exit status 1 on failure."""

    initialize_database()
    try:
        sender = WebPushSender()
    except PushConfigurationError as exc:
        print(f"Push is not configured: {exc}", file=sys.stderr)
        return 1

    session = SessionLocal()
    try:
        result = dispatch_due_notifications(session, sender=sender)
    except SQLAlchemyError as exc:
        session.rollback()
        print(f"Dispatch failed: {exc}", file=sys.stderr)
        return 1
    finally:
        session.close()

    print(f"sent={result.sent} processed={result.processed} pruned={result.pruned}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
