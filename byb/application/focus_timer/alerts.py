"""Ports used by the focus timer to announce phase boundaries."""

from __future__ import annotations

from typing import Callable, Protocol

from byb.domain.entities import Phase


class BoundaryAlerts(Protocol):
    """Audible and visual cues raised when a phase ends."""

    def play_cue(self) -> None:
        """Play a short sound. May raise when no audio device is available."""

    def notify(self, title: str, body: str) -> None:
        """Show a system notification. May raise when permission is denied."""

    def is_visible(self) -> bool:
        """Return ``True`` while the user is looking at the timer surface."""


class BoundaryScheduler(Protocol):
    """One-shot timer firing ``callback`` at an absolute epoch-ms instant."""

    def schedule(self, at_ms: int, callback: Callable[[], None]) -> None: ...

    def cancel(self) -> None: ...


class SilentAlerts:
    """Alerts that do nothing; the timer then behaves as a visual-only countdown."""

    def play_cue(self) -> None:
        return None

    def notify(self, title: str, body: str) -> None:
        return None

    def is_visible(self) -> bool:
        return True


class ManualScheduler:
    """Scheduler that only records the pending alert.

    Useful when the host drives time itself (tests, embedding); call
    :meth:`fire` to trigger the pending callback.
    """

    def __init__(self) -> None:
        self.at_ms: int | None = None
        self._callback: Callable[[], None] | None = None

    def schedule(self, at_ms: int, callback: Callable[[], None]) -> None:
        self.at_ms = at_ms
        self._callback = callback

    def cancel(self) -> None:
        self.at_ms = None
        self._callback = None

    def fire(self) -> bool:
        callback = self._callback
        self.cancel()
        if callback is None:
            return False
        callback()
        return True


def boundary_message(ended: Phase) -> tuple[str, str]:
    """Return the notification ``(title, body)`` for the phase that just ended."""

    if ended is Phase.FOCUS:
        return "Break time!", "Focus block complete"
    return "Back to focus!", "Break finished"


__all__ = [
    "BoundaryAlerts",
    "BoundaryScheduler",
    "ManualScheduler",
    "SilentAlerts",
    "boundary_message",
]
