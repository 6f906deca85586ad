"""Boundary alert back ends for hosts running the focus timer."""

from __future__ import annotations

import logging
import sys
import threading
import time
from typing import Callable, TextIO

logger = logging.getLogger(__name__)


class TerminalAlerts:
    """Ring the terminal bell and print notifications to ``stream``."""

    def __init__(self, stream: TextIO | None = None, *, visible: bool = True) -> None:
        self._stream = stream or sys.stdout
        self.visible = visible

    def play_cue(self) -> None:
        self._stream.write("\a")
        self._stream.flush()

    def notify(self, title: str, body: str) -> None:
        self._stream.write(f"\n{title} {body}\n")
        self._stream.flush()

    def is_visible(self) -> bool:
        return self.visible


class ThreadingBoundaryScheduler:
    """Fire a callback once at an absolute epoch-ms instant on a daemon timer thread."""

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def schedule(self, at_ms: int, callback: Callable[[], None]) -> None:
        delay = max(0.0, (at_ms - self._clock()) / 1000)
        timer = threading.Timer(delay, self._run, args=(callback,))
        timer.daemon = True
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @staticmethod
    def _run(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:
            logger.debug("Scheduled focus alert failed", exc_info=True)


__all__ = ["TerminalAlerts", "ThreadingBoundaryScheduler"]
