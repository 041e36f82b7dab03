"""Stopwatch state machine."""

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Optional

from .clock import SharedClock
from .durations import format_elapsed

log = logging.getLogger(__name__)


class StopwatchStatus(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True)
class StopwatchSnapshot:
    """Consistent view of a Stopwatch at one instant."""
    status: StopwatchStatus
    elapsed: float
    active: bool
    reprint: bool = False

    @property
    def text(self) -> str:
        return format_elapsed(self.elapsed)


class Stopwatch:
    """Tracks elapsed time since a start mark taken from a SharedClock.

    Stopping only suppresses display: the start mark is left untouched, so
    elapsed time keeps advancing while paused and a later ``start`` resumes
    from the original mark. Only ``reset`` clears the mark.

    All fields are guarded by the clock's lock. The ``changed`` event is set
    on every transition so a renderer can wake without waiting for its tick.
    """

    def __init__(self, clock: SharedClock):
        self.clock = clock
        self.changed = threading.Event()
        self._start_mark: Optional[float] = None
        self._active = False
        self._reprint = False

    def _status(self) -> StopwatchStatus:
        if self._start_mark is None:
            return StopwatchStatus.IDLE
        return StopwatchStatus.RUNNING if self._active else StopwatchStatus.PAUSED

    def _snapshot(self) -> StopwatchSnapshot:
        elapsed = 0.0
        if self._start_mark is not None:
            elapsed = max(0.0, self.clock.now() - self._start_mark)
        return StopwatchSnapshot(self._status(), elapsed, self._active, self._reprint)

    @property
    def status(self) -> StopwatchStatus:
        with self.clock.lock:
            return self._status()

    def start(self):
        """Start from idle, or resume display when paused."""
        with self.clock.lock:
            if self._start_mark is None:
                self._start_mark = self.clock.now()
                log.debug("Stopwatch started at %.3f", self._start_mark)
            elif not self._active:
                log.debug("Stopwatch resumed, mark %.3f kept", self._start_mark)
            self._active = True
        self.changed.set()

    def stop(self):
        with self.clock.lock:
            self._active = False
            log.debug("Stopwatch display stopped")
        self.changed.set()

    def reset(self):
        """Return to idle and request one zeroed re-print."""
        with self.clock.lock:
            self._start_mark = None
            self._active = False
            self._reprint = True
            log.debug("Stopwatch reset")
        self.changed.set()

    def snapshot(self) -> StopwatchSnapshot:
        with self.clock.lock:
            return self._snapshot()

    def poll(self) -> StopwatchSnapshot:
        """Snapshot for a renderer; consumes any pending re-print request."""
        with self.clock.lock:
            snapshot = self._snapshot()
            self._reprint = False
            return snapshot
