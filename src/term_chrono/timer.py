"""Countdown timer state machine."""

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Optional

from .clock import SharedClock
from .durations import format_remaining

log = logging.getLogger(__name__)


class TimerStatus(enum.Enum):
    UNCONFIGURED = "unconfigured"
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"


@dataclass(frozen=True)
class TimerSnapshot:
    """Consistent view of a Timer at one instant.

    ``expired`` is only ever True in the one snapshot returned by
    :meth:`Timer.poll` that observed the expiry.
    """
    status: TimerStatus
    remaining: float
    configured: float
    active: bool
    reprint: bool = False
    expired: bool = False

    @property
    def text(self) -> str:
        return format_remaining(self.remaining)


class Timer:
    """Counts down from a configured duration against a SharedClock.

    A stop keeps the leftover time in ``remaining_on_pause`` so the next
    start resumes from it rather than from the configured duration. Expiry
    is reported once per start cycle; ``expired_notified`` guards against
    reporting it again until the timer is reset or restarted.
    """

    def __init__(self, clock: SharedClock, duration: float = 0.0):
        self.clock = clock
        self.changed = threading.Event()
        self.configured_duration = float(duration)
        self.end_mark: Optional[float] = None
        self.remaining_on_pause = 0.0
        self.active = False
        self.expired_notified = False
        self._reprint = False

    def _status(self, now: float) -> TimerStatus:
        if self.end_mark is not None:
            return TimerStatus.EXPIRED if now >= self.end_mark else TimerStatus.RUNNING
        if self.configured_duration <= 0 and self.remaining_on_pause <= 0:
            return TimerStatus.UNCONFIGURED
        return TimerStatus.IDLE

    def _snapshot(self, now: float, expired: bool = False) -> TimerSnapshot:
        status = self._status(now)
        if status is TimerStatus.RUNNING:
            remaining = self.end_mark - now
        elif status is TimerStatus.EXPIRED:
            remaining = 0.0
        elif self.remaining_on_pause > 0:
            remaining = self.remaining_on_pause
        else:
            remaining = self.configured_duration
        return TimerSnapshot(
            status=status,
            remaining=remaining,
            configured=self.configured_duration,
            active=self.active,
            reprint=self._reprint,
            expired=expired,
        )

    @property
    def status(self) -> TimerStatus:
        with self.clock.lock:
            return self._status(self.clock.now())

    def configure(self, seconds: float):
        """Set the duration used by the next fresh start.

        A countdown already in progress is not affected.
        """
        with self.clock.lock:
            self.configured_duration = float(seconds)
            log.debug("Timer configured for %.0fs", seconds)
        self.changed.set()

    def start(self) -> bool:
        """Start, resume or restart the countdown.

        A timer with no duration and nothing paused is not started; a zero
        countdown would only expire on the spot.

        Returns:
            False if there is nothing to count down, True otherwise
        """
        with self.clock.lock:
            now = self.clock.now()
            status = self._status(now)
            if status is TimerStatus.UNCONFIGURED:
                log.warning("Timer has no duration set, not starting")
                return False
            if status is TimerStatus.RUNNING:
                self.active = True
            elif self.remaining_on_pause > 0:
                self.end_mark = now + self.remaining_on_pause
                self.remaining_on_pause = 0.0
                self.expired_notified = False
                self.active = True
                log.debug("Timer resumed, ends at %.3f", self.end_mark)
            elif self.configured_duration > 0:
                self.end_mark = now + self.configured_duration
                self.expired_notified = False
                self.active = True
                log.debug("Timer started, ends at %.3f", self.end_mark)
            else:
                log.warning("Timer has no duration set, not starting")
                return False
        self.changed.set()
        return True

    def stop(self):
        """Pause a running countdown, keeping the time left.

        A countdown whose end has already passed is left alone, so the next
        poll still reports the expiry.
        """
        with self.clock.lock:
            now = self.clock.now()
            if self._status(now) is TimerStatus.RUNNING:
                self.remaining_on_pause = max(0.0, self.end_mark - now)
                self.end_mark = None
                log.debug("Timer stopped with %.3fs left", self.remaining_on_pause)
            self.active = False
        self.changed.set()

    def reset(self):
        """Clear the countdown and request one re-print of the configured duration."""
        with self.clock.lock:
            self.end_mark = None
            self.remaining_on_pause = 0.0
            self.active = False
            self.expired_notified = False
            self._reprint = True
            log.debug("Timer reset")
        self.changed.set()

    def snapshot(self) -> TimerSnapshot:
        with self.clock.lock:
            return self._snapshot(self.clock.now())

    def poll(self) -> TimerSnapshot:
        """Snapshot for a renderer.

        Consumes any pending re-print request, and flags expiry the first
        time it is observed in a start cycle.
        """
        with self.clock.lock:
            now = self.clock.now()
            expired = False
            if self._status(now) is TimerStatus.EXPIRED and not self.expired_notified:
                self.expired_notified = True
                self.active = False
                expired = True
                log.debug("Timer expired at %.3f", now)
            snapshot = self._snapshot(now, expired=expired)
            self._reprint = False
            return snapshot
