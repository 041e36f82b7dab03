"""
Shared notion of "now" for a chrono session.

A single ClockSource thread refreshes the SharedClock on a short fixed period;
every other thread reads the published value instead of calling the time
source itself, so all of them agree on the current time within one period.
"""

import logging
import threading
import time
from typing import Callable

log = logging.getLogger(__name__)


class SharedClock:
    """The session clock, plus the lock that guards all session state.

    The stored value only ever moves forward. Engines built on this clock use
    :attr:`lock` for their own fields as well, so a snapshot of engine state
    and the time it was computed against are always consistent.

    Attributes:
        lock: Re-entrant lock shared by the clock and the engines
        source: Callable returning the current time in seconds
    """

    def __init__(self, source: Callable[[], float] = time.monotonic):
        self.lock = threading.RLock()
        self.source = source
        self._now = source()

    def tick(self) -> float:
        """Refresh the clock from its source and return the new value."""
        reading = self.source()
        with self.lock:
            if reading > self._now:
                self._now = reading
            return self._now

    def now(self) -> float:
        """Most recently published time."""
        with self.lock:
            return self._now


class ClockSource(threading.Thread):
    """Background thread that ticks a SharedClock until cancelled."""

    def __init__(self, clock: SharedClock, cancel: threading.Event, period: float = 0.03):
        super().__init__(name="clock-source", daemon=True)
        self.clock = clock
        self.cancel = cancel
        self.period = period

    def run(self):
        log.debug("Clock source started with period %.3fs", self.period)
        while not self.cancel.wait(self.period):
            self.clock.tick()
        log.debug("Clock source stopped")
