"""
Background renderers for the time display.

Each renderer is a thread that redraws a single terminal line in place. It
wakes on its engine's ``changed`` event or after a fixed period, whichever
comes first, takes a snapshot under the shared lock, and prints outside it.
"""

import logging
import sys
import threading
from typing import Optional, TextIO, Union

from blessed import Terminal

from .errors import NotifierError
from .notify import Notifier
from .stopwatch import Stopwatch, StopwatchStatus
from .timer import Timer, TimerStatus

log = logging.getLogger(__name__)


class Display:
    """Serialised writer for the single status line.

    Attributes:
        term: Blessed Terminal used for the clear-to-end-of-line sequence
        stream: Output stream; stdout when None
        enabled: Print-enable flag; while cleared, :meth:`show` does nothing
    """

    def __init__(self, term: Optional[Terminal] = None, stream: Optional[TextIO] = None):
        self.term = term or Terminal()
        self.stream = stream
        self.enabled = True
        self._lock = threading.Lock()

    def enable(self):
        with self._lock:
            self.enabled = True

    def disable(self):
        with self._lock:
            self.enabled = False

    def show(self, text: str) -> bool:
        """Overwrite the current line with ``text`` if output is enabled.

        Returns:
            True if the line was printed
        """
        with self._lock:
            if not self.enabled:
                return False
            print('\r' + text + self.term.clear_eol, end='', flush=True, file=self.stream or sys.stdout)
            return True

    def write(self, text: str):
        """Print ``text`` unconditionally, without a trailing newline."""
        with self._lock:
            print(text, end='', flush=True, file=self.stream or sys.stdout)


class Renderer(threading.Thread):
    """Base class for renderer threads.

    Subclasses implement :meth:`render_once`.
    """

    def __init__(self, engine: Union[Stopwatch, Timer], display: Display,
                 cancel: threading.Event, period: float = 0.2):
        super().__init__(name=type(self).__name__, daemon=True)
        self.engine = engine
        self.display = display
        self.cancel = cancel
        self.period = period

    def render_once(self):
        raise NotImplementedError

    def run(self):
        log.debug("%s started with period %.3fs", self.name, self.period)
        while not self.cancel.is_set():
            self.engine.changed.wait(self.period)
            self.engine.changed.clear()
            if self.cancel.is_set():
                break
            self.render_once()
        log.debug("%s stopped", self.name)


class StopwatchRenderer(Renderer):
    """Prints elapsed time while the stopwatch is running."""

    engine: Stopwatch

    def render_once(self):
        snapshot = self.engine.poll()
        if snapshot.reprint or (snapshot.active and snapshot.status is StopwatchStatus.RUNNING):
            self.display.show(snapshot.text)


class TimerRenderer(Renderer):
    """Prints remaining time and fires the notifier once on expiry."""

    engine: Timer

    def __init__(self, engine: Timer, display: Display, cancel: threading.Event,
                 notifier: Notifier, period: float = 0.2):
        super().__init__(engine, display, cancel, period)
        self.notifier = notifier

    def render_once(self):
        snapshot = self.engine.poll()
        if snapshot.expired:
            self.display.show(snapshot.text)
            self._notify()
        elif snapshot.reprint or (snapshot.active and snapshot.status is TimerStatus.RUNNING):
            self.display.show(snapshot.text)

    def _notify(self):
        try:
            self.notifier.notify()
        except (NotifierError, OSError) as exc:
            log.error("Timer expired but the alert failed: %s", exc)
