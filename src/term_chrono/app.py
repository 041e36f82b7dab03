"""
Foreground command loop.

ChronoApp commits to one mode per session, starts the clock, renderer and
key pump threads, and maps each received key to exactly one engine
transition until the user quits.
"""

import enum
import logging
import threading
from typing import Callable, Dict, List, Optional, TextIO

from blessed import Terminal

from .clock import ClockSource, SharedClock
from .config import Settings
from .durations import parse_duration
from .errors import DurationError
from .keys import (
    BACKSPACE_KEYS,
    ENTER_KEYS,
    ENTRY_KEYS,
    ESCAPE_KEY,
    MODE_KEYS,
    STOPWATCH_KEYS,
    TIMER_KEYS,
    KeyPump,
    KeyReader,
)
from .notify import Notifier, default_notifier
from .render import Display, StopwatchRenderer, TimerRenderer
from .stopwatch import Stopwatch
from .timer import Timer

log = logging.getLogger(__name__)

MODE_PROMPT = "[s] Stopwatch  [t] Timer  [q] Quit\n"
STOPWATCH_HELP = "[s] Start  [e] Stop  [r] Reset  [q] Quit\n"
TIMER_HELP = "[u] Set duration  [s] Start  [e] Stop  [r] Reset  [q] Quit\n"
DURATION_PROMPT = "Duration (HH:MM:SS): "


class Mode(enum.Enum):
    STOPWATCH = "stopwatch"
    TIMER = "timer"


MODE_BY_KEY = {'s': Mode.STOPWATCH, 't': Mode.TIMER}


class ChronoApp:
    """Runs one stopwatch or timer session in the terminal.

    Attributes:
        term: Blessed Terminal instance
        settings: Periods and logging options
        clock: Session clock; its lock guards all engine state
        display: Writer for the in-place status line
        reader: Raw key reader
        cancel: Set once on exit; every background thread watches it
        mode: Mode chosen for this session, None until chosen
        engine: Stopwatch or Timer for this session
        entry: Duration text typed so far, or None when not entering one
    """

    def __init__(
        self,
        *,
        term: Optional[Terminal] = None,
        settings: Optional[Settings] = None,
        notifier: Optional[Notifier] = None,
        stream: Optional[TextIO] = None,
        clock: Optional[SharedClock] = None,
    ):
        self.term = term or Terminal()
        self.settings = settings or Settings()
        self.notifier = notifier or default_notifier(stream)
        self.clock = clock or SharedClock()
        self.display = Display(self.term, stream)
        self.reader = KeyReader(self.term, poll_interval=self.settings.poll_interval)
        self.cancel = threading.Event()
        self.mode: Optional[Mode] = None
        self.engine = None
        self.entry: Optional[str] = None
        self.pump: Optional[KeyPump] = None
        self.threads: List[threading.Thread] = []
        self._actions: Dict[str, Callable[[], object]] = {}

    def choose_mode(self) -> Optional[Mode]:
        """Prompt for a mode; None means the user chose to quit."""
        self.display.write(MODE_PROMPT)
        key = self.reader.read_key(MODE_KEYS)
        return MODE_BY_KEY.get(key)

    def setup(self, mode: Mode, duration: Optional[float] = None):
        """Build the engine and background threads for ``mode``."""
        self.mode = mode
        if mode is Mode.STOPWATCH:
            self.engine = Stopwatch(self.clock)
            renderer = StopwatchRenderer(self.engine, self.display, self.cancel,
                                         period=self.settings.render_period)
            accepted = STOPWATCH_KEYS
            self._actions = {
                's': self.engine.start,
                'e': self.engine.stop,
                'r': self.engine.reset,
            }
        else:
            self.engine = Timer(self.clock, duration or 0.0)
            renderer = TimerRenderer(self.engine, self.display, self.cancel, self.notifier,
                                     period=self.settings.render_period)
            accepted = TIMER_KEYS | ENTRY_KEYS
            self._actions = {
                'u': self.begin_entry,
                's': self.engine.start,
                'e': self.engine.stop,
                'r': self.engine.reset,
            }
        self.pump = KeyPump(self.reader, accepted, self.cancel)
        self.threads = [
            ClockSource(self.clock, self.cancel, period=self.settings.clock_period),
            renderer,
            self.pump,
        ]
        log.info("Session set up in %s mode", mode.value)

    def run(self, mode: Optional[Mode] = None, duration: Optional[float] = None):
        """Run a session until the user quits.

        Raises:
            KeyReaderError: If the key reader failed; raised after the
                background threads have been shut down
        """
        if mode is None:
            mode = self.choose_mode()
            if mode is None:
                log.info("Quit from mode prompt")
                return
        self.setup(mode, duration)

        if mode is Mode.STOPWATCH:
            self.display.write(STOPWATCH_HELP)
        else:
            self.display.write(TIMER_HELP)
        self.display.show(self.engine.snapshot().text)

        for thread in self.threads:
            thread.start()
        try:
            while True:
                key = self.pump.keys.get()
                if key is None or not self.handle_key(key):
                    break
        finally:
            self.shutdown()

        if self.pump.error is not None:
            raise self.pump.error

    def handle_key(self, key: str) -> bool:
        """Apply one key to the session.

        Returns:
            False if the key ends the session
        """
        if self.entry is not None:
            self.handle_entry_key(key)
            return True
        if key == 'q':
            log.info("Quit requested")
            return False
        action = self._actions.get(key)
        if action is None:
            log.debug("Ignored key %r", key)
        else:
            action()
        return True

    def begin_entry(self):
        """Start typing a new timer duration; the renderer stays quiet meanwhile."""
        self.entry = ""
        self.display.disable()
        self.display.write("\n" + DURATION_PROMPT)

    def handle_entry_key(self, key: str):
        if key in ENTER_KEYS:
            self.submit_entry()
        elif key == ESCAPE_KEY:
            log.debug("Duration entry cancelled")
            self.end_entry()
        elif key in BACKSPACE_KEYS:
            if self.entry:
                self.entry = self.entry[:-1]
                self.display.write("\b \b")
        elif key.isdigit() or key == ':':
            self.entry += key
            self.display.write(key)

    def submit_entry(self):
        text = self.entry or ""
        try:
            seconds = parse_duration(text)
        except DurationError as exc:
            log.warning("Rejected duration %r: %s", text, exc)
        else:
            self.engine.configure(seconds)
        self.end_entry()

    def end_entry(self):
        self.entry = None
        self.display.write("\n")
        self.display.enable()
        self.display.show(self.engine.snapshot().text)

    def shutdown(self):
        """Cancel and join every background thread."""
        self.cancel.set()
        if self.engine is not None:
            self.engine.changed.set()
        for thread in self.threads:
            if thread.is_alive():
                thread.join()
        self.display.write("\n")
        log.info("Session ended")
