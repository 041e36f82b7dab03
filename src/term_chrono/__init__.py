"""
Terminal Chrono

A terminal stopwatch and countdown timer built on the Blessed library.
A shared clock thread, background renderers and a raw-keystroke command loop
cooperate through a single lock owned by the session clock.
"""

from .app import ChronoApp, Mode
from .clock import ClockSource, SharedClock
from .config import Settings
from .durations import format_elapsed, format_remaining, parse_duration
from .errors import ChronoError, DurationError, KeyReaderError, NotifierError
from .keys import KeyPump, KeyReader
from .notify import BellNotifier, Notifier, default_notifier
from .render import Display, StopwatchRenderer, TimerRenderer
from .stopwatch import Stopwatch, StopwatchSnapshot, StopwatchStatus
from .timer import Timer, TimerSnapshot, TimerStatus

__all__ = [
    'ChronoApp',
    'Mode',
    'ClockSource',
    'SharedClock',
    'Settings',
    'format_elapsed',
    'format_remaining',
    'parse_duration',
    'ChronoError',
    'DurationError',
    'KeyReaderError',
    'NotifierError',
    'KeyPump',
    'KeyReader',
    'BellNotifier',
    'Notifier',
    'default_notifier',
    'Display',
    'StopwatchRenderer',
    'TimerRenderer',
    'Stopwatch',
    'StopwatchSnapshot',
    'StopwatchStatus',
    'Timer',
    'TimerSnapshot',
    'TimerStatus',
]

__version__ = '0.1.0'
