"""Shared fixtures: a hand-driven time source and a scripted terminal."""

import threading
from unittest.mock import MagicMock, Mock

import pytest
from blessed import Terminal
from blessed.keyboard import Keystroke

from term_chrono import SharedClock


class FakeTime:
    """Time source that only moves when told to."""

    def __init__(self, start=1000.0):
        self.value = start

    def __call__(self):
        return self.value

    def advance(self, seconds):
        self.value += seconds


@pytest.fixture
def fake_time():
    return FakeTime()


@pytest.fixture
def clock(fake_time):
    return SharedClock(source=fake_time)


@pytest.fixture
def advance(fake_time, clock):
    """Move fake time forward and publish it on the clock."""
    def _advance(seconds):
        fake_time.advance(seconds)
        clock.tick()
    return _advance


def _mock_terminal(keys=(), cancel=None):
    """Create a mock Terminal whose inkey() replays ``keys``.

    Items may be strings or exceptions. Once the script is exhausted, inkey
    sets ``cancel`` (when given) and returns an empty keystroke.
    """
    script = list(keys)
    lock = threading.Lock()

    def inkey(timeout=None):
        with lock:
            item = script.pop(0) if script else None
        if item is None:
            if cancel is not None:
                cancel.set()
            return Keystroke('')
        if isinstance(item, BaseException):
            raise item
        return item if isinstance(item, Keystroke) else Keystroke(item)

    term = Mock(spec=Terminal)
    term.width = 80
    term.height = 24
    term.clear_eol = ''
    term.cbreak = MagicMock()
    term.cbreak.return_value.__exit__.return_value = False
    term.inkey = Mock(side_effect=inkey)
    return term


@pytest.fixture
def mock_terminal():
    return _mock_terminal
