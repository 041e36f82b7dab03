"""
Raw keystroke input.

KeyReader reads single keys from an uncooked terminal, filtered against an
accepted set. KeyPump runs a reader on its own thread and publishes keys onto
a queue, so the command loop only ever waits on the queue and shutdown does
not have to interrupt a terminal read.
"""

import logging
import queue
import string
import threading
from typing import FrozenSet, Iterable, Optional

from blessed import Terminal

from .errors import KeyReaderError

try:
    import termios
    TERMINAL_ERRORS = (OSError, termios.error)
except ImportError:  # Windows terminals fail with OSError only
    TERMINAL_ERRORS = (OSError,)

log = logging.getLogger(__name__)

ENTER_KEYS = frozenset("\r\n")
BACKSPACE_KEYS = frozenset("\x7f\x08")
ESCAPE_KEY = "\x1b"

MODE_KEYS = frozenset("stq")
STOPWATCH_KEYS = frozenset("serq")
TIMER_KEYS = frozenset("userq")
ENTRY_KEYS = frozenset(string.digits + ":") | ENTER_KEYS | BACKSPACE_KEYS | {ESCAPE_KEY}


def validate_accepted(accepted: Iterable[str]) -> FrozenSet[str]:
    """Check that every accepted key is one ASCII character.

    Raises:
        KeyReaderError: If the set is empty or holds anything else
    """
    accepted = frozenset(accepted)
    if not accepted:
        raise KeyReaderError("Accepted key set is empty")
    for key in accepted:
        if not isinstance(key, str) or len(key) != 1 or not key.isascii():
            raise KeyReaderError(f"Accepted keys must be single ASCII characters, got {key!r}")
    return accepted


class KeyReader:
    """Reads one accepted key at a time from a blessed Terminal.

    Attributes:
        term: Blessed Terminal instance
        poll_interval: Longest single wait on the terminal before the cancel
            event is checked again
    """

    def __init__(self, term: Optional[Terminal] = None, poll_interval: float = 0.1):
        self.term = term or Terminal()
        self.poll_interval = poll_interval

    def read_key(self, accepted: Iterable[str], cancel: Optional[threading.Event] = None) -> Optional[str]:
        """Block until a key from ``accepted`` is pressed.

        The terminal is put into cbreak mode (no line buffering, no echo) for
        the duration of the call and restored on every exit path. Keys not in
        ``accepted`` are discarded, as are multi-byte sequences such as
        arrow keys.

        Args:
            accepted: Single ASCII characters to accept
            cancel: Optional event; once set, the call returns None. Without
                it, the wait is unbounded.

        Returns:
            The accepted key, or None if cancelled

        Raises:
            KeyReaderError: If ``accepted`` is invalid or the terminal read
                or mode change fails
        """
        accepted = validate_accepted(accepted)
        try:
            with self.term.cbreak():
                while cancel is None or not cancel.is_set():
                    key = self.term.inkey(timeout=self.poll_interval)
                    if not key:
                        continue
                    if str(key) in accepted:
                        return str(key)
                    log.debug("Discarded key %r", str(key))
        except TERMINAL_ERRORS as exc:
            if isinstance(exc, KeyReaderError):
                raise
            raise KeyReaderError(f"Terminal read failed: {exc}") from exc
        return None


class KeyPump(threading.Thread):
    """Publishes accepted keys from a KeyReader onto a queue.

    The thread holds cbreak mode for its whole lifetime so no keystroke is
    echoed between reads. ``None`` is published when the pump stops, whether
    it was cancelled or the reader failed; a failure is kept in
    :attr:`error` for the consumer to re-raise.
    """

    def __init__(self, reader: KeyReader, accepted: Iterable[str], cancel: threading.Event):
        super().__init__(name="key-pump", daemon=True)
        self.reader = reader
        self.accepted = validate_accepted(accepted)
        self.cancel = cancel
        self.keys: "queue.Queue[Optional[str]]" = queue.Queue()
        self.error: Optional[BaseException] = None

    def run(self):
        try:
            with self.reader.term.cbreak():
                while not self.cancel.is_set():
                    key = self.reader.read_key(self.accepted, cancel=self.cancel)
                    if key is not None:
                        self.keys.put(key)
        except Exception as exc:
            log.error("Key reader failed: %s", exc)
            self.error = exc
        finally:
            self.keys.put(None)
