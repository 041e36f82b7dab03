"""Audible alerts for timer expiry."""

import sys
from typing import Optional, Protocol, TextIO, runtime_checkable

from .errors import NotifierError


@runtime_checkable
class Notifier(Protocol):
    def notify(self) -> None:
        ...


class BellNotifier:
    """Rings the terminal bell by writing ASCII BEL."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def notify(self) -> None:
        stream = self.stream or sys.stdout
        try:
            stream.write("\a")
            stream.flush()
        except (OSError, ValueError) as exc:
            raise NotifierError(f"Could not ring terminal bell: {exc}") from exc


class WinsoundNotifier:
    """Plays the Windows default beep."""

    def notify(self) -> None:
        try:
            import winsound
            winsound.MessageBeep()
        except (ImportError, RuntimeError, OSError) as exc:
            raise NotifierError(f"Could not play beep: {exc}") from exc


def default_notifier(stream: Optional[TextIO] = None) -> Notifier:
    if sys.platform == "win32":
        return WinsoundNotifier()
    return BellNotifier(stream)
