"""Exception types raised by term_chrono."""


class ChronoError(Exception):
    """Base class for all term_chrono errors."""


class DurationError(ChronoError, ValueError):
    """Duration text could not be parsed.

    Raised for anything other than three colon-separated numeric fields,
    or for a duration of zero. Callers recover from it locally.
    """


class KeyReaderError(ChronoError, OSError):
    """The raw key reader could not read from the terminal.

    Also raised when the accepted key set contains something other than a
    single ASCII character. Not recoverable.
    """


class NotifierError(ChronoError, RuntimeError):
    """The expiry notifier failed to alert the user."""
