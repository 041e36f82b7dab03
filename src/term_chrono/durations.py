"""Parsing and formatting of HH:MM:SS durations."""

import math
from typing import Tuple

from .errors import DurationError


def parse_duration(text: str) -> float:
    """Parse ``HH:MM:SS`` into seconds.

    Args:
        text: Exactly three colon-separated fields of decimal digits

    Returns:
        Total number of seconds

    Raises:
        DurationError: If the text has another shape, a field is not
            numeric, or the duration is zero
    """
    fields = text.strip().split(":")
    if len(fields) != 3:
        raise DurationError(f"Expected HH:MM:SS, got {text!r}")
    if not all(field.isascii() and field.isdigit() for field in fields):
        raise DurationError(f"Non-numeric field in {text!r}")

    hours, minutes, seconds = (int(field) for field in fields)
    total = hours * 3600 + minutes * 60 + seconds
    if total == 0:
        raise DurationError("Duration must be longer than zero")
    return float(total)


def split_duration(seconds: float) -> Tuple[int, int, int, int]:
    """Split seconds into (hours, minutes, seconds, milliseconds).

    Each field is reduced by successive modulo from the total number of
    whole milliseconds. Hours are not wrapped.
    """
    total_ms = max(0, math.floor(round(seconds * 1000, 3)))
    return (
        total_ms // 3_600_000,
        total_ms // 60_000 % 60,
        total_ms // 1000 % 60,
        total_ms % 1000,
    )


def format_elapsed(seconds: float) -> str:
    """Format a stopwatch reading as ``HH:MM:SS.mmm``."""
    hours, minutes, secs, millis = split_duration(seconds)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


def format_remaining(seconds: float) -> str:
    """Format a countdown as ``HH:MM:SS``, rounding up to the next second."""
    hours, minutes, secs, _ = split_duration(math.ceil(max(0.0, seconds)))
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
