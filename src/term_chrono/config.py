"""Runtime settings for a chrono session."""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "TERM_CHRONO_"


@dataclass(frozen=True)
class Settings:
    """Tunable periods and logging options.

    Attributes:
        clock_period: Seconds between SharedClock refreshes
        render_period: Seconds between renderer ticks
        poll_interval: Longest single wait on the terminal, so the key pump
            notices cancellation
        log_level: Name of the logging level for the diagnostic stream
        log_file: Optional path of a rotating log file
    """
    clock_period: float = 0.03
    render_period: float = 0.2
    poll_interval: float = 0.1
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    def __post_init__(self):
        for name in ("clock_period", "render_period", "poll_interval"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``TERM_CHRONO_*`` environment variables."""
        environ = os.environ if environ is None else environ
        values = {}
        for field in fields(cls):
            raw = environ.get(ENV_PREFIX + field.name.upper())
            if raw is None or raw == "":
                continue
            if field.name.endswith(("_period", "_interval")):
                try:
                    values[field.name] = float(raw)
                except ValueError:
                    raise ValueError(f"{ENV_PREFIX}{field.name.upper()} is not a number: {raw!r}") from None
            elif field.name == "log_file":
                values[field.name] = Path(raw)
            else:
                values[field.name] = raw
        return cls(**values)

    def override(self, **changes) -> "Settings":
        """Return a copy with the non-None ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
