"""Command-line entry point: ``term-chrono`` or ``python -m term_chrono``."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .app import ChronoApp, Mode
from .config import Settings
from .durations import parse_duration
from .logger import configure_logging

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="term-chrono",
        description="Terminal stopwatch and countdown timer",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in Mode],
        help="Skip the mode prompt",
    )
    parser.add_argument(
        "--duration",
        metavar="HH:MM:SS",
        help="Initial timer duration (timer mode)",
    )
    parser.add_argument("--log-level", help="Diagnostic log level (default: WARNING)")
    parser.add_argument("--log-file", type=Path, help="Also log to this rotating file")
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env().override(log_level=args.log_level, log_file=args.log_file)
        duration = parse_duration(args.duration) if args.duration else None
    except ValueError as exc:
        parser.error(str(exc))

    configure_logging(settings.log_level, log_file=settings.log_file)

    try:
        ChronoApp(settings=settings).run(
            mode=Mode(args.mode) if args.mode else None,
            duration=duration,
        )
    except SystemExit:
        raise
    except KeyboardInterrupt:
        return 130
    except Exception:
        log.exception("Uncaught exception, exiting")
        return 1
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
