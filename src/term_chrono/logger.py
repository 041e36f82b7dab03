import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOGGER_NAME = "term_chrono"

log = logging.getLogger(LOGGER_NAME)


def configure_logging(
        level: Union[int, str] = logging.WARNING,
        log_file: Optional[Path] = None,
        console: bool = True,
        max_bytes: int = 1024 * 1024,
        backup_count: int = 3,
) -> logging.Logger:
    """Attach handlers to the package logger.

    Handlers are named, so calling this more than once does not stack
    duplicates. The console handler writes to stderr, leaving stdout to the
    in-place time display.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    log.propagate = False
    log.setLevel(level)
    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    console_handler_name = f"{LOGGER_NAME}:console"
    if console and not any(h.get_name() == console_handler_name for h in log.handlers):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(fmt)
        console_handler.set_name(console_handler_name)
        log.addHandler(console_handler)

    file_handler_name = f"{LOGGER_NAME}:file"
    if log_file is not None and not any(h.get_name() == file_handler_name for h in log.handlers):
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(fmt)
        file_handler.set_name(file_handler_name)
        log.addHandler(file_handler)

    for handler in log.handlers:
        handler.setLevel(level)
    return log
