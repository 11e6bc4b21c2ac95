"""Centralized logging configuration."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
FILE_LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Package loggers that share the root application handlers
APP_LOGGERS = ("core", "database", "services", "utils", "config", "main")


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so the file handler does not see escape codes
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def resolve_level(level: Union[int, str]) -> int:
    """Turn 'INFO'/'debug'/20 into a logging level number."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logger(
    name: str = "club_dues",
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    colored: bool = True,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """Configure and return a logger instance.

    The application packages (``core``, ``database``, ``services``...) log
    under their module names, so the same handlers are attached to each of
    them as well as to ``name``.

    Args:
        name: Logger name
        level: Logging level (number or name)
        log_file: Optional file path for file logging
        colored: Whether to use colored output for console
        stream: Console stream, stdout by default

    Returns:
        Configured logger instance
    """
    level = resolve_level(level)

    # Console handler
    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(level)

    if colored:
        formatter = ColoredFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    console_handler.setFormatter(formatter)
    handlers = [console_handler]

    # File handler if specified
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        handlers.append(file_handler)

    for logger_name in (name, *APP_LOGGERS):
        target = logging.getLogger(logger_name)
        target.setLevel(level)
        target.handlers.clear()
        target.propagate = False
        for handler in handlers:
            target.addHandler(handler)

    return logging.getLogger(name)


def get_logger(name: str) -> logging.Logger:
    """Get a logger by name."""
    return logging.getLogger(name)
