#!/usr/bin/env python3
# cmdtree/ui/static/logging.py
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, TextIO

from ..utils import PRINT_MUTEX, colorize, enable_windows_vt, strip_ansi

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"
FILE_MAX_BYTES = 2_000_000
FILE_BACKUPS = 3


class ColorizingStreamHandler(logging.StreamHandler):
    """Console handler colouring records by level on terminals that support it."""

    LEVEL_STYLES = {
        logging.DEBUG: ("bright_black",),
        logging.WARNING: ("yellow",),
        logging.ERROR: ("red",),
        logging.CRITICAL: ("magenta", "bold"),
    }

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__(stream)
        isatty = getattr(self.stream, "isatty", None)
        self.use_color = bool(isatty and isatty()) and enable_windows_vt()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = strip_ansi(self.format(record))
            if self.use_color:
                text = colorize(text, *self.LEVEL_STYLES.get(record.levelno, ()))
            # shares the terminal with boot lines
            with PRINT_MUTEX:
                self.stream.write(text + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Formatter for log files; escape sequences are removed."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def _has_handler(logger: logging.Logger, kind: type) -> bool:
    return any(isinstance(handler, kind) for handler in logger.handlers)


def init_logger(
    name: str = "cmdtree",
    level: int = logging.WARNING,
    logfile: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the `name` logger once per process.

    The console handler (stderr) filters at `level`. With `logfile`, a
    rotating UTF-8 file additionally receives every record from DEBUG up.
    Calling again does not stack handlers.
    """
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(logging.DEBUG if logfile else level)

    if not _has_handler(logger, ColorizingStreamHandler):
        console = ColorizingStreamHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console)

    if logfile and not _has_handler(logger, RotatingFileHandler):
        rotating = RotatingFileHandler(
            logfile, maxBytes=FILE_MAX_BYTES, backupCount=FILE_BACKUPS, encoding="utf-8")
        rotating.setLevel(logging.DEBUG)
        rotating.setFormatter(PlainFormatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
        logger.addHandler(rotating)

    return logger
