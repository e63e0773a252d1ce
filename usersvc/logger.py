"""Coloured console logging for the service."""

from __future__ import annotations

import json
import logging
import sys
import time
from typing import TextIO

from termcolor import colored

_LEVELS = {
    logging.DEBUG: ("DEBUG", "blue"),
    logging.INFO: ("INFO", "green"),
    logging.WARNING: ("WARN", "yellow"),
    logging.ERROR: ("ERROR", "red"),
}


class PrettyHandler(logging.Handler):
    """Writes one coloured line per record: time, level, message and fields as JSON.

    Extra structured fields are taken from a ``fields`` mapping on the record,
    e.g. ``logger.info("msg", extra={"fields": {...}})``.
    """

    def __init__(self, stream: TextIO | None = None, level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self.stream = stream if stream is not None else sys.stderr

    def format(self, record: logging.LogRecord) -> str:
        name, color = _LEVELS.get(record.levelno, (record.levelname, None))
        level = f"{name}:"
        if color is not None:
            level = colored(level, color)

        fields = getattr(record, "fields", None) or {}
        body = json.dumps(fields, indent=2, sort_keys=True, ensure_ascii=False)

        # hour, then seconds twice
        stamp = time.strftime("[%H:%S:%S]", time.localtime(record.created))
        message = colored(record.getMessage(), "cyan")
        return " ".join((stamp, level, message, colored(body, "white")))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.stream.write(self.format(record) + "\n")
            self.flush()
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()


class Logger:
    """The service logger."""

    def __init__(self, log: logging.Logger) -> None:
        self._log = log

    def info(self, message: str) -> None:
        self._log.info(message)

    def error(self, message: str) -> None:
        self._log.error(message)

    def error_op(self, message: str, op: str) -> None:
        self._log.error(f"{op}: {message}")

    def fatal(self, message: str) -> None:
        """Log the message as an error and stop the process with status 1."""
        self._log.error(message)
        raise SystemExit(1)

    def debug(self, message: str) -> None:
        self._log.debug(message)


def load(stream: TextIO | None = None) -> Logger:
    """Build a logger that writes every level from debug up to the stream (stderr by default)."""
    log = logging.Logger("usersvc", logging.DEBUG)
    log.addHandler(PrettyHandler(stream))
    return Logger(log)