"""Shutdown of registered resources, on demand or on interrupt."""

from __future__ import annotations

import logging
import signal
from contextlib import contextmanager
from typing import Iterator, Protocol

_log = logging.getLogger(__name__)


class Closable(Protocol):
    def close(self) -> None: ...


class Closer:
    """Keeps resources to close and closes them in the order they were added."""

    def __init__(self) -> None:
        self._closers: list[Closable] = []

    def add(self, closer: Closable) -> None:
        self._closers.append(closer)

    def close_all(self) -> None:
        """Close every resource; a failure is logged and does not stop the rest."""
        for closer in self._closers:
            try:
                closer.close()
            except Exception as err:
                _log.error("%s", err)

    @contextmanager
    def watch_signals(self) -> Iterator[Closer]:
        """Close everything on the first interrupt while the block runs.

        Must be entered from the main thread. The handler that was in place
        before is restored after the first interrupt and when the block ends.
        """
        previous = signal.getsignal(signal.SIGINT)
        if previous is None:
            previous = signal.default_int_handler

        def handle(signum, frame):
            signal.signal(signal.SIGINT, previous)
            self.close_all()

        signal.signal(signal.SIGINT, handle)
        try:
            yield self
        finally:
            signal.signal(signal.SIGINT, previous)