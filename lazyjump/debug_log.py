"""In-memory log capture backing the on-screen debug panel.

While the terminal is in raw alternate-screen mode nothing may write to it
except the renderer, so session logs go into a buffer instead of stderr.
"""

from __future__ import annotations

import logging
import threading

LOGGER_NAME = "lazyjump"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class DebugLogBuffer(logging.Handler):
    """Logging handler that keeps formatted lines until the next drain."""

    def __init__(self, level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self._lines: list[str] = []
        self._buffer_lock = threading.Lock()
        self.setFormatter(logging.Formatter(LOG_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = self.format(record)
        except Exception:
            self.handleError(record)
            return
        with self._buffer_lock:
            self._lines.extend(text.splitlines())

    def drain(self) -> list[str]:
        """Return and forget all buffered lines."""
        with self._buffer_lock:
            lines = self._lines
            self._lines = []
        return lines


def install_log_capture(level: int = logging.DEBUG) -> DebugLogBuffer:
    """Route the package logger into a fresh buffer and stop propagation."""
    handler = DebugLogBuffer(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return handler


def remove_log_capture(handler: DebugLogBuffer) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.removeHandler(handler)
    logger.propagate = True
