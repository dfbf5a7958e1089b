"""Single-consumer command inbox with reliable and best-effort lanes."""

from __future__ import annotations

import logging
import threading
from collections import deque

from .commands import Command

DEFAULT_RELIABLE_CAPACITY = 64

logger = logging.getLogger(__name__)


class CommandInbox:
    """Deliver commands to one consumer in submission order.

    Keyboard commands go through ``put`` into a bounded FIFO; the producer
    blocks until there is room. Mouse commands go through ``offer`` into a
    single slot: an unconsumed mouse command is overwritten by the next one.
    """

    def __init__(self, reliable_capacity: int = DEFAULT_RELIABLE_CAPACITY) -> None:
        self._cond = threading.Condition()
        self._capacity = max(1, reliable_capacity)
        self._reliable: deque[tuple[int, Command]] = deque()
        self._slot: tuple[int, Command] | None = None
        self._seq = 0
        self._closed = False
        self.overwritten = 0

    def put(self, command: Command) -> bool:
        """Enqueue ``command``, waiting for room; ``False`` once closed."""
        with self._cond:
            while not self._closed and len(self._reliable) >= self._capacity:
                self._cond.wait()
            if self._closed:
                return False
            self._seq += 1
            self._reliable.append((self._seq, command))
            self._cond.notify_all()
            return True

    def offer(self, command: Command) -> bool:
        """Store ``command`` in the mouse slot, replacing any pending one."""
        with self._cond:
            if self._closed:
                return False
            if self._slot is not None:
                self.overwritten += 1
                logger.debug("mouse command %s replaced by %s", self._slot[1].kind, command.kind)
            self._seq += 1
            self._slot = (self._seq, command)
            self._cond.notify_all()
            return True

    def get(self, timeout: float | None = None) -> Command | None:
        """Return the oldest pending command, or ``None`` on timeout/close."""
        with self._cond:
            while not self._reliable and self._slot is None:
                if self._closed:
                    return None
                if not self._cond.wait(timeout):
                    return None
            if self._slot is not None and (not self._reliable or self._slot[0] < self._reliable[0][0]):
                _, command = self._slot
                self._slot = None
            else:
                _, command = self._reliable.popleft()
            self._cond.notify_all()
            return command

    def close(self) -> None:
        """Release waiters; later ``put``/``offer`` calls are discarded."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed
