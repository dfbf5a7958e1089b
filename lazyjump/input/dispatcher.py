"""Reader thread that turns terminal input into inbox commands."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from . import commands as cmd
from .gestures import MouseGestureTracker
from .keymap import command_for_key
from .mailbox import CommandInbox
from .reader import read_key

READ_POLL_TIMEOUT_MS = 120

logger = logging.getLogger(__name__)


class InputDispatcher:
    """Normalize key tokens into commands and deliver them to an inbox.

    Keyboard commands are delivered reliably, mouse commands best-effort.
    Read failures end the reader with one reliable ``ERROR`` command.
    """

    def __init__(
        self,
        inbox: CommandInbox,
        read_token: Callable[[], str],
    ) -> None:
        self.inbox = inbox
        self._read_token = read_token
        self._gestures = MouseGestureTracker()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @classmethod
    def for_fd(cls, inbox: CommandInbox, stdin_fd: int) -> InputDispatcher:
        return cls(inbox, lambda: read_key(stdin_fd, timeout_ms=READ_POLL_TIMEOUT_MS))

    def dispatch(self, key: str) -> cmd.Command | None:
        """Translate and deliver one key token; return the delivered command."""
        if key.startswith("MOUSE"):
            command = self._gestures.feed(key)
            if command is not None:
                self.inbox.offer(command)
            return command
        command = command_for_key(key)
        if command is not None:
            self.inbox.put(command)
        return command

    def run(self) -> None:
        while not self._stop.is_set():
            try:
                key = self._read_token()
            except (OSError, EOFError) as exc:
                logger.debug("input reader stopped: %s", exc)
                self.inbox.put(cmd.Command(cmd.ERROR, error=exc))
                return
            if not key:
                continue
            self.dispatch(key)

    def start(self) -> None:
        self._thread = threading.Thread(target=self.run, name="lazyjump-input", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
