"""Controlling-terminal access for the picker session.

The picker draws on ``/dev/tty`` rather than stdout, so the chosen path can be
captured with ``cd "$(lazyjump)"``.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

TTY_PATH = "/dev/tty"

# alternate screen, then button + drag mouse tracking in SGR encoding
ENTER_PICKER_SCREEN = b"\x1b[?1049h\x1b[?1000h\x1b[?1002h\x1b[?1006h"
LEAVE_PICKER_SCREEN = b"\x1b[?1000l\x1b[?1002l\x1b[?1006l\x1b[?25h\x1b[?1049l"


def open_tty() -> int:
    """Open the controlling terminal for reading and drawing."""
    return os.open(TTY_PATH, os.O_RDWR | os.O_NOCTTY)


class TerminalController:
    """Switch one terminal into picker mode and back.

    ``input_fd`` is put into raw mode; escape sequences go to ``output_fd``,
    which defaults to the same descriptor.
    """

    def __init__(self, input_fd: int, output_fd: int | None = None) -> None:
        self.input_fd = input_fd
        self.output_fd = input_fd if output_fd is None else output_fd
        self._saved_attrs = termios.tcgetattr(input_fd)
        self._mouse_reporting_enabled = False

    def enable_tui_mode(self) -> None:
        tty.setraw(self.input_fd, termios.TCSAFLUSH)
        os.write(self.output_fd, ENTER_PICKER_SCREEN)
        self._mouse_reporting_enabled = True

    def disable_tui_mode(self) -> None:
        """Leave the alternate screen and restore the saved line discipline."""
        os.write(self.output_fd, LEAVE_PICKER_SCREEN)
        self._mouse_reporting_enabled = False
        termios.tcsetattr(self.input_fd, termios.TCSAFLUSH, self._saved_attrs)

    @property
    def mouse_reporting_enabled(self) -> bool:
        return self._mouse_reporting_enabled

    @contextlib.contextmanager
    def raw_mode(self):
        """Run the enclosed block in picker mode, restoring the terminal on exit."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()
