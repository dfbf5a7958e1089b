"""Cell-grid drawing surface composed into one ANSI frame per flush."""

from __future__ import annotations

import os
import shutil
import sys
from collections.abc import Callable

DEFAULT = ""
BOLD = "1"
UNDERLINE = "4"
REVERSE = "7"
BOLD_UNDERLINE = "1;4"

_BLANK = (" ", DEFAULT, DEFAULT)
FALLBACK_SIZE = (80, 24)


def terminal_size(fd: int | None = None) -> tuple[int, int]:
    """Return ``(columns, rows)`` of the terminal on ``fd``.

    Without ``fd`` the size is taken from stdout. Falls back to 80x24 when the
    descriptor is not a terminal.
    """
    if fd is None:
        term = shutil.get_terminal_size(FALLBACK_SIZE)
        return term.columns, term.lines
    try:
        term = os.get_terminal_size(fd)
    except OSError:
        return FALLBACK_SIZE
    return term.columns, term.lines


def stdout_writer(data: bytes) -> None:
    os.write(sys.stdout.fileno(), data)


class AnsiSurface:
    """Buffer cells, then write the whole frame with a single write call.

    ``fg`` and ``bg`` are SGR parameter strings (for example ``"1;4"`` or
    ``"48;2;58;92;188"``); an empty string means the terminal default.
    """

    def __init__(
        self,
        write: Callable[[bytes], None] = stdout_writer,
        size: Callable[[], tuple[int, int]] = terminal_size,
    ) -> None:
        self._write = write
        self._size = size
        self._width, self._height = self._size()
        self._cells: list[list[tuple[str, str, str]]] = []
        self._cursor: tuple[int, int] | None = None
        self.clear()

    def size(self) -> tuple[int, int]:
        return self._width, self._height

    def clear(self) -> None:
        """Blank every cell, hide the cursor and pick up terminal resizes."""
        self._width, self._height = self._size()
        self._cells = [[_BLANK] * self._width for _ in range(self._height)]
        self._cursor = None

    def set_cell(self, x: int, y: int, ch: str, fg: str = DEFAULT, bg: str = DEFAULT) -> None:
        if 0 <= x < self._width and 0 <= y < self._height:
            self._cells[y][x] = (ch, fg, bg)

    def set_cursor(self, x: int, y: int) -> None:
        self._cursor = (x, y)

    def cell(self, x: int, y: int) -> tuple[str, str, str]:
        return self._cells[y][x]

    def cursor(self) -> tuple[int, int] | None:
        return self._cursor

    def text_rows(self) -> list[str]:
        """Return plain row text with trailing blanks stripped."""
        return ["".join(ch for ch, _fg, _bg in row).rstrip() for row in self._cells]

    def compose(self) -> str:
        out: list[str] = ["\033[?25l\033[H\033[J"]
        for y, row in enumerate(self._cells):
            out.append(f"\033[{y + 1};1H")
            active = (DEFAULT, DEFAULT)
            for ch, fg, bg in row:
                if (fg, bg) != active:
                    params = ";".join(part for part in (fg, bg) if part)
                    out.append("\033[0m" + (f"\033[{params}m" if params else ""))
                    active = (fg, bg)
                out.append(ch)
            if active != (DEFAULT, DEFAULT):
                out.append("\033[0m")
        if self._cursor is not None:
            x, y = self._cursor
            out.append(f"\033[{y + 1};{x + 1}H\033[?25h")
        return "".join(out)

    def flush(self) -> None:
        self._write(self.compose().encode("utf-8", errors="replace"))
