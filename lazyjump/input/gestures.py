"""Press/drag/click disambiguation for left-button mouse tokens."""

from __future__ import annotations

from . import commands as cmd


def parse_mouse_col_row(mouse_key: str) -> tuple[int | None, int | None]:
    """Parse ``MOUSE_*:col:row`` key tokens into integer coordinates."""
    parts = mouse_key.split(":")
    if len(parts) < 3:
        return None, None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None, None


class MouseGestureTracker:
    """Turn raw mouse tokens into press, drag, click and scroll commands.

    A button-down while the button is already held, at a different row, is a
    drag. A release is a click only when no drag happened since the press;
    releases that end a drag produce nothing.
    """

    def __init__(self) -> None:
        self._pressed = False
        self._dragged = False
        self._last_row: int | None = None

    def reset(self) -> None:
        self._pressed = False
        self._dragged = False
        self._last_row = None

    def feed(self, mouse_key: str) -> cmd.Command | None:
        col, row = parse_mouse_col_row(mouse_key)
        if col is None or row is None:
            return None

        if mouse_key.startswith("MOUSE_WHEEL_UP:"):
            self.reset()
            return cmd.Command(cmd.SCROLL_UP, col=col, row=row)
        if mouse_key.startswith("MOUSE_WHEEL_DOWN:"):
            self.reset()
            return cmd.Command(cmd.SCROLL_DOWN, col=col, row=row)

        if mouse_key.startswith("MOUSE_LEFT_DOWN:"):
            if not self._pressed:
                self._pressed = True
                self._dragged = False
                self._last_row = row
                return cmd.Command(cmd.MOUSE_PRESS, col=col, row=row)
            if row == self._last_row:
                return None
            self._dragged = True
            self._last_row = row
            return cmd.Command(cmd.MOUSE_DRAG, col=col, row=row)

        if mouse_key.startswith("MOUSE_LEFT_UP:"):
            clicked = self._pressed and not self._dragged
            self.reset()
            if clicked:
                return cmd.Command(cmd.MOUSE_CLICK, col=col, row=row)
            return None
        return None
