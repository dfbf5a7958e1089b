"""Abstract commands consumed by the session event loop."""

from __future__ import annotations

from dataclasses import dataclass

CONFIRM = "CONFIRM"
CANCEL = "CANCEL"
ERROR = "ERROR"

INSERT_CHAR = "INSERT_CHAR"
DELETE_BACKWARD = "DELETE_BACKWARD"
DELETE_FORWARD = "DELETE_FORWARD"
DELETE_WORD_BACKWARD = "DELETE_WORD_BACKWARD"
CURSOR_LEFT = "CURSOR_LEFT"
CURSOR_RIGHT = "CURSOR_RIGHT"
CURSOR_WORD_LEFT = "CURSOR_WORD_LEFT"
CURSOR_WORD_RIGHT = "CURSOR_WORD_RIGHT"

SELECTION_UP = "SELECTION_UP"
SELECTION_DOWN = "SELECTION_DOWN"

MOUSE_PRESS = "MOUSE_PRESS"
MOUSE_DRAG = "MOUSE_DRAG"
MOUSE_CLICK = "MOUSE_CLICK"
SCROLL_UP = "SCROLL_UP"
SCROLL_DOWN = "SCROLL_DOWN"

MOUSE_KINDS = frozenset({MOUSE_PRESS, MOUSE_DRAG, MOUSE_CLICK, SCROLL_UP, SCROLL_DOWN})


@dataclass(frozen=True)
class Command:
    kind: str
    char: str = ""
    col: int = 0
    row: int = 0
    error: BaseException | None = None

    @property
    def is_mouse(self) -> bool:
        return self.kind in MOUSE_KINDS
