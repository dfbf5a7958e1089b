"""Query text buffer with cursor and word-wise editing."""

from __future__ import annotations

import threading
from collections.abc import Callable

DELIMITERS = frozenset("\\/ .\t,-|")


def is_delimiter(ch: str) -> bool:
    return ch in DELIMITERS


def _word_start_before(text: list[str], cursor: int) -> int:
    """Return the offset reached by trimming delimiters, then one word, leftwards."""
    idx = cursor
    while idx > 0 and is_delimiter(text[idx - 1]):
        idx -= 1
    while idx > 0 and not is_delimiter(text[idx - 1]):
        idx -= 1
    return idx


def _word_end_after(text: list[str], cursor: int) -> int:
    """Return the offset reached by trimming delimiters, then one word, rightwards."""
    idx = cursor
    end = len(text)
    while idx < end and is_delimiter(text[idx]):
        idx += 1
    while idx < end and not is_delimiter(text[idx]):
        idx += 1
    return idx


class QueryEditor:
    """Owns the query characters and cursor offset.

    Every operation is a no-op at buffer edges. Content changes invoke
    ``on_change`` with the new text after the editor lock has been released,
    so the callback may take other locks freely.
    """

    def __init__(self, on_change: Callable[[str], None] | None = None, text: str = "") -> None:
        self._lock = threading.Lock()
        self._chars: list[str] = list(text)
        self._cursor = len(self._chars)
        self._on_change = on_change

    def snapshot(self) -> tuple[str, int]:
        """Return ``(text, cursor)`` as one consistent pair."""
        with self._lock:
            return "".join(self._chars), self._cursor

    @property
    def text(self) -> str:
        return self.snapshot()[0]

    @property
    def cursor(self) -> int:
        return self.snapshot()[1]

    def _changed(self, text: str) -> bool:
        if self._on_change is not None:
            self._on_change(text)
        return True

    # content edits
    def insert_char(self, ch: str) -> bool:
        if not ch:
            return False
        with self._lock:
            self._chars[self._cursor:self._cursor] = list(ch)
            self._cursor += len(ch)
            text = "".join(self._chars)
        return self._changed(text)

    def delete_backward(self) -> bool:
        with self._lock:
            if self._cursor <= 0:
                return False
            del self._chars[self._cursor - 1]
            self._cursor -= 1
            text = "".join(self._chars)
        return self._changed(text)

    def delete_forward(self) -> bool:
        with self._lock:
            if self._cursor >= len(self._chars):
                return False
            del self._chars[self._cursor]
            text = "".join(self._chars)
        return self._changed(text)

    def delete_word_backward(self) -> bool:
        with self._lock:
            if self._cursor <= 0:
                return False
            start = _word_start_before(self._chars, self._cursor)
            del self._chars[start:self._cursor]
            self._cursor = start
            text = "".join(self._chars)
        return self._changed(text)

    # cursor movement
    def move_cursor_left(self) -> bool:
        with self._lock:
            if self._cursor <= 0:
                return False
            self._cursor -= 1
            return True

    def move_cursor_right(self) -> bool:
        with self._lock:
            if self._cursor >= len(self._chars):
                return False
            self._cursor += 1
            return True

    def move_cursor_word_left(self) -> bool:
        with self._lock:
            if self._cursor <= 0:
                return False
            self._cursor = _word_start_before(self._chars, self._cursor)
            return True

    def move_cursor_word_right(self) -> bool:
        with self._lock:
            if self._cursor >= len(self._chars):
                return False
            self._cursor = _word_end_after(self._chars, self._cursor)
            return True
