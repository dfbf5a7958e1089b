"""Candidate set, filtered match list, selection and viewport.

All state lives behind one lock. Crawler threads merge batches while the event
loop edits the query and moves the selection; every public operation performs
its whole read-modify-write under that lock, so readers never observe a
half-updated match list, selection or viewport.
"""

from __future__ import annotations

import bisect
import os
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .fuzzy import fuzzy_score, merge_sort_key, to_root_relative

HEADER_ROWS = 3
LIST_TEXT_COL = 2


@dataclass(frozen=True)
class ResultRow:
    """One visible match-list row."""

    index: int
    path: str
    label: str
    selected: bool


@dataclass(frozen=True)
class ResultsView:
    """Immutable snapshot of the visible part of the result index."""

    rows: tuple[ResultRow, ...]
    selected: int
    viewport: int
    match_count: int
    candidate_count: int
    complete: bool


class ResultIndex:
    """Own the discovered candidates and the query-filtered view of them.

    Candidates are kept in the order fixed when they were merged: score against
    the query at merge time (descending), then shorter relative path, then
    lexical. Filtering only drops zero-score entries and never re-sorts.
    """

    def __init__(
        self,
        root: str,
        visible_rows: Callable[[], int],
        *,
        query: str = "",
        include_root: bool = True,
    ) -> None:
        self.root = os.path.abspath(root)
        self._visible_rows = visible_rows
        self._lock = threading.Lock()
        self._query = query
        self._candidates: list[str] = []
        self._labels: dict[str, str] = {}
        self._sorted_for: str | None = None
        self._matches: list[str] = []
        self._selected = -1
        self._viewport = 0
        self._complete = False
        self._closed = False
        if include_root:
            self.add_batch([self.root])

    # helpers (lock must be held)
    def _label(self, path: str) -> str:
        return self._labels[path]

    def _sort_key(self, path: str) -> tuple[float, int, str]:
        return merge_sort_key(self._query, self._labels[path])

    def _rows(self) -> int:
        return max(1, self._visible_rows())

    def _merge(self, paths: Iterable[str]) -> bool:
        fresh: list[str] = []
        for path in paths:
            if path in self._labels:
                continue
            self._labels[path] = to_root_relative(path, self.root)
            fresh.append(path)
        if not fresh:
            return False
        if self._sorted_for == self._query:
            for path in fresh:
                bisect.insort(self._candidates, path, key=self._sort_key)
        else:
            self._candidates.extend(fresh)
            self._candidates.sort(key=self._sort_key)
            self._sorted_for = self._query
        return True

    def _recompute(self) -> None:
        query = self._query
        if query:
            self._matches = [
                path for path in self._candidates if fuzzy_score(query, self._labels[path]) > 0
            ]
        else:
            self._matches = list(self._candidates)
        if not self._matches:
            self._selected = -1
        else:
            self._selected = max(0, min(self._selected, len(self._matches) - 1))
        self._clamp_viewport()

    def _select_best_match(self) -> None:
        best_score = 0.0
        for idx, path in enumerate(self._matches):
            score = fuzzy_score(self._query, self._labels[path])
            if score > best_score:
                best_score = score
                self._selected = idx

    def _ensure_visible(self) -> None:
        if self._selected < 0:
            self._viewport = 0
            return
        rows = self._rows()
        if self._selected < self._viewport:
            self._viewport = self._selected
        elif self._selected > self._viewport + rows - 1:
            self._viewport = self._selected - rows + 1

    def _clamp_viewport(self) -> None:
        # bounds only, the selection may stay scrolled out of view
        if self._selected < 0:
            self._viewport = 0
            return
        last_top = max(0, len(self._matches) - self._rows())
        self._viewport = max(0, min(self._viewport, last_top))

    def _scroll_up(self) -> bool:
        if self._viewport <= 0:
            return False
        self._viewport -= 1
        return True

    def _scroll_down(self) -> bool:
        if self._viewport + self._rows() >= len(self._matches):
            return False
        self._viewport += 1
        return True

    # mutations
    def add_batch(self, paths: Iterable[str]) -> bool:
        """Merge newly discovered directories; selection index is preserved."""
        with self._lock:
            if self._closed:
                return False
            if not self._merge(paths):
                return False
            self._recompute()
            return True

    def set_query(self, query: str) -> None:
        """Refilter for ``query`` and move the selection to the best match."""
        with self._lock:
            if self._closed:
                return
            self._query = query
            self._recompute()
            self._select_best_match()
            self._ensure_visible()

    def move_selection_down(self) -> bool:
        with self._lock:
            if self._closed or self._selected >= len(self._matches) - 1:
                return False
            self._selected += 1
            self._ensure_visible()
            return True

    def move_selection_up(self) -> bool:
        with self._lock:
            if self._closed or self._selected <= 0:
                return False
            self._selected -= 1
            self._ensure_visible()
            return True

    def scroll_up(self) -> bool:
        with self._lock:
            return not self._closed and self._scroll_up()

    def scroll_down(self) -> bool:
        with self._lock:
            return not self._closed and self._scroll_down()

    def mouse_press(self, row: int) -> bool:
        """Select the match under screen ``row`` or scroll when outside the list."""
        with self._lock:
            if self._closed:
                return False
            list_row = row - HEADER_ROWS
            if list_row < 0:
                return self._scroll_up()
            idx = list_row + self._viewport
            if list_row >= self._rows() or idx >= len(self._matches):
                return self._scroll_down()
            if idx == self._selected:
                return False
            self._selected = idx
            return True

    def mouse_click(self, col: int, row: int) -> bool:
        """Return whether a click at ``(col, row)`` lands on the selected label."""
        with self._lock:
            if self._closed or self._selected < 0:
                return False
            list_row = row - HEADER_ROWS
            if list_row < 0 or list_row + self._viewport != self._selected:
                return False
            label = self._label(self._matches[self._selected])
            return 0 <= col - LIST_TEXT_COL < len(label)

    def mark_complete(self) -> None:
        with self._lock:
            self._complete = True

    def close(self) -> None:
        """Stop accepting changes; late crawler batches are discarded."""
        with self._lock:
            self._closed = True

    # queries
    @property
    def query(self) -> str:
        with self._lock:
            return self._query

    @property
    def selected(self) -> int:
        with self._lock:
            return self._selected

    @property
    def viewport(self) -> int:
        with self._lock:
            return self._viewport

    def candidates(self) -> list[str]:
        with self._lock:
            return list(self._candidates)

    def matches(self) -> list[str]:
        with self._lock:
            return list(self._matches)

    def labels(self) -> list[str]:
        """Return root-relative labels of the current matches."""
        with self._lock:
            return [self._labels[path] for path in self._matches]

    def selected_path(self) -> str | None:
        with self._lock:
            if self._selected < 0 or not self._matches:
                return None
            return self._matches[self._selected]

    def view(self) -> ResultsView:
        with self._lock:
            end = min(len(self._matches), self._viewport + self._rows())
            rows = tuple(
                ResultRow(
                    index=idx,
                    path=self._matches[idx],
                    label=self._labels[self._matches[idx]],
                    selected=idx == self._selected,
                )
                for idx in range(self._viewport, end)
            )
            return ResultsView(
                rows=rows,
                selected=self._selected,
                viewport=self._viewport,
                match_count=len(self._matches),
                candidate_count=len(self._candidates),
                complete=self._complete,
            )
