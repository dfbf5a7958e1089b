"""Full-frame drawing of the query box, match list and debug panel."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from ..results import HEADER_ROWS, LIST_TEXT_COL, ResultsView
from .surface import BOLD, BOLD_UNDERLINE, DEFAULT, AnsiSurface

CRAWL_SPINNER_FRAMES: tuple[str, ...] = ("|", "/", "-", "\\")
SELECTION_MARKER = "►"


@dataclass(frozen=True)
class Frame:
    """Everything one paint needs, captured before drawing starts."""

    root: str
    query: str
    cursor: int
    results: ResultsView
    debug_lines: list[str] = field(default_factory=list)
    spinner_frame: int = 0


def root_label(root: str) -> str:
    return root.rstrip(os.sep) + os.sep


def _draw_text(surface: AnsiSurface, x: int, y: int, text: str, fg: str = DEFAULT) -> None:
    for offset, ch in enumerate(text):
        surface.set_cell(x + offset, y, ch, fg)


def _draw_query_box(surface: AnsiSurface, frame: Frame, width: int) -> None:
    surface.set_cell(0, 0, "┌")
    surface.set_cell(0, 1, "│")
    surface.set_cell(0, 2, "└")
    for x in range(1, width - 1):
        surface.set_cell(x, 0, "─")
        surface.set_cell(x, 2, "─")
    surface.set_cell(width - 1, 0, "┐")
    surface.set_cell(width - 1, 1, "│")
    surface.set_cell(width - 1, 2, "┘")

    label = root_label(frame.root)
    _draw_text(surface, 1, 1, label, BOLD)
    _draw_text(surface, 1 + len(label), 1, frame.query)
    surface.set_cursor(1 + len(label) + frame.cursor, 1)


def crawl_status(frame: Frame) -> str:
    """Return the ``matches/candidates`` counter, with a spinner while crawling."""
    results = frame.results
    status = f"{results.match_count}/{results.candidate_count}"
    if not results.complete:
        spinner = CRAWL_SPINNER_FRAMES[frame.spinner_frame % len(CRAWL_SPINNER_FRAMES)]
        status = f"{spinner} {status}"
    return f" {status} "


def _draw_crawl_status(surface: AnsiSurface, frame: Frame, width: int) -> None:
    status = crawl_status(frame)
    x = width - 1 - len(status)
    if x > 1:
        _draw_text(surface, x, 0, status)


def _draw_results(surface: AnsiSurface, results: ResultsView, height: int) -> None:
    for row in results.rows:
        y = HEADER_ROWS + row.index - results.viewport
        if y >= height:
            break
        fg = DEFAULT
        if row.selected:
            surface.set_cell(0, y, SELECTION_MARKER)
            fg = BOLD_UNDERLINE
        _draw_text(surface, LIST_TEXT_COL, y, row.label, fg)


def _draw_debug_panel(surface: AnsiSurface, lines: list[str], width: int, height: int) -> None:
    max_lines = height - HEADER_ROWS - 1
    if max_lines <= 0 or not lines:
        return
    lines = lines[-max_lines:]
    top = height - len(lines)
    for x in range(width):
        surface.set_cell(x, top - 1, "─")
    for offset, line in enumerate(lines):
        _draw_text(surface, 0, top + offset, line)


def draw_frame(surface: AnsiSurface, frame: Frame) -> None:
    """Clear ``surface``, draw ``frame`` onto it and flush."""
    surface.clear()
    width, height = surface.size()
    _draw_query_box(surface, frame, width)
    _draw_crawl_status(surface, frame, width)
    _draw_results(surface, frame.results, height)
    if frame.debug_lines:
        _draw_debug_panel(surface, frame.debug_lines, width, height)
    surface.flush()
