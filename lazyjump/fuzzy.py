"""Positional subsequence scoring for directory candidates."""

from __future__ import annotations

import os

EMPTY_QUERY_SCORE = 1.0


def to_root_relative(path: str, root: str) -> str:
    """Return ``path`` relative to ``root`` with POSIX separators.

    The root itself maps to ``"."``; paths outside the root are returned as-is.
    """
    try:
        relative = os.path.relpath(path, root)
    except ValueError:
        return path
    if relative.startswith(".." + os.sep) or relative == "..":
        return path
    return relative.replace(os.sep, "/")


def fuzzy_score(query: str, candidate: str) -> float:
    """Score ``candidate`` against ``query``; ``0.0`` means no match.

    Each query character must be found case-insensitively strictly after the
    previous match. The total weight starts at 1 and grows by the distance
    advanced for each matched character, so tight, early matches score higher.
    """
    if not query:
        return EMPTY_QUERY_SCORE
    candidate_folded = candidate.casefold()

    weight = 1
    prev_idx = -1
    for ch in query:
        needle = ch.casefold()
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return 0.0
        weight += idx - prev_idx
        prev_idx = idx + len(needle) - 1
    return 1.0 / weight


def merge_sort_key(query: str, relative: str) -> tuple[float, int, str]:
    """Sort key used when merging crawl batches: score desc, length, lexical."""
    return (-fuzzy_score(query, relative), len(relative), relative)
