"""Public runtime orchestration entry points.

This package groups the interactive session bootstrap (`run_session`) and the
lower-level event loop contracts used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import SessionOutcome


def run_session(*args, **kwargs):
    """Lazily import session entrypoint to avoid terminal setup on import."""
    from .app import run_session as _run_session

    return _run_session(*args, **kwargs)


def run_event_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_event_loop as _run_event_loop

    return _run_event_loop(*args, **kwargs)


def __getattr__(name: str):
    if name == "SessionOutcome":
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_session",
    "run_event_loop",
    "SessionOutcome",
]
