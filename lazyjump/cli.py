"""Command-line front door for lazyjump.

Parses CLI options and resolves the search root.
Then runs the interactive picker and prints the chosen directory.
"""

from __future__ import annotations

import argparse
import os
import sys
import termios
from collections.abc import Sequence
from pathlib import Path

from .config import clamp_crawl_workers, debug_panel_enabled, load_crawl_workers, load_root_markers
from .runtime import run_session
from .runtime.loop import OUTCOME_ERROR
from .runtime.terminal import open_tty


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def find_repository_root(start: Path, markers: Sequence[str]) -> Path | None:
    """Return the nearest ancestor of ``start`` (inclusive) holding a marker entry."""
    for candidate in (start, *start.parents):
        if any((candidate / marker).exists() for marker in markers):
            return candidate
    return None


def resolve_root(path_arg: str | None, cwd: Path | None = None, markers: Sequence[str] = (".git",)) -> Path:
    """Pick the search root: explicit argument, else repository root, else ``cwd``."""
    if path_arg:
        return Path(os.path.abspath(os.path.expanduser(path_arg)))
    if cwd is None:
        cwd = Path.cwd()
    return find_repository_root(cwd, markers) or cwd


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments, run one picker session and print its result.

    The chosen absolute path (or ``.`` when nothing was chosen) is written to
    stdout without a trailing newline, for use as ``cd "$(lazyjump)"``.
    """
    parser = argparse.ArgumentParser(
        description="Fuzzy-find a directory below the repository root and print its path."
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory to search. Defaults to the enclosing repository root, else the current directory.",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of directory-listing threads (default: from config, else 8).",
    )
    args = parser.parse_args(argv)

    root = resolve_root(args.path, markers=load_root_markers())
    if not root.exists():
        raise SystemExit(f"no such file or directory: {root}")
    if not root.is_dir():
        raise SystemExit(f"not a directory: {root}")

    workers = clamp_crawl_workers(args.workers) if args.workers is not None else load_crawl_workers()
    try:
        tty_fd = open_tty()
    except OSError as exc:
        raise SystemExit(f"cannot open terminal: {exc}") from exc

    try:
        outcome = run_session(str(root), tty_fd=tty_fd, workers=workers, debug=debug_panel_enabled())
    except (OSError, termios.error) as exc:
        raise SystemExit(f"terminal error: {exc}") from exc
    finally:
        os.close(tty_fd)

    if outcome.kind == OUTCOME_ERROR:
        raise SystemExit(f"terminal error: {outcome.error}")
    sys.stdout.write(outcome.output)
    sys.stdout.flush()


if __name__ == "__main__":
    main()
