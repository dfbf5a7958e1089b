"""User configuration and environment switches.

Settings come from a JSON file in the platform config directory.
Missing or malformed config falls back to defaults.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path

from platformdirs import user_config_dir

from .crawler import DEFAULT_CRAWL_WORKERS

APP_NAME = "lazyjump"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEBUG_ENV_VAR = "DEBUG"
DEFAULT_ROOT_MARKERS: tuple[str, ...] = (".git",)
MAX_CRAWL_WORKERS = 64


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def clamp_crawl_workers(value: int) -> int:
    return max(1, min(MAX_CRAWL_WORKERS, value))


def load_crawl_workers() -> int:
    """Return the crawler pool size; booleans and non-integers are ignored."""
    value = load_config().get("crawl_workers")
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_CRAWL_WORKERS
    return clamp_crawl_workers(value)


def load_root_markers() -> tuple[str, ...]:
    """Return entry names that mark a repository root."""
    value = load_config().get("root_markers")
    if not isinstance(value, list):
        return DEFAULT_ROOT_MARKERS
    markers = tuple(item.strip() for item in value if isinstance(item, str) and item.strip())
    return markers or DEFAULT_ROOT_MARKERS


def debug_panel_enabled(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return bool(env.get(DEBUG_ENV_VAR, ""))
