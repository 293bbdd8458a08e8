"""Persistent JSON config helpers.

Stores the default sort, search debounce, preview limits, and highlight style.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .listing.types import SORT_DIRECTIONS, SORT_KEYS, SortDirection, SortKey

APP_NAME = "indexview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_SORT_KEY: SortKey = "name"
DEFAULT_SORT_DIRECTION: SortDirection = "ascending"
DEFAULT_SEARCH_DEBOUNCE_MS = 150
DEFAULT_TEXT_PREVIEW_MAX_BYTES = 100 * 1024
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_STYLE = "monokai"


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


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so an unwritable config never breaks
    browsing.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_positive_number(key: str, default: float, integral: bool) -> float:
    value = load_config().get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if integral and not isinstance(value, int):
        return default
    if value <= 0:
        return default
    return value


def load_sort() -> tuple[SortKey, SortDirection]:
    """Return the persisted default ``(sort_key, sort_direction)``."""
    config = load_config()
    key = config.get("sort_key")
    direction = config.get("sort_direction")
    if key not in SORT_KEYS:
        key = DEFAULT_SORT_KEY
    if direction not in SORT_DIRECTIONS:
        direction = DEFAULT_SORT_DIRECTION
    return key, direction


def save_sort(key: SortKey, direction: SortDirection) -> None:
    config = load_config()
    config["sort_key"] = key
    config["sort_direction"] = direction
    save_config(config)


def load_search_debounce_seconds() -> float:
    return _load_positive_number("search_debounce_ms", DEFAULT_SEARCH_DEBOUNCE_MS, integral=True) / 1000.0


def load_text_preview_max_bytes() -> int:
    return int(_load_positive_number("text_preview_max_bytes", DEFAULT_TEXT_PREVIEW_MAX_BYTES, integral=True))


def load_request_timeout() -> float:
    return float(_load_positive_number("request_timeout", DEFAULT_REQUEST_TIMEOUT, integral=False))


def load_style() -> str:
    value = load_config().get("style")
    return value if isinstance(value, str) and value.strip() else DEFAULT_STYLE


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_SORT_KEY",
    "DEFAULT_SORT_DIRECTION",
    "DEFAULT_SEARCH_DEBOUNCE_MS",
    "DEFAULT_TEXT_PREVIEW_MAX_BYTES",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_STYLE",
    "load_config",
    "save_config",
    "load_sort",
    "save_sort",
    "load_search_debounce_seconds",
    "load_text_preview_max_bytes",
    "load_request_timeout",
    "load_style",
]
