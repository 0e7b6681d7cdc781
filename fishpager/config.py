"""Persistent JSON settings helpers.

Stores pager tuning (page factor, scroll interval) and file locations.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "fishpager"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
PROGRESS_FILENAME = ".cmdline-reader-progress"

DEFAULT_PAGE_FACTOR = 0.75
DEFAULT_SCROLL_INTERVAL = 1.0
DEFAULT_LOG_LEVEL = "INFO"


def default_progress_path() -> Path:
    return Path.home() / PROGRESS_FILENAME


@dataclass(frozen=True)
class PagerSettings:
    """Effective runtime settings after validation."""

    page_factor: float = DEFAULT_PAGE_FACTOR
    scroll_interval: float = DEFAULT_SCROLL_INTERVAL
    progress_path: Path | None = None
    log_file: Path | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    def resolved_progress_path(self) -> Path:
        return self.progress_path if self.progress_path is not None else default_progress_path()


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _load_fraction(data: dict[str, object], key: str, default: float) -> float:
    """Read a number constrained to the half-open interval (0, 1]."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if value <= 0 or value > 1:
        return default
    return float(value)


def _load_positive_seconds(data: dict[str, object], key: str, default: float) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if value <= 0:
        return default
    return float(value)


def _load_path(data: dict[str, object], key: str) -> Path | None:
    """Read an optional path value; ``~`` is expanded, blanks are ignored."""
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return Path(stripped).expanduser() if stripped else None


def _load_log_level(data: dict[str, object], key: str, default: str) -> str:
    """Read a standard logging level name such as ``"DEBUG"``; case-insensitive."""
    value = data.get(key)
    if not isinstance(value, str):
        return default
    name = value.strip().upper()
    return name if isinstance(logging.getLevelName(name), int) else default


def load_settings() -> PagerSettings:
    """Build ``PagerSettings`` from config, substituting defaults for invalid values."""
    data = load_config()
    return PagerSettings(
        page_factor=_load_fraction(data, "page_factor", DEFAULT_PAGE_FACTOR),
        scroll_interval=_load_positive_seconds(data, "scroll_interval", DEFAULT_SCROLL_INTERVAL),
        progress_path=_load_path(data, "progress_file"),
        log_file=_load_path(data, "log_file"),
        log_level=_load_log_level(data, "log_level", DEFAULT_LOG_LEVEL),
    )
