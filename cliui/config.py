"""Persistent JSON config helpers.

Stores paging size, editor wrap width, theme and hidden-file preference.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .theme import normalize_theme_name

APP_NAME = "cliui"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_PAGE_SIZE = 22
DEFAULT_WRAP_WIDTH = 80


@dataclass(frozen=True)
class Settings:
    """Effective startup preferences after config and CLI overrides."""

    page_size: int = DEFAULT_PAGE_SIZE
    wrap_width: int = DEFAULT_WRAP_WIDTH
    theme: str = "default"
    show_hidden: bool = False
    no_color: bool = False


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


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _coerce_positive_int(value: object, default: int) -> int:
    """Booleans, non-integers and values below one fall back to ``default``."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return default
    return value


def load_show_hidden() -> bool:
    """Return persisted hidden-file visibility preference.

    Only explicit boolean values are accepted; any other type falls back to
    ``False``.
    """
    value = load_config().get("show_hidden")
    return bool(value) if isinstance(value, bool) else False


def save_show_hidden(show_hidden: bool) -> None:
    """Persist hidden-file visibility preference as a boolean."""
    config = load_config()
    config["show_hidden"] = bool(show_hidden)
    save_config(config)


def load_settings() -> Settings:
    """Build ``Settings`` from the config file, sanitizing every field."""
    data = load_config()
    theme = data.get("theme")
    return Settings(
        page_size=_coerce_positive_int(data.get("page_size"), DEFAULT_PAGE_SIZE),
        wrap_width=_coerce_positive_int(data.get("wrap_width"), DEFAULT_WRAP_WIDTH),
        theme=normalize_theme_name(theme if isinstance(theme, str) else None),
        show_hidden=load_show_hidden(),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_WRAP_WIDTH",
    "Settings",
    "load_config",
    "load_settings",
    "load_show_hidden",
    "save_config",
    "save_show_hidden",
]
