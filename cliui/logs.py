"""Logging setup.

The UI owns the terminal in raw mode, so records go to a file under the
platform log directory rather than to stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = f"{APP_NAME}.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def configure_logging(level: str | int = "WARNING", log_file: Path | None = None) -> logging.Handler:
    """Attach a single handler to the ``cliui`` logger and return it.

    Falls back to a ``NullHandler`` when the log file cannot be opened.
    """
    root = logging.getLogger(APP_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level if isinstance(level, int) else str(level).upper())
    root.propagate = False

    path = log_file if log_file is not None else default_log_path()
    handler: logging.Handler
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return handler


__all__ = ["LOG_FILENAME", "configure_logging", "default_log_path"]
