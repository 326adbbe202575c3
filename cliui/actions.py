"""File-action dispatch: what happens when a regular file is opened."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from . import fileops
from .config import DEFAULT_WRAP_WIDTH
from .editor import EditorBuffer, edit_file
from .errors import OperationError
from .menu import Dialogs, KeyReader
from .screen import Screen

logger = logging.getLogger(__name__)

FILE_ACTIONS: tuple[str, ...] = ("View", "Edit", "Open externally")
VIEW, EDIT, OPEN_EXTERNALLY = range(len(FILE_ACTIONS))


class FileActionDispatcher:
    """Ask what to do with a file, then view, edit or launch it."""

    def __init__(
        self,
        screen: Screen,
        read_key: KeyReader,
        dialogs: Dialogs,
        *,
        wrap_width: int = DEFAULT_WRAP_WIDTH,
        read_text: Callable[[Path], tuple[str, OperationError | None]] = fileops.read_text,
        open_external: Callable[[Path | str], OperationError | None] = fileops.open_external,
        edit: Callable[..., EditorBuffer] = edit_file,
    ) -> None:
        self.screen = screen
        self.read_key = read_key
        self.dialogs = dialogs
        self.wrap_width = wrap_width
        self.read_text = read_text
        self.open_external = open_external
        self.edit = edit

    def __call__(self, path: Path) -> None:
        choice = self.dialogs.choose(f"Open {path.name}", str(path), FILE_ACTIONS)
        if choice is None:
            return
        logger.debug("file action %s on %s", FILE_ACTIONS[choice], path)
        if choice == VIEW:
            self.view(path)
        elif choice == EDIT:
            self.edit(path, self.screen, self.read_key, self.dialogs, self.wrap_width)
        elif choice == OPEN_EXTERNALLY:
            error = self.open_external(path)
            if error is not None:
                self.dialogs.show_error(error)

    def view(self, path: Path) -> None:
        text, error = self.read_text(path)
        if error is not None:
            self.dialogs.show_error(error)
            return
        self.dialogs.show_message(f"View: {path}", text)


__all__ = ["FILE_ACTIONS", "FileActionDispatcher"]
