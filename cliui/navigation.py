"""Browsing state machine: location, paging, selection and file management.

``Navigator`` owns a ``NavigationState`` and reacts to one key token at a
time. Listing happens in ``refresh``; every collaborator failure is shown as
a dialog and followed by a fixed recovery, so nothing propagates out.
"""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from . import fileops, listing
from .config import save_show_hidden
from .errors import OperationError, validation_failure
from .keymap import KeyBinding, KeyMap
from .listing import Entry, EntryKind
from .locations import (
    DRIVE_LIST,
    VIRTUAL_ROOT,
    LocationRef,
    PathLocation,
    RecycleBin,
    VirtualRoot,
    location_title,
    parent_location,
)
from .menu import Dialogs
from .pager import PageView, clamp_index, paginate

logger = logging.getLogger(__name__)

DELETE_OPTIONS: tuple[str, ...] = ("Move to recycle bin", "Delete permanently", "Cancel")
MAX_JUMP_PAGES = 9


class CreateKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass
class NavigationState:
    """Where the browser is and what is highlighted there."""

    location: LocationRef = VIRTUAL_ROOT
    page_index: int = 0
    selection_index: int = 0
    needs_refresh: bool = True


@dataclass(frozen=True)
class BrowserServices:
    """Filesystem and launcher collaborators used by ``Navigator``.

    Defaults are the real implementations; tests swap in fakes.
    """

    list_location: Callable[..., tuple[list[Entry], OperationError | None]] = listing.list_location
    count_entries: Callable[[Path], tuple[int, OperationError | None]] = listing.count_entries
    recycle: Callable[[Path], OperationError | None] = fileops.recycle
    delete_permanent: Callable[[Path], OperationError | None] = fileops.delete_permanent
    create_file: Callable[[Path], OperationError | None] = fileops.create_file
    create_directory: Callable[[Path], OperationError | None] = fileops.create_directory
    open_external: Callable[[Path | str], OperationError | None] = fileops.open_external
    recycle_bin_target: Callable[[], str] = fileops.recycle_bin_target
    save_show_hidden: Callable[[bool], None] = save_show_hidden
    is_symlink: Callable[[Path], bool] = os.path.islink


def validate_new_name(name: str) -> OperationError | None:
    """Reject names that are blank or that would escape the current directory."""
    if not name or not name.strip():
        return validation_failure("Name must not be empty.")
    stripped = name.strip()
    if stripped in {".", ".."}:
        return validation_failure(f"'{stripped}' is not a valid name.")
    separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
    if any(sep in stripped for sep in separators):
        return validation_failure("Name must not contain a path separator.")
    return None


class Navigator:
    """Keyboard-driven browsing over listings, one page at a time."""

    def __init__(
        self,
        dialogs: Dialogs,
        *,
        page_size: int,
        services: BrowserServices | None = None,
        open_file: Callable[[Path], None] | None = None,
        show_hidden: bool = False,
        state: NavigationState | None = None,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.dialogs = dialogs
        self.services = services if services is not None else BrowserServices()
        self.open_file = open_file
        self.show_hidden = show_hidden
        self.state = state if state is not None else NavigationState()
        self._page_size = page_size
        self.entries: list[Entry] = []
        self.page: PageView[Entry] = paginate(self.entries, page_size, 0)
        self._focus_path: Path | None = None
        self._keys = self._build_key_map()

    # -- paging -----------------------------------------------------------

    @property
    def page_size(self) -> int:
        return self._page_size

    @page_size.setter
    def page_size(self, value: int) -> None:
        value = max(1, value)
        if value != self._page_size:
            self._page_size = value
            self.state.needs_refresh = True

    @property
    def title(self) -> str:
        return location_title(self.state.location)

    def selected_entry(self) -> Entry | None:
        if self.page.is_empty:
            return None
        return self.page.items[clamp_index(self.state.selection_index, len(self.page.items))]

    def refresh(self) -> PageView[Entry]:
        """List the current location afresh and clamp page and selection to it.

        A listing failure is shown and the browser falls back to the virtual
        root; the failed location is not retried.
        """
        entries, error = self.services.list_location(self.state.location, self.show_hidden)
        if error is not None:
            logger.warning("listing %s failed: %s", self.state.location, error.detail)
            self.dialogs.show_error(error)
            self.reset_to_root()
            entries, error = self.services.list_location(VIRTUAL_ROOT, self.show_hidden)
            if error is not None:
                self.dialogs.show_error(error)
                entries = []
        self.entries = entries
        self._apply_focus()
        self._repage()
        self.state.needs_refresh = False
        return self.page

    def _apply_focus(self) -> None:
        if self._focus_path is None:
            return
        target, self._focus_path = self._focus_path, None
        for idx, entry in enumerate(self.entries):
            if entry.path == target:
                self.state.page_index, self.state.selection_index = divmod(idx, self._page_size)
                return

    def _repage(self) -> None:
        self.page = paginate(self.entries, self._page_size, self.state.page_index)
        self.state.page_index = self.page.page_index
        self.state.selection_index = clamp_index(self.state.selection_index, len(self.page.items))

    def move_selection(self, delta: int) -> None:
        if self.page.is_empty:
            return
        updated = clamp_index(self.state.selection_index + delta, len(self.page.items))
        if updated != self.state.selection_index:
            self.state.selection_index = updated
            self.state.needs_refresh = True

    def select_edge(self, last: bool) -> None:
        if self.page.is_empty:
            return
        self.move_selection(len(self.page.items) if last else -len(self.page.items))

    def move_page(self, delta: int) -> None:
        self.state.page_index = clamp_index(self.state.page_index + delta, self.page.page_count)
        self.state.selection_index = 0
        self._repage()
        self.state.needs_refresh = True

    def jump_page(self, page: int) -> None:
        if 0 <= page < self.page.page_count:
            self.state.page_index = page
            self.state.selection_index = 0
            self._repage()
            self.state.needs_refresh = True

    # -- location changes -------------------------------------------------

    def jump_to(self, location: LocationRef) -> None:
        """Move to ``location`` with page and selection reset."""
        logger.debug("navigating to %s", location)
        self.state.location = location
        self.state.page_index = 0
        self.state.selection_index = 0
        self.state.needs_refresh = True

    def reset_to_root(self) -> None:
        self.jump_to(VIRTUAL_ROOT)

    def go_up(self) -> None:
        self.jump_to(parent_location(self.state.location))

    def enter(self, entry: Entry) -> None:
        """Open ``entry``: descend into directories, hand files to ``open_file``."""
        if isinstance(entry.target, RecycleBin):
            self.state.needs_refresh = True
            error = self.services.open_external(self.services.recycle_bin_target())
            if error is not None:
                self.dialogs.show_error(error)
            return
        if entry.kind is EntryKind.FILE:
            self.state.needs_refresh = True
            if self.open_file is not None and entry.path is not None:
                self.open_file(entry.path)
            return
        self.jump_to(entry.target)

    def enter_selected(self, directories_only: bool = False) -> None:
        entry = self.selected_entry()
        if entry is None:
            return
        if directories_only and entry.kind is EntryKind.FILE:
            return
        self.enter(entry)

    # -- file management --------------------------------------------------

    def delete(self, entry: Entry) -> bool:
        """Confirm, then recycle or permanently delete ``entry``.

        Directories report their recursive entry count before the choice; a
        symbolic link to a directory is named as a link instead.
        Returns ``True`` only when something was removed.
        """
        self.state.needs_refresh = True
        path = entry.path
        if path is None or entry.kind not in {EntryKind.FILE, EntryKind.DIRECTORY}:
            self.dialogs.show_error(validation_failure("Only files and directories can be deleted.", entry.label))
            return False

        body = str(path)
        if entry.kind is EntryKind.DIRECTORY and self.services.is_symlink(path):
            body = f"{path}\nSymbolic link; only the link is removed, not its target."
        elif entry.kind is EntryKind.DIRECTORY:
            count, error = self.services.count_entries(path)
            if error is not None:
                self.dialogs.show_error(error)
                return False
            body = f"{path}\nThis directory contains {count} item(s)."

        choice = self.dialogs.choose(f"Delete {entry.label}?", body, DELETE_OPTIONS)
        if choice == 0:
            error = self.services.recycle(path)
        elif choice == 1:
            error = self.services.delete_permanent(path)
        else:
            return False
        if error is not None:
            self.dialogs.show_error(error)
            return False
        logger.info("removed %s (%s)", path, DELETE_OPTIONS[choice])
        return True

    def delete_selected(self) -> None:
        entry = self.selected_entry()
        if entry is not None:
            self.delete(entry)

    def create(self, kind: CreateKind, name: str) -> bool:
        """Create an empty file or directory named ``name`` in the current directory."""
        self.state.needs_refresh = True
        error = validate_new_name(name)
        location = self.state.location
        if error is None and not isinstance(location, PathLocation):
            error = validation_failure("New entries can only be created inside a directory.")
        if error is not None:
            self.dialogs.show_error(error)
            return False

        target = location.path / name.strip()
        if kind is CreateKind.DIRECTORY:
            error = self.services.create_directory(target)
        else:
            error = self.services.create_file(target)
        if error is not None:
            self.dialogs.show_error(error)
            return False
        self._focus_path = target
        return True

    def prompt_create(self, kind: CreateKind) -> bool:
        self.state.needs_refresh = True
        name = self.dialogs.ask_text(f"New {kind.value}", f"Name of the new {kind.value}:")
        if name is None:
            return False
        return self.create(kind, name)

    def toggle_hidden(self) -> None:
        self.show_hidden = not self.show_hidden
        self.services.save_show_hidden(self.show_hidden)
        self.state.needs_refresh = True

    def confirm_quit(self) -> bool:
        self.state.needs_refresh = True
        return self.dialogs.confirm("Exit?", "Leave the file browser.")

    def escape(self) -> bool:
        if isinstance(self.state.location, VirtualRoot):
            return self.confirm_quit()
        self.reset_to_root()
        return False

    # -- keys -------------------------------------------------------------

    def _build_key_map(self) -> KeyMap:
        keys = KeyMap(fold_case=True)
        keys.bind_all((
            KeyBinding(("UP",), lambda: self.move_selection(-1)),
            KeyBinding(("DOWN",), lambda: self.move_selection(1)),
            KeyBinding(("HOME",), lambda: self.select_edge(last=False)),
            KeyBinding(("END",), lambda: self.select_edge(last=True)),
            KeyBinding(("ENTER", " "), self.enter_selected),
            KeyBinding(("d",), lambda: self.enter_selected(directories_only=True)),
            KeyBinding(("a", "BACKSPACE"), self.go_up),
            KeyBinding(("LEFT", "PAGE_UP"), lambda: self.move_page(-1)),
            KeyBinding(("RIGHT", "PAGE_DOWN"), lambda: self.move_page(1)),
            KeyBinding(("DELETE", "x"), self.delete_selected),
            KeyBinding(("n",), lambda: self.prompt_create(CreateKind.FILE)),
            KeyBinding(("m",), lambda: self.prompt_create(CreateKind.DIRECTORY)),
            KeyBinding((".",), self.toggle_hidden),
            KeyBinding(("p",), lambda: self.jump_to(DRIVE_LIST)),
            KeyBinding(("ESC",), self.escape),
            KeyBinding(("q", "s", "CTRL_Q", "CTRL_C"), self.confirm_quit),
        ))
        for page in range(MAX_JUMP_PAGES):
            keys.bind(KeyBinding((str(page + 1),), lambda page=page: self.jump_page(page)))
        return keys

    def handle_key(self, key: str) -> bool:
        """Handle one key and return ``True`` when the app should quit."""
        return self._keys.dispatch(key)


__all__ = [
    "BrowserServices",
    "CreateKind",
    "DELETE_OPTIONS",
    "NavigationState",
    "Navigator",
    "validate_new_name",
]
