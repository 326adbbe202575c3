"""Listing provider: turns a location into an ordered list of entries.

Every call reads the filesystem afresh. Failures come back as an
``OperationError`` next to an empty listing instead of being raised.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import psutil

from .errors import OperationError, error_from_os, io_failure
from .locations import (
    DRIVE_LIST,
    RECYCLE_BIN,
    DriveList,
    LocationRef,
    PathLocation,
    RecycleBin,
    VirtualRoot,
)

logger = logging.getLogger(__name__)


class EntryKind(enum.Enum):
    DIRECTORY = "directory"
    FILE = "file"
    DRIVE = "drive"
    VIRTUAL = "virtual"

    @property
    def tag(self) -> str:
        """Short label prefix shown in listings."""
        if self is EntryKind.FILE:
            return "[F]"
        if self is EntryKind.VIRTUAL:
            return "[V]"
        return "[D]"


@dataclass(frozen=True)
class Entry:
    """One navigable row of a listing."""

    label: str
    target: LocationRef
    kind: EntryKind

    @property
    def path(self) -> Path | None:
        if isinstance(self.target, PathLocation):
            return self.target.path
        return None

    @property
    def display_label(self) -> str:
        return f"{self.kind.tag} {self.label}"


def _directory_sort_key(entry: Entry) -> tuple[int, str, str]:
    # Directories first, then files; case-insensitive with a stable tiebreak.
    return (0 if entry.kind is EntryKind.DIRECTORY else 1, entry.label.casefold(), entry.label)


def home_directory() -> Path:
    return Path.home()


def desktop_directory() -> Path:
    return home_directory() / "Desktop"


def virtual_root_entries() -> list[Entry]:
    """Shortcuts shown at the top-level location."""
    entries = [Entry("This PC", DRIVE_LIST, EntryKind.VIRTUAL)]
    home = home_directory()
    desktop = desktop_directory()
    if desktop.is_dir():
        entries.append(Entry("Desktop", PathLocation(desktop), EntryKind.DIRECTORY))
    entries.append(Entry(f"Home ({home})", PathLocation(home), EntryKind.DIRECTORY))
    entries.append(Entry("Recycle Bin", RECYCLE_BIN, EntryKind.VIRTUAL))
    return entries


def drive_entries() -> tuple[list[Entry], OperationError | None]:
    """List mounted volumes that are ready to browse."""
    try:
        partitions = psutil.disk_partitions(all=False)
    except (OSError, RuntimeError) as exc:
        logger.warning("disk partition query failed: %s", exc)
        return [], io_failure(f"Cannot query mounted volumes: {exc}")

    entries: list[Entry] = []
    seen: set[str] = set()
    for part in partitions:
        mountpoint = part.mountpoint
        if not mountpoint or mountpoint in seen:
            continue
        seen.add(mountpoint)
        if not os.path.isdir(mountpoint):
            continue
        detail = part.fstype or part.device
        label = f"{mountpoint} ({detail})" if detail else mountpoint
        entries.append(Entry(label, PathLocation(Path(mountpoint)), EntryKind.DRIVE))
    if not entries:
        root = Path(os.path.abspath(os.sep))
        entries.append(Entry(str(root), PathLocation(root), EntryKind.DRIVE))
    return entries, None


def directory_entries(directory: Path, show_hidden: bool = False) -> tuple[list[Entry], OperationError | None]:
    """List one directory: subdirectories first, then files."""
    entries: list[Entry] = []
    try:
        with os.scandir(directory) as it:
            for child in it:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                kind = EntryKind.DIRECTORY if is_dir else EntryKind.FILE
                entries.append(Entry(name, PathLocation(Path(child.path)), kind))
    except OSError as exc:
        logger.info("listing %s failed: %s", directory, exc)
        return [], error_from_os(exc, directory)
    entries.sort(key=_directory_sort_key)
    return entries, None


def list_location(location: LocationRef, show_hidden: bool = False) -> tuple[list[Entry], OperationError | None]:
    """Return ``(entries, error)`` for any browsable location."""
    if isinstance(location, VirtualRoot):
        return virtual_root_entries(), None
    if isinstance(location, DriveList):
        return drive_entries()
    if isinstance(location, PathLocation):
        return directory_entries(location.path, show_hidden=show_hidden)
    if isinstance(location, RecycleBin):
        return [], io_failure("The recycle bin cannot be listed here.")
    raise TypeError(f"unknown location: {location!r}")


def count_entries(directory: Path) -> tuple[int, OperationError | None]:
    """Count every file and directory below ``directory`` (not itself)."""
    failures: list[OSError] = []
    total = 0
    for _root, dirnames, filenames in os.walk(directory, onerror=failures.append):
        if failures:
            break
        total += len(dirnames) + len(filenames)
    if failures:
        exc = failures[0]
        return total, error_from_os(exc, exc.filename or directory)
    return total, None


__all__ = [
    "Entry",
    "EntryKind",
    "count_entries",
    "desktop_directory",
    "directory_entries",
    "drive_entries",
    "home_directory",
    "list_location",
    "virtual_root_entries",
]
