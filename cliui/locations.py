"""Logical browsing locations.

Virtual places (the root, the drive list, the recycle bin) are distinct types,
so a real path can never be mistaken for a sentinel.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class VirtualRoot:
    """Top-level shortcut list shown at startup."""


@dataclass(frozen=True)
class DriveList:
    """Listing of mounted volumes ("This PC")."""


@dataclass(frozen=True)
class RecycleBin:
    """Platform recycle store; opened externally, never browsed."""


@dataclass(frozen=True)
class PathLocation:
    """A concrete directory on disk."""

    path: Path


LocationRef = VirtualRoot | DriveList | RecycleBin | PathLocation

VIRTUAL_ROOT = VirtualRoot()
DRIVE_LIST = DriveList()
RECYCLE_BIN = RecycleBin()


def parent_location(location: LocationRef) -> LocationRef:
    """Return where "go up" leads from ``location``.

    Directories go to their parent; a filesystem root goes to the drive list;
    the drive list goes to the virtual root, which is its own parent.
    """
    if isinstance(location, PathLocation):
        parent = location.path.parent
        if parent == location.path:
            return DRIVE_LIST
        return PathLocation(parent)
    return VIRTUAL_ROOT


def location_title(location: LocationRef) -> str:
    """Header text for a location."""
    if isinstance(location, PathLocation):
        return f"Current directory: {location.path}"
    if isinstance(location, DriveList):
        return "This PC"
    if isinstance(location, RecycleBin):
        return "Recycle Bin"
    return "Desktop"


__all__ = [
    "VirtualRoot",
    "DriveList",
    "RecycleBin",
    "PathLocation",
    "LocationRef",
    "VIRTUAL_ROOT",
    "DRIVE_LIST",
    "RECYCLE_BIN",
    "parent_location",
    "location_title",
]
