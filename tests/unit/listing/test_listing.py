"""Listing provider tests against real temporary directories."""

from __future__ import annotations

import os
import tempfile
import unittest
from collections import namedtuple
from pathlib import Path
from unittest import mock

from cliui import listing
from cliui.errors import ErrorKind
from cliui.listing import Entry, EntryKind
from cliui.locations import DRIVE_LIST, RECYCLE_BIN, VIRTUAL_ROOT, PathLocation

Partition = namedtuple("Partition", "device mountpoint fstype opts")


class DirectoryListingTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / "beta").mkdir()
        (self.root / "Alpha").mkdir()
        (self.root / ".cache").mkdir()
        (self.root / "zeta.txt").write_text("z", encoding="utf-8")
        (self.root / "apple.txt").write_text("a", encoding="utf-8")
        (self.root / ".hidden").write_text("h", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_directories_first_then_files_case_insensitive(self) -> None:
        entries, error = listing.list_location(PathLocation(self.root))
        self.assertIsNone(error)
        self.assertEqual([entry.label for entry in entries], ["Alpha", "beta", "apple.txt", "zeta.txt"])
        self.assertEqual(
            [entry.kind for entry in entries],
            [EntryKind.DIRECTORY, EntryKind.DIRECTORY, EntryKind.FILE, EntryKind.FILE],
        )
        self.assertEqual(entries[0].path, self.root / "Alpha")

    def test_hidden_entries_are_opt_in(self) -> None:
        entries, _error = listing.list_location(PathLocation(self.root), show_hidden=True)
        labels = [entry.label for entry in entries]
        self.assertIn(".cache", labels)
        self.assertIn(".hidden", labels)
        self.assertLess(labels.index(".cache"), labels.index("apple.txt"))

    def test_missing_directory_returns_error_and_empty_listing(self) -> None:
        entries, error = listing.list_location(PathLocation(self.root / "nope"))
        self.assertEqual(entries, [])
        self.assertEqual(error.kind, ErrorKind.IO_FAILURE)
        self.assertEqual(error.path, self.root / "nope")

    @unittest.skipIf(os.name != "posix" or (hasattr(os, "geteuid") and os.geteuid() == 0), "needs POSIX non-root")
    def test_unreadable_directory_is_access_denied(self) -> None:
        locked = self.root / "locked"
        locked.mkdir()
        locked.chmod(0)
        try:
            entries, error = listing.list_location(PathLocation(locked))
        finally:
            locked.chmod(0o755)
        self.assertEqual(entries, [])
        self.assertEqual(error.kind, ErrorKind.ACCESS_DENIED)

    def test_count_entries_is_recursive(self) -> None:
        (self.root / "beta" / "inner").mkdir()
        (self.root / "beta" / "inner" / "x.txt").write_text("x", encoding="utf-8")
        (self.root / "beta" / "y.txt").write_text("y", encoding="utf-8")
        count, error = listing.count_entries(self.root / "beta")
        self.assertIsNone(error)
        self.assertEqual(count, 3)

    def test_count_entries_of_missing_directory(self) -> None:
        count, error = listing.count_entries(self.root / "missing")
        self.assertEqual(count, 0)
        self.assertIsNotNone(error)


class VirtualListingTests(unittest.TestCase):
    def test_virtual_root_shortcuts(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            home = Path(tmp)
            with mock.patch("cliui.listing.home_directory", return_value=home):
                entries, error = listing.list_location(VIRTUAL_ROOT)
                self.assertIsNone(error)
                self.assertEqual(
                    [entry.label for entry in entries],
                    ["This PC", f"Home ({home})", "Recycle Bin"],
                )
                (home / "Desktop").mkdir()
                entries, _error = listing.list_location(VIRTUAL_ROOT)
        self.assertEqual(entries[0].target, DRIVE_LIST)
        self.assertEqual(entries[1], Entry("Desktop", PathLocation(home / "Desktop"), EntryKind.DIRECTORY))
        self.assertEqual(entries[-1].target, RECYCLE_BIN)
        self.assertEqual(entries[-1].display_label, "[V] Recycle Bin")

    def test_drive_list_skips_duplicates_and_missing_mounts(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            partitions = [
                Partition("/dev/sda1", tmp, "ext4", "rw"),
                Partition("/dev/sda1", tmp, "ext4", "rw"),
                Partition("/dev/sdb1", os.path.join(tmp, "gone"), "vfat", "rw"),
            ]
            with mock.patch("cliui.listing.psutil.disk_partitions", return_value=partitions):
                entries, error = listing.list_location(DRIVE_LIST)
        self.assertIsNone(error)
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].kind, EntryKind.DRIVE)
        self.assertEqual(entries[0].label, f"{tmp} (ext4)")
        self.assertEqual(entries[0].display_label, f"[D] {tmp} (ext4)")

    def test_drive_list_falls_back_to_filesystem_root(self) -> None:
        with mock.patch("cliui.listing.psutil.disk_partitions", return_value=[]):
            entries, error = listing.drive_entries()
        self.assertIsNone(error)
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].path, Path(os.path.abspath(os.sep)))

    def test_drive_query_failure_is_reported(self) -> None:
        with mock.patch("cliui.listing.psutil.disk_partitions", side_effect=OSError("boom")):
            entries, error = listing.drive_entries()
        self.assertEqual(entries, [])
        self.assertEqual(error.kind, ErrorKind.IO_FAILURE)

    def test_recycle_bin_is_not_listable(self) -> None:
        entries, error = listing.list_location(RECYCLE_BIN)
        self.assertEqual(entries, [])
        self.assertIsNotNone(error)


if __name__ == "__main__":
    unittest.main()
