"""Filesystem and launcher collaborators.

Each helper returns an ``OperationError`` (or a ``(value, error)`` pair)
instead of raising, so callers can show a dialog and pick a recovery.
"""

from __future__ import annotations

import codecs
import logging
import os
import shutil
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

from send2trash import send2trash

from .errors import OperationError, error_from_os, io_failure, launch_failure

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"
FALLBACK_ENCODING = "latin-1"


def decode_text(data: bytes) -> tuple[str, str]:
    """Decode file bytes and report the encoding used.

    UTF-8 (with its BOM remembered as ``utf-8-sig``) is tried first; anything
    else is latin-1, which maps every byte and so re-encodes to the same bytes.
    """
    encoding = "utf-8-sig" if data.startswith(codecs.BOM_UTF8) else DEFAULT_ENCODING
    try:
        return data.decode(encoding), encoding
    except UnicodeDecodeError:
        return data.decode(FALLBACK_ENCODING), FALLBACK_ENCODING


def read_text(path: Path) -> tuple[str, OperationError | None]:
    """Read text for display, falling back to latin-1 for non-UTF-8 bytes."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.info("read %s failed: %s", path, exc)
        return "", error_from_os(exc, path)
    text, _encoding = decode_text(data)
    return text, None


def split_lines(text: str) -> list[str]:
    """Split file content into lines; a trailing newline does not add a line."""
    lines = text.replace("\r\n", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def read_lines(path: Path) -> tuple[list[str], str, OperationError | None]:
    """Return ``(lines, encoding, error)``; save with the same encoding."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.info("read %s failed: %s", path, exc)
        return [], DEFAULT_ENCODING, error_from_os(exc, path)
    text, encoding = decode_text(data)
    return split_lines(text), encoding, None


def write_lines(path: Path, lines: Sequence[str], encoding: str = DEFAULT_ENCODING) -> OperationError | None:
    """Write one line per entry, each followed by ``\\n``, in ``encoding``."""
    try:
        payload = "".join(f"{line}\n" for line in lines).encode(encoding)
    except UnicodeEncodeError as exc:
        logger.warning("encoding %s as %s failed: %s", path, encoding, exc)
        return io_failure(f"Text cannot be saved as {encoding}: {exc.object[exc.start:exc.end]!r}", path)
    try:
        with open(path, "wb") as handle:
            handle.write(payload)
    except OSError as exc:
        logger.warning("write %s failed: %s", path, exc)
        return error_from_os(exc, path)
    logger.info("wrote %d lines to %s as %s", len(lines), path, encoding)
    return None


def recycle_bin_target() -> str:
    """Location handed to the opener to show the platform recycle store."""
    if sys.platform.startswith("win"):
        return "shell:RecycleBinFolder"
    if sys.platform == "darwin":
        return str(Path.home() / ".Trash")
    return "trash:///"


def _opener_command(target: str) -> list[str]:
    if sys.platform == "darwin":
        return ["open", target]
    return ["xdg-open", target]


def open_external(target: Path | str) -> OperationError | None:
    """Open ``target`` with the platform default handler, without waiting."""
    target_text = str(target)
    try:
        if sys.platform.startswith("win"):
            os.startfile(target_text)  # type: ignore[attr-defined]
        else:
            subprocess.Popen(
                _opener_command(target_text),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
    except OSError as exc:
        logger.warning("opening %s failed: %s", target_text, exc)
        return launch_failure(f"Failed to launch default handler: {exc}", target_text)
    logger.info("opened %s externally", target_text)
    return None


def recycle(path: Path) -> OperationError | None:
    """Move ``path`` to the recycle store; unsupported platforms report failure."""
    try:
        send2trash(str(path))
    except OSError as exc:
        logger.warning("recycling %s failed: %s", path, exc)
        return error_from_os(exc, path)
    except Exception as exc:
        # send2trash raises its own exception types on some platforms.
        logger.warning("recycling %s failed: %s", path, exc)
        return io_failure(f"Cannot move to recycle bin: {exc}", path)
    logger.info("recycled %s", path)
    return None


def delete_permanent(path: Path) -> OperationError | None:
    """Remove a file, link, or whole directory tree."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as exc:
        logger.warning("deleting %s failed: %s", path, exc)
        return error_from_os(exc, path)
    logger.info("deleted %s", path)
    return None


def create_file(path: Path) -> OperationError | None:
    try:
        path.touch(exist_ok=False)
    except OSError as exc:
        logger.warning("creating file %s failed: %s", path, exc)
        return error_from_os(exc, path)
    logger.info("created file %s", path)
    return None


def create_directory(path: Path) -> OperationError | None:
    try:
        path.mkdir()
    except OSError as exc:
        logger.warning("creating directory %s failed: %s", path, exc)
        return error_from_os(exc, path)
    logger.info("created directory %s", path)
    return None


__all__ = [
    "DEFAULT_ENCODING",
    "create_directory",
    "create_file",
    "decode_text",
    "delete_permanent",
    "open_external",
    "read_lines",
    "read_text",
    "recycle",
    "recycle_bin_target",
    "split_lines",
    "write_lines",
]
