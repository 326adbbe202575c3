"""Error kinds returned by filesystem and launcher collaborators.

Collaborators never raise for expected I/O failures. They hand back an
``OperationError`` value that the calling component shows and recovers from.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


class ErrorKind(enum.Enum):
    """Classification used to title error dialogs."""

    ACCESS_DENIED = "Access denied"
    IO_FAILURE = "I/O failure"
    LAUNCH_FAILURE = "Launch failure"
    VALIDATION_FAILURE = "Invalid input"


@dataclass(frozen=True)
class OperationError:
    """One failed collaborator call: kind, human-readable detail, optional path."""

    kind: ErrorKind
    detail: str
    path: Path | str | None = None

    @property
    def title(self) -> str:
        return self.kind.value

    def describe(self) -> str:
        """Return dialog body text naming the path (when known) and the detail."""
        if self.path is None:
            return self.detail
        return f"{self.path}\n{self.detail}"


def _os_error_detail(exc: OSError) -> str:
    message = exc.strerror or str(exc) or exc.__class__.__name__
    if exc.errno is not None:
        return f"[errno {exc.errno}] {message}"
    return message


def error_from_os(exc: OSError, path: Path | str | None = None) -> OperationError:
    """Map an ``OSError`` onto ``ACCESS_DENIED`` or ``IO_FAILURE``."""
    if path is None and exc.filename is not None:
        path = exc.filename
    kind = ErrorKind.ACCESS_DENIED if isinstance(exc, PermissionError) else ErrorKind.IO_FAILURE
    return OperationError(kind, _os_error_detail(exc), path)


def io_failure(detail: str, path: Path | str | None = None) -> OperationError:
    return OperationError(ErrorKind.IO_FAILURE, detail, path)


def launch_failure(detail: str, path: Path | str | None = None) -> OperationError:
    return OperationError(ErrorKind.LAUNCH_FAILURE, detail, path)


def validation_failure(detail: str, path: Path | str | None = None) -> OperationError:
    return OperationError(ErrorKind.VALIDATION_FAILURE, detail, path)


__all__ = [
    "ErrorKind",
    "OperationError",
    "error_from_os",
    "io_failure",
    "launch_failure",
    "validation_failure",
]
