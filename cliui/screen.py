"""Rendering collaborator: frame assembly and one-write-per-frame output.

``FrameBuilder`` collects clipped, styled rows plus an optional cursor
position; ``Screen`` turns a finished ``Frame`` into escape sequences.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from .ansi import clip_text, pad_text, sanitize_terminal_text
from .theme import UITheme


@dataclass(frozen=True)
class Frame:
    """Finished screen content; ``cursor`` is ``(row, col)`` or ``None`` for hidden."""

    rows: tuple[str, ...]
    plain_rows: tuple[str, ...]
    cursor: tuple[int, int] | None = None


class FrameBuilder:
    """Accumulate rows for one frame, clipped to a fixed width and height."""

    def __init__(self, columns: int, rows: int, theme: UITheme) -> None:
        self.columns = max(1, columns)
        self.max_rows = max(1, rows)
        self.theme = theme
        self._rows: list[str] = []
        self._plain: list[str] = []
        self._cursor: tuple[int, int] | None = None

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def remaining_rows(self) -> int:
        return self.max_rows - len(self._rows)

    def write_line(self, text: str = "", style: str = "") -> None:
        if self.remaining_rows <= 0:
            return
        plain = clip_text(sanitize_terminal_text(text), self.columns)
        self._plain.append(plain)
        if style:
            self._rows.append(f"{style}{plain}\033[0m")
        else:
            self._rows.append(plain)

    def highlight_line(self, text: str) -> None:
        """Write a row painted across the full width with the selection style."""
        if self.remaining_rows <= 0:
            return
        plain = pad_text(sanitize_terminal_text(text), self.columns)
        self._plain.append(plain)
        self._rows.append(f"{self.theme.selected}{plain}\033[0m")

    def set_cursor(self, row: int, col: int) -> None:
        self._cursor = (max(0, min(row, self.max_rows - 1)), max(0, min(col, self.columns - 1)))

    def build(self) -> Frame:
        return Frame(rows=tuple(self._rows), plain_rows=tuple(self._plain), cursor=self._cursor)


def encode_frame(frame: Frame) -> bytes:
    """Escape sequences that clear the screen and paint ``frame``."""
    out: list[str] = ["\x1b[?25l\x1b[H\x1b[2J"]
    for idx, row in enumerate(frame.rows):
        out.append(f"\x1b[{idx + 1};1H{row}\x1b[K")
    if frame.cursor is not None:
        row, col = frame.cursor
        out.append(f"\x1b[{row + 1};{col + 1}H\x1b[?25h")
    return "".join(out).encode("utf-8", errors="replace")


class Screen:
    """Write frames to a terminal file descriptor."""

    def __init__(
        self,
        stdout_fd: int,
        theme: UITheme,
        terminal_size: Callable[[], os.terminal_size] | None = None,
    ) -> None:
        self.stdout_fd = stdout_fd
        self.theme = theme
        self._terminal_size = terminal_size or (lambda: shutil.get_terminal_size((80, 24)))

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)``."""
        term = self._terminal_size()
        return max(1, term.columns), max(1, term.lines)

    def new_frame(self) -> FrameBuilder:
        columns, rows = self.size()
        return FrameBuilder(columns, rows, self.theme)

    def present(self, frame: Frame) -> None:
        os.write(self.stdout_fd, encode_frame(frame))


__all__ = ["Frame", "FrameBuilder", "Screen", "encode_frame"]
