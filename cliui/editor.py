"""Modeless line-buffer editor.

``EditorBuffer`` holds the text and cursor and enforces the cursor bounds after
every edit; it never touches a terminal. ``EditorSession`` feeds it key
tokens, draws it, and runs the save and exit-with-unsaved-changes flows.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from . import fileops
from .ansi import display_width, sanitize_terminal_text
from .config import DEFAULT_WRAP_WIDTH
from .errors import OperationError
from .input import is_printable_key
from .keymap import KeyBinding, KeyMap
from .menu import Dialogs, KeyReader
from .render import EDITOR_CHROME_ROWS, render_editor
from .screen import Screen

logger = logging.getLogger(__name__)

EXIT_OPTIONS: tuple[str, ...] = ("Save and exit", "Discard changes")


@dataclass
class EditorBuffer:
    """Lines of one file plus a ``(line, column)`` cursor.

    ``lines`` always holds at least one (possibly empty) line, and the cursor
    satisfies ``cursor_line < len(lines)`` and
    ``cursor_col <= len(lines[cursor_line])``.
    """

    source_path: Path
    lines: list[str] = field(default_factory=lambda: [""])
    wrap_width: int = DEFAULT_WRAP_WIDTH
    cursor_line: int = 0
    cursor_col: int = 0
    modified: bool = False
    encoding: str = fileops.DEFAULT_ENCODING

    def __post_init__(self) -> None:
        if self.wrap_width < 1:
            raise ValueError(f"wrap_width must be >= 1, got {self.wrap_width}")
        self.lines = list(self.lines) or [""]
        self._clamp_cursor()

    @classmethod
    def load(
        cls,
        path: Path,
        wrap_width: int = DEFAULT_WRAP_WIDTH,
        read_lines: Callable[[Path], tuple[list[str], str, OperationError | None]] = fileops.read_lines,
    ) -> tuple[EditorBuffer, OperationError | None]:
        """Load ``path``; on failure return a single-empty-line buffer and the error.

        The buffer remembers the encoding the file was decoded with.
        """
        lines, encoding, error = read_lines(path)
        if error is not None:
            return cls(source_path=path, lines=[""], wrap_width=wrap_width), error
        return cls(source_path=path, lines=lines, wrap_width=wrap_width, encoding=encoding), None

    @property
    def cursor(self) -> tuple[int, int]:
        return self.cursor_line, self.cursor_col

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor_line]

    def _clamp_cursor(self) -> None:
        self.cursor_line = max(0, min(self.cursor_line, len(self.lines) - 1))
        self.cursor_col = max(0, min(self.cursor_col, len(self.lines[self.cursor_line])))

    # -- cursor movement --------------------------------------------------

    def move_vertical(self, delta: int) -> None:
        """Move up or down; the column is pulled back onto shorter lines."""
        self.cursor_line = max(0, min(self.cursor_line + delta, len(self.lines) - 1))
        self.cursor_col = min(self.cursor_col, len(self.current_line))

    def move_horizontal(self, delta: int) -> None:
        """Move left or right within the current line only."""
        self.cursor_col = max(0, min(self.cursor_col + delta, len(self.current_line)))

    def move_to_line_start(self) -> None:
        self.cursor_col = 0

    def move_to_line_end(self) -> None:
        self.cursor_col = len(self.current_line)

    # -- edits ------------------------------------------------------------

    def insert_char(self, ch: str) -> None:
        """Insert ``ch`` at the cursor, soft-wrapping once the line reaches the wrap width.

        The split keeps the first ``wrap_width`` characters; the rest moves to
        a new line below and the cursor goes to its start.
        """
        line = self.current_line
        line = line[: self.cursor_col] + ch + line[self.cursor_col :]
        self.lines[self.cursor_line] = line
        self.cursor_col += len(ch)
        self.modified = True
        if len(line) >= self.wrap_width:
            self.lines[self.cursor_line] = line[: self.wrap_width]
            self.lines.insert(self.cursor_line + 1, line[self.wrap_width :])
            self.cursor_line += 1
            self.cursor_col = 0

    def insert_newline(self) -> None:
        """Open an empty line below the current one; the current line is not split."""
        self.lines.insert(self.cursor_line + 1, "")
        self.cursor_line += 1
        self.cursor_col = 0
        self.modified = True

    def backspace(self) -> None:
        if self.cursor_col > 0:
            line = self.current_line
            self.lines[self.cursor_line] = line[: self.cursor_col - 1] + line[self.cursor_col :]
            self.cursor_col -= 1
            self.modified = True
            return
        if self.cursor_line == 0:
            return
        previous = self.lines[self.cursor_line - 1]
        self.cursor_col = len(previous)
        self.lines[self.cursor_line - 1] = previous + self.current_line
        del self.lines[self.cursor_line]
        self.cursor_line -= 1
        self.modified = True

    def delete_forward(self) -> None:
        line = self.current_line
        if self.cursor_col < len(line):
            self.lines[self.cursor_line] = line[: self.cursor_col] + line[self.cursor_col + 1 :]
            self.modified = True
            return
        if self.cursor_line + 1 >= len(self.lines):
            return
        self.lines[self.cursor_line] = line + self.lines[self.cursor_line + 1]
        del self.lines[self.cursor_line + 1]
        self.modified = True

    def save(
        self,
        write_lines: Callable[[Path, Sequence[str], str], OperationError | None] = fileops.write_lines,
    ) -> OperationError | None:
        """Write every line to ``source_path`` in the encoding it was read with.

        ``modified`` clears only on success.
        """
        error = write_lines(self.source_path, self.lines, self.encoding)
        if error is None:
            self.modified = False
        return error


def scroll_offsets(
    top_line: int,
    left_col: int,
    cursor_line: int,
    cursor_x: int,
    text_rows: int,
    columns: int,
) -> tuple[int, int]:
    """Return ``(top_line, left_col)`` adjusted so the cursor cell is on screen."""
    text_rows = max(1, text_rows)
    columns = max(1, columns)
    if cursor_line < top_line:
        top_line = cursor_line
    elif cursor_line >= top_line + text_rows:
        top_line = cursor_line - text_rows + 1
    if cursor_x < left_col:
        left_col = cursor_x
    elif cursor_x >= left_col + columns:
        left_col = cursor_x - columns + 1
    return max(0, top_line), max(0, left_col)


class EditorSession:
    """Interactive editing of one ``EditorBuffer`` until the user exits."""

    def __init__(
        self,
        buffer: EditorBuffer,
        screen: Screen,
        read_key: KeyReader,
        dialogs: Dialogs,
        write_lines: Callable[[Path, Sequence[str], str], OperationError | None] = fileops.write_lines,
    ) -> None:
        self.buffer = buffer
        self.screen = screen
        self.read_key = read_key
        self.dialogs = dialogs
        self.write_lines = write_lines
        self.top_line = 0
        self.left_col = 0
        self.message = ""
        self._keys = self._build_key_map()

    def _build_key_map(self) -> KeyMap:
        buf = self.buffer
        return KeyMap().bind_all((
            KeyBinding(("UP",), lambda: buf.move_vertical(-1)),
            KeyBinding(("DOWN",), lambda: buf.move_vertical(1)),
            KeyBinding(("LEFT",), lambda: buf.move_horizontal(-1)),
            KeyBinding(("RIGHT",), lambda: buf.move_horizontal(1)),
            KeyBinding(("HOME",), buf.move_to_line_start),
            KeyBinding(("END",), buf.move_to_line_end),
            KeyBinding(("ENTER",), buf.insert_newline),
            KeyBinding(("BACKSPACE",), buf.backspace),
            KeyBinding(("DELETE",), buf.delete_forward),
            KeyBinding(("F10", "CTRL_S"), self._save_key),
            KeyBinding(("ESC", "F11", "CTRL_Q"), self.request_exit),
        ))

    def _save_key(self) -> bool:
        self.save()
        return False

    def save(self) -> bool:
        error = self.buffer.save(self.write_lines)
        if error is not None:
            self.message = "Save failed."
            self.dialogs.show_error(error)
            return False
        logger.info("saved %s", self.buffer.source_path)
        self.message = "File saved."
        return True

    def request_exit(self) -> bool:
        """Return ``True`` when the session may end.

        Unsaved changes ask for save-and-exit or discard; cancelling that
        question keeps the session open.
        """
        if not self.buffer.modified:
            return True
        choice = self.dialogs.choose("Unsaved changes", str(self.buffer.source_path), EXIT_OPTIONS)
        if choice == 0:
            return self.save()
        if choice == 1:
            logger.info("discarded changes to %s", self.buffer.source_path)
            return True
        return False

    def handle_key(self, key: str) -> bool:
        """Apply one key; ``True`` means the session is over."""
        self.message = ""
        if self._keys.handles(key):
            return self._keys.dispatch(key)
        if is_printable_key(key):
            self.buffer.insert_char(key)
        return False

    def render(self) -> None:
        builder = self.screen.new_frame()
        buf = self.buffer
        cursor_x = display_width(sanitize_terminal_text(buf.current_line[: buf.cursor_col]))
        self.top_line, self.left_col = scroll_offsets(
            self.top_line,
            self.left_col,
            buf.cursor_line,
            cursor_x,
            builder.max_rows - EDITOR_CHROME_ROWS,
            builder.columns,
        )
        self.screen.present(
            render_editor(
                builder,
                buf.source_path,
                buf.lines,
                self.top_line,
                self.left_col,
                buf.cursor,
                modified=buf.modified,
                message=self.message,
            )
        )

    def run(self) -> None:
        while True:
            self.render()
            if self.handle_key(self.read_key()):
                return


def edit_file(
    path: Path,
    screen: Screen,
    read_key: KeyReader,
    dialogs: Dialogs,
    wrap_width: int = DEFAULT_WRAP_WIDTH,
) -> EditorBuffer:
    """Load ``path`` and edit it until exit; load errors start an empty buffer."""
    buffer, error = EditorBuffer.load(path, wrap_width)
    if error is not None:
        logger.warning("loading %s for edit failed: %s", path, error.detail)
        dialogs.show_error(error)
    EditorSession(buffer, screen, read_key, dialogs).run()
    return buffer


__all__ = ["EXIT_OPTIONS", "EditorBuffer", "EditorSession", "edit_file", "scroll_offsets"]
