"""Frame builders for the browser, menus, prompts and the editor.

Everything here is presentation-only: functions take state values and a
``FrameBuilder`` and return the finished ``Frame`` without touching a terminal.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .ansi import display_width, sanitize_terminal_text, slice_text
from .listing import Entry, EntryKind
from .pager import PageView
from .screen import Frame, FrameBuilder

DIVIDER_WIDTH = 36

BROWSER_HINT_LINES: tuple[str, ...] = (
    "Up/Down select  Enter/Space open  a/Backspace up  d enter dir  Left/Right or 1-9 page",
    "x/Del delete  n new file  m new dir  . hidden  p This PC  Esc Desktop  q quit",
)
# title + divider + divider + page line + hints
BROWSER_CHROME_ROWS = 4 + len(BROWSER_HINT_LINES)

MENU_HINT = "Up/Down choose  Enter confirm  Esc cancel"
PROMPT_HINT = "Enter confirm  Esc cancel"
EDITOR_HINT = "F10/Ctrl+S save  Esc/F11/Ctrl+Q exit"
# header + divider + status + hint
EDITOR_CHROME_ROWS = 4


def _divider(builder: FrameBuilder) -> None:
    builder.write_line("=" * min(builder.columns, DIVIDER_WIDTH), builder.theme.divider)


def _entry_style(builder: FrameBuilder, entry: Entry) -> str:
    theme = builder.theme
    if entry.kind is EntryKind.FILE:
        return theme.file
    if entry.kind is EntryKind.VIRTUAL:
        return theme.virtual
    return theme.directory


def browser_page_size(configured: int, terminal_rows: int) -> int:
    """Bound the configured page size by what fits between the chrome rows."""
    return max(1, min(configured, terminal_rows - BROWSER_CHROME_ROWS))


def render_browser(
    builder: FrameBuilder,
    title: str,
    page: PageView[Entry],
    selection_index: int,
    *,
    show_hidden: bool = False,
) -> Frame:
    theme = builder.theme
    builder.write_line(title, theme.title)
    _divider(builder)
    if page.is_empty:
        builder.write_line("(empty)", theme.hint)
    for idx, entry in enumerate(page.items):
        if idx == selection_index:
            builder.highlight_line(entry.display_label)
        else:
            builder.write_line(entry.display_label, _entry_style(builder, entry))
    _divider(builder)
    shown_page = page.page_index + 1 if page.page_count else 0
    hidden_note = "  [hidden shown]" if show_hidden else ""
    builder.write_line(f"Page: {shown_page}/{page.page_count}{hidden_note}")
    for line in BROWSER_HINT_LINES:
        builder.write_line(line, theme.hint)
    return builder.build()


def menu_body_rows(builder: FrameBuilder, option_count: int) -> int:
    """Rows left for body text once title, dividers, options and hint are placed."""
    return max(0, builder.max_rows - option_count - 4)


def render_menu(
    builder: FrameBuilder,
    title: str,
    body: str,
    options: Sequence[str],
    selected: int,
    *,
    is_error: bool = False,
) -> Frame:
    theme = builder.theme
    builder.write_line(title, theme.error_title if is_error else theme.title)
    _divider(builder)
    body_lines = body.splitlines() if body else []
    room = menu_body_rows(builder, len(options))
    if len(body_lines) > room:
        hidden = len(body_lines) - room + 1
        body_lines = body_lines[: room - 1] + [f"... ({hidden} more lines)"] if room > 0 else []
    for line in body_lines:
        builder.write_line(line)
    _divider(builder)
    for idx, option in enumerate(options):
        if idx == selected:
            builder.highlight_line(f"> {option}")
        else:
            builder.write_line(f"  {option}")
    builder.write_line(MENU_HINT, theme.hint)
    return builder.build()


def render_text_prompt(builder: FrameBuilder, title: str, prompt: str, text: str) -> Frame:
    theme = builder.theme
    builder.write_line(title, theme.title)
    _divider(builder)
    builder.write_line(prompt)
    input_row = builder.row_count
    visible = sanitize_terminal_text(text)
    width = max(1, builder.columns - 3)
    overflow = max(0, display_width(visible) - width)
    builder.write_line("> " + slice_text(visible, overflow, width))
    builder.write_line(PROMPT_HINT, theme.hint)
    builder.set_cursor(input_row, 2 + min(display_width(visible), width))
    return builder.build()


def render_editor(
    builder: FrameBuilder,
    path: Path,
    lines: Sequence[str],
    top_line: int,
    left_col: int,
    cursor: tuple[int, int],
    *,
    modified: bool,
    message: str = "",
) -> Frame:
    """Draw the visible slice of the buffer; ``cursor`` is ``(line, col)`` in buffer terms."""
    theme = builder.theme
    marker = " [modified]" if modified else ""
    builder.write_line(f"Editing: {path}{marker}", theme.title)
    _divider(builder)
    text_rows = max(1, builder.max_rows - EDITOR_CHROME_ROWS)
    for line in lines[top_line : top_line + text_rows]:
        builder.write_line(slice_text(sanitize_terminal_text(line), left_col, builder.columns))
    while builder.remaining_rows > 2:
        builder.write_line("~", theme.hint)
    cursor_line, cursor_col = cursor
    status = f"Ln {cursor_line + 1}, Col {cursor_col + 1}  {len(lines)} lines"
    if message:
        status = f"{status}  | {message}"
    builder.write_line(status, theme.status)
    builder.write_line(EDITOR_HINT, theme.hint)

    cursor_x = display_width(sanitize_terminal_text(lines[cursor_line][:cursor_col])) - left_col
    builder.set_cursor(2 + cursor_line - top_line, cursor_x)
    return builder.build()


__all__ = [
    "BROWSER_CHROME_ROWS",
    "EDITOR_CHROME_ROWS",
    "browser_page_size",
    "menu_body_rows",
    "render_browser",
    "render_editor",
    "render_menu",
    "render_text_prompt",
]
