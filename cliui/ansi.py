"""Display-width measurement and line shaping for plain terminal text.

Wide East Asian characters take two cells, combining marks none, and tabs
advance to the next 8-column stop. Control bytes are escaped before output.
"""

from __future__ import annotations

import re
import unicodedata

TAB_STOP = 8
_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def sanitize_terminal_text(source: str) -> str:
    """Escape control bytes so file names and contents cannot move the cursor."""
    if _CONTROL_RE.search(source) is None:
        return source
    out: list[str] = []
    for ch in source:
        code = ord(ch)
        # C0 controls + DEL + C1 controls; tabs are kept for width expansion.
        if (code < 32 and ch != "\t") or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def slice_text(text: str, start_cols: int, max_cols: int) -> str:
    """Return the part of ``text`` visible in columns ``[start_cols, start_cols + max_cols)``.

    Tabs are expanded to spaces; a wide character straddling either edge is
    dropped rather than split.
    """
    if max_cols <= 0 or not text:
        return ""
    start_cols = max(0, start_cols)
    out: list[str] = []
    col = 0
    shown = 0
    for ch in text:
        if shown >= max_cols:
            break
        w = char_display_width(ch, col)
        if col < start_cols:
            if ch == "\t" and col + w > start_cols:
                visible = min(col + w - start_cols, max_cols - shown)
                out.append(" " * visible)
                shown += visible
            col += w
            continue
        if ch == "\t":
            visible = min(w, max_cols - shown)
            out.append(" " * visible)
            shown += visible
            col += w
            continue
        if shown + w > max_cols:
            break
        out.append(ch)
        shown += w
        col += w
    return "".join(out)


def clip_text(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns."""
    return slice_text(text, 0, max_cols)


def pad_text(text: str, width: int) -> str:
    """Clip then right-pad with spaces to exactly ``width`` columns."""
    clipped = clip_text(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


__all__ = [
    "TAB_STOP",
    "char_display_width",
    "clip_text",
    "display_width",
    "pad_text",
    "sanitize_terminal_text",
    "slice_text",
]
