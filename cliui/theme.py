"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the browser, menus and editor chrome.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    title: str
    divider: str
    selected: str
    directory: str
    file: str
    virtual: str
    hint: str
    status: str
    error_title: str
    menu_border: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    title="\033[1;38;5;81m",
    divider="\033[2m",
    selected="\033[30;47m",
    directory="\033[1;34m",
    file="\033[38;5;252m",
    virtual="\033[38;5;44m",
    hint="\033[2;38;5;250m",
    status="\033[7m",
    error_title="\033[1;38;5;203m",
    menu_border="\033[38;5;45m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    divider="\033[2;38;5;31m",
    selected="\033[30;48;5;117m",
    directory="\033[1;38;5;45m",
    file="\033[38;5;252m",
    virtual="\033[38;5;39m",
    hint="\033[2;38;5;110m",
    status="\033[7m",
    error_title="\033[1;38;5;209m",
    menu_border="\033[38;5;39m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    title="",
    divider="",
    selected="\033[7m",
    directory="",
    file="",
    virtual="",
    hint="",
    status="\033[7m",
    error_title="",
    menu_border="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
