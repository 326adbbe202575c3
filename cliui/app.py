"""Top-level interactive loop and session wiring.

The loop re-lists and redraws only when the navigator asks for it, reads one
key, and dispatches it. Any exception that escapes a handler is logged,
shown, and answered by returning to the virtual root.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from .actions import FileActionDispatcher
from .config import Settings
from .errors import ErrorKind, OperationError
from .input import read_key
from .locations import PathLocation
from .menu import Dialogs, KeyReader, MenuPrompt, TextPrompt
from .navigation import Navigator
from .render import browser_page_size, render_browser
from .screen import Screen
from .terminal import TerminalController
from .theme import resolve_theme

logger = logging.getLogger(__name__)


def blocking_key_reader(stdin_fd: int) -> KeyReader:
    """Return a reader that blocks for one key and raises ``EOFError`` at end of input."""

    def read() -> str:
        key = read_key(stdin_fd)
        if not key:
            raise EOFError("terminal input closed")
        return key

    return read


def unexpected_error(exc: Exception) -> OperationError:
    return OperationError(ErrorKind.IO_FAILURE, f"Unexpected error: {exc.__class__.__name__}: {exc}")


def draw_browser(navigator: Navigator, screen: Screen) -> None:
    screen.present(
        render_browser(
            screen.new_frame(),
            navigator.title,
            navigator.page,
            navigator.state.selection_index,
            show_hidden=navigator.show_hidden,
        )
    )


def run_main_loop(
    navigator: Navigator,
    screen: Screen,
    read: KeyReader,
    dialogs: Dialogs,
    configured_page_size: int,
) -> None:
    """Run until the navigator reports a confirmed quit.

    ``EOFError`` from the key reader ends the loop as well.
    """
    while True:
        try:
            _columns, rows = screen.size()
            navigator.page_size = browser_page_size(configured_page_size, rows)
            if navigator.state.needs_refresh:
                navigator.refresh()
                draw_browser(navigator, screen)
            if navigator.handle_key(read()):
                logger.info("quit requested")
                return
        except EOFError:
            raise
        except Exception as exc:
            logger.exception("unhandled error at %s", navigator.state.location)
            navigator.reset_to_root()
            dialogs.show_error(unexpected_error(exc))


def run_browser(settings: Settings, start: Path | None = None) -> None:
    """Take over the terminal and browse until the user quits."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    screen = Screen(stdout_fd, resolve_theme(settings.theme, no_color=settings.no_color))
    read = blocking_key_reader(stdin_fd)
    dialogs = Dialogs(MenuPrompt(screen, read), TextPrompt(screen, read))
    navigator = Navigator(
        dialogs,
        page_size=settings.page_size,
        open_file=FileActionDispatcher(screen, read, dialogs, wrap_width=settings.wrap_width),
        show_hidden=settings.show_hidden,
    )
    if start is not None:
        navigator.jump_to(PathLocation(start))

    logger.info("session started at %s", navigator.state.location)
    with terminal.raw_mode():
        try:
            run_main_loop(navigator, screen, read, dialogs, settings.page_size)
        except EOFError:
            logger.info("input closed, leaving")
        except KeyboardInterrupt:
            logger.info("interrupted, leaving")


__all__ = ["blocking_key_reader", "draw_browser", "run_browser", "run_main_loop", "unexpected_error"]
