"""Modal menu and single-line prompt, plus the ``Dialogs`` facade.

``MenuPrompt.show`` returns the chosen option index, or ``None`` when the user
cancels with Escape. Keys other than Up, Down, Enter and Escape are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .errors import OperationError
from .input import is_printable_key
from .render import render_menu, render_text_prompt
from .screen import Screen

logger = logging.getLogger(__name__)

KeyReader = Callable[[], str]

OK_OPTIONS: tuple[str, ...] = ("OK",)


@dataclass
class MenuState:
    """Highlighted option of an open menu."""

    option_count: int
    selected: int = 0

    def handle_key(self, key: str) -> tuple[bool, int | None]:
        """Apply one key; return ``(finished, result)``."""
        if key == "UP":
            self.selected = max(0, self.selected - 1)
        elif key == "DOWN":
            self.selected = min(self.option_count - 1, self.selected + 1)
        elif key == "ENTER":
            return True, self.selected
        elif key == "ESC":
            return True, None
        return False, None


@dataclass
class TextPromptState:
    """Text collected so far by a single-line prompt."""

    text: str = ""

    def handle_key(self, key: str) -> tuple[bool, str | None]:
        if key == "ENTER":
            return True, self.text
        if key == "ESC":
            return True, None
        if key == "BACKSPACE":
            self.text = self.text[:-1]
        elif key == "CTRL_U":
            self.text = ""
        elif is_printable_key(key):
            self.text += key
        return False, None


class MenuPrompt:
    """Render a titled option list and block until a choice or cancel."""

    def __init__(self, screen: Screen, read_key: KeyReader) -> None:
        self.screen = screen
        self.read_key = read_key

    def show(self, title: str, body: str, options: Sequence[str], *, is_error: bool = False) -> int | None:
        if not options:
            raise ValueError("menu needs at least one option")
        state = MenuState(option_count=len(options))
        while True:
            self.screen.present(render_menu(self.screen.new_frame(), title, body, options, state.selected, is_error=is_error))
            finished, result = state.handle_key(self.read_key())
            if finished:
                return result


class TextPrompt:
    """Collect one line of text; ``None`` when cancelled."""

    def __init__(self, screen: Screen, read_key: KeyReader) -> None:
        self.screen = screen
        self.read_key = read_key

    def ask(self, title: str, prompt: str) -> str | None:
        state = TextPromptState()
        while True:
            self.screen.present(render_text_prompt(self.screen.new_frame(), title, prompt, state.text))
            finished, result = state.handle_key(self.read_key())
            if finished:
                return result


class Dialogs:
    """Confirmation, message, error and text-entry dialogs built on the prompts."""

    def __init__(self, menu: MenuPrompt, text_prompt: TextPrompt) -> None:
        self.menu = menu
        self.text_prompt = text_prompt

    def choose(self, title: str, body: str, options: Sequence[str]) -> int | None:
        return self.menu.show(title, body, options)

    def confirm(self, title: str, body: str = "", yes: str = "Yes", no: str = "No") -> bool:
        return self.menu.show(title, body, (yes, no)) == 0

    def show_message(self, title: str, body: str) -> None:
        self.menu.show(title, body, OK_OPTIONS)

    def show_error(self, error: OperationError) -> None:
        logger.info("showing error: %s %s", error.title, error.describe())
        self.menu.show(f"Error: {error.title}", error.describe(), OK_OPTIONS, is_error=True)

    def ask_text(self, title: str, prompt: str) -> str | None:
        return self.text_prompt.ask(title, prompt)


__all__ = [
    "Dialogs",
    "KeyReader",
    "MenuPrompt",
    "MenuState",
    "OK_OPTIONS",
    "TextPrompt",
    "TextPromptState",
]
