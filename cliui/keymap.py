"""Key tokens to actions for the browser and the editor.

Tokens are the strings produced by ``cliui.input.read_key``: named keys such
as ``"UP"`` or ``"CTRL_S"`` and single characters for printable keys. An
action returns ``True`` to end its screen (quit the browser, leave the
editor); any other result keeps it running.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

Action = Callable[[], bool | None]


@dataclass(frozen=True)
class KeyBinding:
    """Every token in ``keys`` runs ``action``."""

    keys: tuple[str, ...]
    action: Action


class KeyMap:
    """Dispatch table for one screen.

    With ``fold_case`` a letter binding answers to both cases, so the browser
    accepts ``Q`` as well as ``q``. Named keys always match exactly. Binding a
    token twice is a mistake in the table and raises ``ValueError``.
    """

    def __init__(self, fold_case: bool = False) -> None:
        self.fold_case = fold_case
        self._actions: dict[str, Action] = {}

    def _token(self, key: str) -> str:
        if self.fold_case and len(key) == 1:
            return key.lower()
        return key

    def bind(self, binding: KeyBinding) -> KeyMap:
        for key in binding.keys:
            token = self._token(key)
            if token in self._actions:
                raise ValueError(f"key {key!r} is already bound")
            self._actions[token] = binding.action
        return self

    def bind_all(self, bindings: Iterable[KeyBinding]) -> KeyMap:
        for binding in bindings:
            self.bind(binding)
        return self

    def handles(self, key: str) -> bool:
        return self._token(key) in self._actions

    def bound_keys(self) -> list[str]:
        return sorted(self._actions)

    def dispatch(self, key: str) -> bool:
        """Run the action bound to ``key``; ``True`` only when it asks to end the screen.

        Unbound tokens, including ``"UNKNOWN"`` escape sequences, do nothing.
        """
        action = self._actions.get(self._token(key))
        if action is None:
            return False
        return action() is True


__all__ = ["Action", "KeyBinding", "KeyMap"]
