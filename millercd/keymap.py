"""Key-token to action mapping for navigation and search-input focus.

Whether printable keys type into the search box is an input-layer flag kept
here. It is separate from the navigator's mode, which is derived solely from
the query text.
"""

from __future__ import annotations

from dataclasses import dataclass

from . import actions
from .actions import Action


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action."""

    combos: tuple[str, ...]
    action: Action


class KeyComboRegistry:
    """Small key-dispatch table from key tokens to actions."""

    def __init__(self) -> None:
        self._actions: dict[str, Action] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing actions for same combos."""
        for combo in binding.combos:
            self._actions[combo] = binding.action
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def lookup(self, key: str) -> Action | None:
        return self._actions.get(key)


def _bind(action_name: str, *combos: str) -> KeyComboBinding:
    return KeyComboBinding(combos=combos, action=Action(action_name))


NORMAL_BINDINGS: tuple[KeyComboBinding, ...] = (
    _bind(actions.ABORT, "CTRL_C", "q", "ESC"),
    _bind(actions.COMMIT, "c", ";", "ENTER"),
    _bind(actions.HOME, "HOME"),
    _bind(actions.END, "END"),
    _bind(actions.PAGE_UP, "PAGE_UP"),
    _bind(actions.PAGE_DOWN, "PAGE_DOWN"),
    _bind(actions.NEXT, "j", "DOWN"),
    _bind(actions.PREVIOUS, "k", "UP"),
    _bind(actions.ASCEND, "h", "LEFT"),
    _bind(actions.DESCEND, "l", "RIGHT"),
    _bind(actions.TOGGLE_SEARCH_MODE, "CTRL_S", "INSERT"),
    _bind(actions.BACKSPACE_SEARCH, "BACKSPACE"),
    _bind(actions.CLEAR_SEARCH, "DELETE"),
    _bind(actions.OPEN_EDITOR, "V"),
)

SEARCH_INPUT_BINDINGS: tuple[KeyComboBinding, ...] = (
    _bind(actions.ABORT, "CTRL_C", "ESC"),
    _bind(actions.COMMIT, "ENTER"),
    _bind(actions.TOGGLE_SEARCH_MODE, "CTRL_S", "INSERT"),
    _bind(actions.BACKSPACE_SEARCH, "BACKSPACE"),
    _bind(actions.CLEAR_SEARCH, "DELETE"),
    _bind(actions.HOME, "HOME"),
    _bind(actions.END, "END"),
    _bind(actions.PAGE_UP, "PAGE_UP"),
    _bind(actions.PAGE_DOWN, "PAGE_DOWN"),
    _bind(actions.NEXT, "DOWN"),
    _bind(actions.PREVIOUS, "UP"),
    _bind(actions.ASCEND, "LEFT"),
    _bind(actions.DESCEND, "RIGHT"),
)


def _is_typed_character(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class KeyMap:
    """Translate key tokens into actions, tracking search-input focus."""

    def __init__(self) -> None:
        self.search_input = False
        self._normal = KeyComboRegistry().register_bindings(*NORMAL_BINDINGS)
        self._search_input = KeyComboRegistry().register_bindings(*SEARCH_INPUT_BINDINGS)

    def action_for_key(self, key: str) -> Action | None:
        """Return the action bound to ``key``; ``None`` for unmapped keys.

        With search-input focus on, unbound printable characters become
        ``append_search_char`` actions.
        """
        if not key:
            return None
        if not self.search_input:
            return self._normal.lookup(key)
        action = self._search_input.lookup(key)
        if action is not None:
            return action
        if _is_typed_character(key):
            return Action(actions.APPEND_SEARCH_CHAR, char=key)
        return None

    def toggle_search_input(self) -> None:
        self.search_input = not self.search_input
