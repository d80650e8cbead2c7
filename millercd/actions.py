"""Classified navigation actions and their dispatch onto a ``Navigator``.

Actions are produced by the key map and consumed here one at a time. Session
level actions (commit, abort, focus toggle, editor) are left to the caller.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .navigation import Navigator

NEXT = "next"
PREVIOUS = "previous"
HOME = "home"
END = "end"
PAGE_UP = "page_up"
PAGE_DOWN = "page_down"
DESCEND = "descend"
ASCEND = "ascend"
APPEND_SEARCH_CHAR = "append_search_char"
BACKSPACE_SEARCH = "backspace_search"
CLEAR_SEARCH = "clear_search"
TOGGLE_SEARCH_MODE = "toggle_search_mode"
COMMIT = "commit"
ABORT = "abort"
OPEN_EDITOR = "open_editor"


@dataclass(frozen=True)
class Action:
    """One navigation request; ``char`` is only used by ``append_search_char``."""

    name: str
    char: str = ""


_NAVIGATOR_OPS: dict[str, Callable[[Navigator], None]] = {
    NEXT: Navigator.move_next,
    PREVIOUS: Navigator.move_previous,
    HOME: Navigator.move_home,
    END: Navigator.move_end,
    PAGE_UP: Navigator.move_page_up,
    PAGE_DOWN: Navigator.move_page_down,
    DESCEND: Navigator.move_child,
    ASCEND: Navigator.move_parent,
    BACKSPACE_SEARCH: Navigator.backspace_search,
    CLEAR_SEARCH: Navigator.clear_search,
}


def apply_action(navigator: Navigator, action: Action) -> bool:
    """Apply a navigation action and return whether it was one.

    Session actions and unknown names return ``False`` without touching the
    navigator. Errors from the transition propagate to the caller.
    """
    if action.name == APPEND_SEARCH_CHAR:
        if not action.char:
            return False
        navigator.append_search_char(action.char)
        return True
    op = _NAVIGATOR_OPS.get(action.name)
    if op is None:
        return False
    op(navigator)
    return True
