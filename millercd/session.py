"""Interactive session loop.

Reads keys, maps them to actions, applies them to the navigator, and redraws
after every handled key or terminal resize. The loop ends with a ``Change``
(directory chosen) or ``Keep`` (aborted) outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from . import actions
from .actions import apply_action
from .editor import launch_editor
from .errors import MillercdError
from .input import read_key
from .keymap import KeyMap
from .log import log_key_event
from .navigation import Navigator
from .render import build_frame, render_frame
from .terminal import TerminalController
from .theme import UITheme, resolve_theme

logger = logging.getLogger(__name__)

KEY_POLL_MS = 100
KEEP_PATH = Path(".")


@dataclass(frozen=True)
class Change:
    """Session committed: the shell should move to ``path``."""

    path: Path


@dataclass(frozen=True)
class Keep:
    """Session aborted: the shell stays where it is."""

    path: Path = KEEP_PATH


Outcome = Change | Keep


def handle_key(
    navigator: Navigator,
    keymap: KeyMap,
    key: str,
    open_editor: Callable[[Path], str | None],
) -> Outcome | None:
    """Process one key token; return an outcome when the session should end.

    Navigation errors are logged and leave the navigator unchanged.
    """
    action = keymap.action_for_key(key)
    if action is None:
        return None
    if action.name == actions.ABORT:
        return Keep()
    if action.name == actions.COMMIT:
        return Change(navigator.working_directory)
    if action.name == actions.TOGGLE_SEARCH_MODE:
        keymap.toggle_search_input()
        return None
    if action.name == actions.OPEN_EDITOR:
        error = open_editor(navigator.working_directory)
        if error:
            logger.warning("%s", error)
        return None

    try:
        apply_action(navigator, action)
    except MillercdError as exc:
        logger.warning("%s failed: %s", action.name, exc)
    return None


def run_session(
    navigator: Navigator,
    terminal: TerminalController,
    *,
    keymap: KeyMap | None = None,
    theme: UITheme | None = None,
    read: Callable[[int, int | None], str] = read_key,
) -> Outcome:
    """Drive the navigator from terminal input until commit or abort."""
    keymap = keymap if keymap is not None else KeyMap()
    theme = theme if theme is not None else resolve_theme(no_color=navigator.config.no_color)

    def open_editor(target: Path) -> str | None:
        return launch_editor(target, terminal.disable_tui_mode, terminal.enable_tui_mode)

    dirty = True
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while True:
            size = terminal.size()
            if size != last_size:
                last_size = size
                dirty = True
            if dirty:
                columns, lines = size
                render_frame(build_frame(navigator.view(), columns, lines, navigator.config, theme), terminal.write)
                dirty = False

            key = read(terminal.stdin_fd, KEY_POLL_MS)
            if not key:
                continue
            if navigator.config.log:
                log_key_event(navigator, key)
            outcome = handle_key(navigator, keymap, key, open_editor)
            if outcome is not None:
                return outcome
            dirty = True
