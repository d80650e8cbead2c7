"""Open the working directory in an external editor.

The command is taken from ``$VISUAL`` then ``$EDITOR``; with neither set the
directory is handed to ``code``. Failures come back as a message string so the
session keeps running.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Callable, Mapping
from pathlib import Path

EDITOR_VARIABLES = ("VISUAL", "EDITOR")
DEFAULT_EDITOR = "code"


def editor_command(target: Path, environ: Mapping[str, str] | None = None) -> list[str]:
    """Build the argv that opens ``target``.

    Raises ``ValueError`` when a variable holds unbalanced quotes.
    """
    if environ is None:
        environ = os.environ
    for name in EDITOR_VARIABLES:
        words = shlex.split(environ.get(name, ""))
        if words:
            return [*words, str(target)]
    return [DEFAULT_EDITOR, str(target)]


def launch_editor(
    target: Path,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
    environ: Mapping[str, str] | None = None,
) -> str | None:
    try:
        command = editor_command(target, environ)
    except ValueError as exc:
        return f"Cannot parse editor command: {exc}"

    disable_tui_mode()
    try:
        subprocess.run(command, check=False)
    except OSError as exc:
        return f"Failed to launch {command[0]}: {exc}"
    finally:
        enable_tui_mode()
    return None
