"""Terminal control helpers for the navigation session.

Owns the raw-mode lifecycle, alternate-screen switching, and frame output.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

ENTER_TUI = b"\x1b[?1049h\x1b[?25l"
LEAVE_TUI = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage terminal mode transitions for one session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, ENTER_TUI)

    def disable_tui_mode(self) -> None:
        os.write(self.stdout_fd, LEAVE_TUI)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, lines)``, falling back to 80x24."""
        term = shutil.get_terminal_size((80, 24))
        return term.columns, term.lines

    def write(self, payload: str) -> None:
        os.write(self.stdout_fd, payload.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
