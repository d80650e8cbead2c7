"""Tests for per-key session handling and the interactive loop.

The loop is driven with scripted key tokens and a fake terminal, so no tty is
needed.
"""

from __future__ import annotations

import contextlib
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from millercd.config import NavigatorConfig
from millercd.keymap import KeyMap
from millercd.navigation import MODE_SEARCH, Navigator
from millercd.session import KEEP_PATH, Change, Keep, handle_key, run_session
from millercd.theme import PLAIN_THEME


class FakeTerminal:
    def __init__(self, size: tuple[int, int] = (60, 10)) -> None:
        self.stdin_fd = 0
        self._size = size
        self.writes: list[str] = []
        self.events: list[str] = []

    def size(self) -> tuple[int, int]:
        return self._size

    def write(self, payload: str) -> None:
        self.writes.append(payload)

    def enable_tui_mode(self) -> None:
        self.events.append("enable")

    def disable_tui_mode(self) -> None:
        self.events.append("disable")

    @contextlib.contextmanager
    def raw_mode(self):
        self.enable_tui_mode()
        try:
            yield
        finally:
            self.disable_tui_mode()


def _scripted(keys: list[str]):
    pending = iter(keys)

    def read(_fd: int, _timeout_ms: int | None) -> str:
        return next(pending)

    return read


class SessionTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        for name in ("first", "second"):
            (self.root / name).mkdir()
        self.navigator = Navigator.from_directory(self.root)
        self.keymap = KeyMap()
        self.opened: list[Path] = []

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _open_editor(self, target: Path) -> str | None:
        self.opened.append(target)
        return None

    def _key(self, key: str):
        return handle_key(self.navigator, self.keymap, key, self._open_editor)


class HandleKeyTests(SessionTestCase):
    def test_commit_returns_working_directory(self) -> None:
        self.assertIsNone(self._key("l"))
        self.assertEqual(self._key("ENTER"), Change(self.root / "first"))

    def test_abort_keeps_directory(self) -> None:
        self.assertEqual(self._key("q"), Keep())
        self.assertEqual(Keep().path, KEEP_PATH)

    def test_search_focus_types_into_query(self) -> None:
        self._key("CTRL_S")
        self.assertTrue(self.keymap.search_input)
        self.assertIsNone(self._key("s"))
        self.assertIsNone(self._key("e"))
        self.assertEqual(self.navigator.search.query, "se")
        self.assertEqual(self.navigator.mode, MODE_SEARCH)

        self._key("INSERT")
        self.assertFalse(self.keymap.search_input)
        self.assertEqual(self._key("q"), Keep())
        self.assertEqual(self.navigator.search.query, "se")

    def test_navigation_error_is_logged_and_state_kept(self) -> None:
        self.navigator.current.unselect()
        before = self.navigator.view()

        with self.assertLogs("millercd.session", level="WARNING") as logs:
            self.assertIsNone(self._key("l"))

        self.assertEqual(self.navigator.view(), before)
        self.assertIn("invalid selection", logs.output[0])

    def test_editor_opens_working_directory(self) -> None:
        self.assertIsNone(self._key("V"))
        self.assertEqual(self.opened, [self.root])

    def test_editor_error_is_logged(self) -> None:
        with self.assertLogs("millercd.session", level="WARNING") as logs:
            handle_key(self.navigator, self.keymap, "V", lambda _target: "Failed to launch code: not found")
        self.assertIn("Failed to launch code", logs.output[0])

    def test_unmapped_key_is_ignored(self) -> None:
        before = self.navigator.view()
        self.assertIsNone(self._key("x"))
        self.assertEqual(self.navigator.view(), before)


class RunSessionTests(SessionTestCase):
    def test_loop_renders_and_commits(self) -> None:
        terminal = FakeTerminal()
        outcome = run_session(
            self.navigator,
            terminal,
            keymap=self.keymap,
            theme=PLAIN_THEME,
            read=_scripted(["", "j", "ENTER"]),
        )

        self.assertEqual(outcome, Change(self.root))
        self.assertEqual(len(terminal.writes), 2)
        self.assertIn("> second", terminal.writes[-1])
        self.assertEqual(terminal.events, ["enable", "disable"])

    def test_loop_aborts(self) -> None:
        terminal = FakeTerminal()
        outcome = run_session(self.navigator, terminal, theme=PLAIN_THEME, read=_scripted(["ESC"]))
        self.assertEqual(outcome, Keep())

    def test_key_log_written_when_enabled(self) -> None:
        self.navigator.config = NavigatorConfig(log=True)
        terminal = FakeTerminal()
        with mock.patch("millercd.session.log_key_event") as log_mock:
            run_session(self.navigator, terminal, theme=PLAIN_THEME, read=_scripted(["j", "q"]))

        self.assertEqual([call.args[1] for call in log_mock.call_args_list], ["j", "q"])

    def test_key_log_skipped_when_disabled(self) -> None:
        terminal = FakeTerminal()
        with mock.patch("millercd.session.log_key_event") as log_mock:
            run_session(self.navigator, terminal, theme=PLAIN_THEME, read=_scripted(["q"]))
        log_mock.assert_not_called()


if __name__ == "__main__":
    unittest.main()
