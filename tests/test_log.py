"""Tests for the optional per-session key log."""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from millercd.errors import LogSetupError
from millercd.log import LOG_SEPARATOR, close_logging, init_logging, log_key_event
from millercd.navigation import Navigator


class InitLoggingTests(unittest.TestCase):
    def test_file_is_created_and_truncated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "logs" / "millercd.log"
            handler = init_logging(path)
            try:
                logging.getLogger("millercd.test").info("first session")
            finally:
                close_logging(handler)
            self.assertIn("first session", path.read_text(encoding="utf-8"))

            handler = init_logging(path)
            close_logging(handler)
            self.assertEqual(path.read_text(encoding="utf-8"), "")

    def test_unwritable_location_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")
            with self.assertRaises(LogSetupError):
                init_logging(blocker / "millercd.log")

    def test_close_detaches_handler(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            handler = init_logging(Path(tmp) / "millercd.log")
            close_logging(handler)
        self.assertNotIn(handler, logging.getLogger("millercd").handlers)


class LogKeyEventTests(unittest.TestCase):
    def test_records_state_for_key(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "sub").mkdir()
            navigator = Navigator.from_directory(root)

            with self.assertLogs("millercd.log", level="INFO") as logs:
                log_key_event(navigator, "j")

        messages = [record.getMessage() for record in logs.records]
        self.assertEqual(messages[0], LOG_SEPARATOR)
        self.assertIn(f"path: {root}", messages)
        self.assertIn("selected: 0", messages)
        self.assertIn("key: j", messages)
        self.assertIn("mode: normal", messages)
        self.assertIn("search: ''", messages)


if __name__ == "__main__":
    unittest.main()
