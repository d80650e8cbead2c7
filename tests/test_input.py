"""Regression tests for raw-key decoding.

Covers ESC timing, cursor and editing sequences, and control-key tokens.
"""

import os
import time
import unittest

from millercd import input as input_mod


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_all(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D", 4), ["UP", "DOWN", "RIGHT", "LEFT"])

    def test_application_mode_arrows(self) -> None:
        self.assertEqual(self._read_all(b"\x1bOA\x1bOH", 2), ["UP", "HOME"])

    def test_tilde_sequences(self) -> None:
        keys = self._read_all(b"\x1b[2~\x1b[3~\x1b[5~\x1b[6~\x1b[1~\x1b[4~", 6)
        self.assertEqual(keys, ["INSERT", "DELETE", "PAGE_UP", "PAGE_DOWN", "HOME", "END"])

    def test_modified_arrow_maps_to_plain_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[1;5A", 1), ["UP"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1ba", 2), ["ESC", "a"])

    def test_control_keys(self) -> None:
        keys = self._read_all(b"\x03\x13\r\x7f\t", 5)
        self.assertEqual(keys, ["CTRL_C", "CTRL_S", "ENTER", "BACKSPACE", "TAB"])

    def test_utf8_character(self) -> None:
        self.assertEqual(self._read_all("é".encode("utf-8"), 1), ["é"])

    def test_timeout_returns_empty_string(self) -> None:
        self.assertEqual(self._read_all(b"", 1), [""])


if __name__ == "__main__":
    unittest.main()
