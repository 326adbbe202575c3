"""Raw-key decoding tests.

Bytes are pushed through a pipe so ``read_key`` sees exactly what a terminal
in raw mode would deliver.
"""

import os
import unittest

from cliui import input as input_mod


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

    def test_arrow_and_navigation_sequences(self) -> None:
        payload = b"\x1b[A\x1b[B\x1b[C\x1b[D\x1b[H\x1b[F\x1b[5~\x1b[6~\x1b[3~"
        self.assertEqual(
            self._read_all(payload, 9),
            ["UP", "DOWN", "RIGHT", "LEFT", "HOME", "END", "PAGE_UP", "PAGE_DOWN", "DELETE"],
        )

    def test_function_keys(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[21~\x1b[23~\x1bOP", 3), ["F10", "F11", "F1"])

    def test_modified_arrow(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[1;5A\x1b[1;2D", 2), ["CTRL_UP", "SHIFT_LEFT"])

    def test_control_bytes(self) -> None:
        self.assertEqual(
            self._read_all(b"\r\x7f\x08\x13\x11\x0b", 6),
            ["ENTER", "BACKSPACE", "BACKSPACE", "CTRL_S", "CTRL_Q", "CTRL_K"],
        )

    def test_escape_with_printable_byte_is_alt_combo(self) -> None:
        self.assertEqual(self._read_all(b"\x1bqx", 2), ["ALT_q", "x"])

    def test_escape_does_not_swallow_following_control_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1b\r\x1b\x1b", 3), ["ESC", "ENTER", "ESC"])

    def test_f5_to_f9_and_shift_tab(self) -> None:
        payload = b"\x1b[15~\x1b[17~\x1b[18~\x1b[19~\x1b[20~\x1b[Z"
        self.assertEqual(self._read_all(payload, 6), ["F5", "F6", "F7", "F8", "F9", "SHIFT_TAB"])

    def test_unnamed_sequences_are_unknown_not_escape(self) -> None:
        payload = b"\x1b[99~\x1b[1;5Q\x1b[200x\x1bOz"
        self.assertEqual(self._read_all(payload, 4), ["UNKNOWN"] * 4)

    def test_unnamed_final_byte_does_not_consume_next_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[Ma", 2), ["UNKNOWN", "a"])

    def test_lone_escape(self) -> None:
        self.assertEqual(self._read_all(b"\x1b", 1), ["ESC"])

    def test_multibyte_utf8_is_one_key(self) -> None:
        self.assertEqual(self._read_all("é€".encode("utf-8"), 2), ["é", "€"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(self._read_all(b"", 1), [""])

    def test_end_of_input_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        try:
            self.assertEqual(input_mod.read_key(read_fd), "")
        finally:
            os.close(read_fd)

    def test_is_printable_key(self) -> None:
        self.assertTrue(input_mod.is_printable_key("a"))
        self.assertTrue(input_mod.is_printable_key(" "))
        self.assertFalse(input_mod.is_printable_key("UP"))
        self.assertFalse(input_mod.is_printable_key("\t"))


if __name__ == "__main__":
    unittest.main()
