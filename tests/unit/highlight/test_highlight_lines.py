"""Tests for control-byte sanitization and per-line preview colouring.

Colouring must never change the number of preview rows, because the split
layout pairs preview rows with list rows one to one.
"""

import re
import unittest
from pathlib import Path
from unittest import mock

from fuzzyfiler.highlight import colorize_preview_lines, sanitize_terminal_text

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


class SanitizeTests(unittest.TestCase):
    def test_escapes_control_bytes_but_keeps_common_whitespace(self) -> None:
        source = "a\tb\nc\rd\x07e\x1bf"
        sanitized = sanitize_terminal_text(source)

        self.assertEqual(sanitized, "a\tb\nc\rd\\x07e\\x1bf")
        self.assertNotIn("\x1b", sanitized)

    def test_plain_text_is_returned_unchanged(self) -> None:
        self.assertEqual(sanitize_terminal_text("héllo wörld"), "héllo wörld")


class ColorizeTests(unittest.TestCase):
    def test_python_source_gains_colour_without_changing_text(self) -> None:
        lines = ["def main():", "    return 42", "", "# done"]

        colored = colorize_preview_lines(lines, Path("main.py"))

        self.assertEqual(len(colored), len(lines))
        self.assertTrue(any("\x1b[" in line for line in colored))
        self.assertEqual([ANSI_RE.sub("", line) for line in colored], lines)

    def test_unknown_extension_keeps_row_count(self) -> None:
        lines = ["Permission  is  hereby granted", "", "free of charge"]

        colored = colorize_preview_lines(lines, Path("LICENSE"))

        self.assertEqual([ANSI_RE.sub("", line) for line in colored], lines)

    def test_unknown_style_falls_back(self) -> None:
        lines = ["x = 1"]

        colored = colorize_preview_lines(lines, Path("a.py"), style="no-such-style")

        self.assertEqual([ANSI_RE.sub("", line) for line in colored], lines)

    def test_misaligned_output_returns_plain_lines(self) -> None:
        lines = ["one", "two"]

        with mock.patch("fuzzyfiler.highlight.pygments_highlight", return_value="one\nextra\ntwo\n"):
            self.assertEqual(colorize_preview_lines(lines, Path("a.py")), lines)

    def test_leading_blank_rows_are_kept(self) -> None:
        lines = ["", "", "import os"]

        colored = colorize_preview_lines(lines, Path("a.py"))

        self.assertEqual([ANSI_RE.sub("", line) for line in colored], lines)

    def test_empty_input(self) -> None:
        self.assertEqual(colorize_preview_lines([], Path("a.py")), [])


if __name__ == "__main__":
    unittest.main()
