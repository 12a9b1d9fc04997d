"""ANSI-aware text measurement and line shaping utilities.

Provides width measurement, clipping, ellipsis truncation, and padding that
preserve escape sequences. These keep the split layout aligned when colour
codes and wide characters (icons, CJK names) are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
ELLIPSIS = "…"
RESET = "\033[0m"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns; East Asian wide/fullwidth characters
    and emoji presentation symbols consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        w = char_display_width(text[i])
        if col + w > max_cols:
            break
        out.append(text[i])
        col += w
        i += 1

    return "".join(out)


def truncate_ansi_line(text: str, max_cols: int) -> str:
    """Fit ``text`` into ``max_cols`` columns, ending in an ellipsis when cut."""
    if max_cols <= 0:
        return ""
    if display_width(text) <= max_cols:
        return text
    clipped = clip_ansi_line(text, max_cols - 1) + ELLIPSIS
    if "\033" in text:
        clipped += RESET
    return clipped


def pad_ansi_line(text: str, width: int) -> str:
    """Right-pad a styled line with spaces up to exactly ``width`` columns."""
    used = display_width(text)
    if used >= width:
        return text
    return text + " " * (width - used)
