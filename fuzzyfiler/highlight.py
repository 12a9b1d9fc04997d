"""Preview sanitization and Pygments syntax highlighting.

Neutralizes terminal control bytes so previews cannot move the cursor or ring
the bell, and colours text previews line by line for the split layout.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.debug("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=_normalize_style(style))
        _FORMATTERS[style] = formatter
    return formatter


def colorize_preview_lines(lines: list[str], path: Path, style: str = DEFAULT_STYLE) -> list[str]:
    """Return ``lines`` with ANSI syntax colours for ``path``'s language.

    The row count never changes; if Pygments output does not line up with
    the input rows the plain lines are returned.
    """
    if not lines:
        return lines
    source = "\n".join(lines) + "\n"
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)

    rendered = pygments_highlight(source, lexer, _formatter_for_style(style))
    colored = rendered.split("\n")
    if colored and colored[-1] == "":
        colored.pop()
    if len(colored) != len(lines):
        return lines
    return colored
