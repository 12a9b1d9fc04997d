"""Bounded previews for the entry under the cursor.

Directories render as an item count plus a capped listing; files render as
their first lines with tabs expanded and long lines cut. Oversized, binary,
and unreadable targets collapse to short marker messages. Nothing here
raises: every failure becomes a one-line ``Error: ...`` preview.
"""

from __future__ import annotations

import codecs
import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from .highlight import sanitize_terminal_text

logger = logging.getLogger(__name__)

MAX_PREVIEW_BYTES = 1024 * 1024
BINARY_PROBE_BYTES = 512
MAX_LINE_CHARS = 80
TAB_SPACES = 4

ELLIPSIS = "…"
MORE_MARKER = "…more"
EMPTY_MARKER = "(empty)"
BINARY_MARKER = "Binary file"
DIR_ICON = "📁"
FILE_ICON = "📄"

BINARY_EXTENSIONS = frozenset(
    {
        ".exe", ".dll", ".so", ".dylib",
        ".zip", ".tar", ".gz", ".bz2",
        ".jpg", ".jpeg", ".png", ".gif",
        ".mp3", ".mp4", ".avi", ".mov",
        ".pdf", ".doc", ".docx", ".xls",
        ".o", ".a", ".pyc",
    }
)


@dataclass(frozen=True)
class PreviewResult:
    """Preview rows plus whether they are literal file text (safe to colour)."""

    lines: list[str]
    is_text: bool = False
    truncated: bool = False


def _error_lines(exc: OSError) -> list[str]:
    message = exc.strerror or str(exc)
    if exc.filename is not None:
        message = f"{exc.filename}: {message}"
    return [f"Error: {message}"]


def _looks_binary(sample: bytes) -> bool:
    if b"\x00" in sample:
        return True
    # A probe may end mid code point, so decode without finalizing.
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(sample, final=False)
    except UnicodeDecodeError:
        return True
    return False


def is_binary_file(path: Path) -> bool:
    """Detect binaries by extension, then by probing the first bytes."""
    if path.suffix.lower() in BINARY_EXTENSIONS:
        return True
    try:
        with path.open("rb") as handle:
            sample = handle.read(BINARY_PROBE_BYTES)
    except OSError:
        return False
    return _looks_binary(sample)


def _shape_line(line: str) -> str:
    line = sanitize_terminal_text(line.replace("\t", " " * TAB_SPACES))
    if len(line) > MAX_LINE_CHARS:
        return line[:MAX_LINE_CHARS] + ELLIPSIS
    return line


def _preview_file(path: Path, max_lines: int, size: int) -> PreviewResult:
    if size > MAX_PREVIEW_BYTES:
        return PreviewResult(
            [
                f"File too large: {size / (1024 * 1024):.2f} MB",
                "(Preview disabled for files > 1MB)",
            ]
        )

    if is_binary_file(path):
        return PreviewResult([BINARY_MARKER])

    lines: list[str] = []
    truncated = False
    try:
        with path.open("r", encoding="utf-8", errors="replace", newline=None) as handle:
            for raw in handle:
                if len(lines) >= max_lines:
                    truncated = True
                    break
                lines.append(_shape_line(raw.rstrip("\n")))
    except OSError as exc:
        logger.debug("preview read failed for %s: %s", path, exc)
        return PreviewResult(_error_lines(exc))

    if not lines:
        return PreviewResult([EMPTY_MARKER])
    if truncated:
        return PreviewResult(lines + [MORE_MARKER], is_text=True, truncated=True)
    return PreviewResult(lines, is_text=True)


def _preview_directory(path: Path, max_lines: int) -> PreviewResult:
    try:
        with os.scandir(path) as entries:
            children = sorted(entries, key=lambda child: child.name)
    except OSError as exc:
        logger.debug("preview listing failed for %s: %s", path, exc)
        return PreviewResult(_error_lines(exc))

    lines = [f"Directory: {len(children)} items", ""]
    slots = max_lines - 2
    if slots < 1:
        return PreviewResult(lines[: max(0, max_lines)])
    shown = children if len(children) <= slots else children[: max(0, slots - 1)]
    for child in shown:
        try:
            icon = DIR_ICON if child.is_dir() else FILE_ICON
        except OSError:
            icon = FILE_ICON
        lines.append(f"{icon} {sanitize_terminal_text(child.name)}")
    remaining = len(children) - len(shown)
    if remaining > 0:
        lines.append(f"{ELLIPSIS} and {remaining} more")
    return PreviewResult(lines)


def build_preview_result(path: Path, max_lines: int) -> PreviewResult:
    try:
        info = path.stat()
    except OSError as exc:
        return PreviewResult(_error_lines(exc))

    if stat.S_ISDIR(info.st_mode):
        return _preview_directory(path, max_lines)
    return _preview_file(path, max_lines, info.st_size)


def build_preview(path: Path, max_lines: int) -> list[str]:
    """Return at most ``max_lines`` (+ a trailing marker) rows summarizing ``path``."""
    return build_preview_result(path, max_lines).lines


__all__ = [
    "MAX_PREVIEW_BYTES",
    "BINARY_PROBE_BYTES",
    "BINARY_EXTENSIONS",
    "MORE_MARKER",
    "EMPTY_MARKER",
    "BINARY_MARKER",
    "PreviewResult",
    "is_binary_file",
    "build_preview_result",
    "build_preview",
]
