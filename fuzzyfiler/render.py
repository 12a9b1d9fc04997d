"""Pure rendering of session state into a full-screen text frame.

Two layouts share the same header and footer: a plain list of ranked
entries, and a split view with the list on the left and the preview of the
selected entry on the right. Nothing here touches the terminal; the caller
writes ``build_frame(render_session(...))``.
"""

from __future__ import annotations

import os

from .ansi import clip_ansi_line, pad_ansi_line, truncate_ansi_line
from .scanner import ROOT_PARENT, Entry
from .session import Session
from .ui_theme import DEFAULT_THEME, UITheme, paint

ROW_SEPARATOR = "\r\n"
SEPARATOR_CHAR = "─"
SEPARATOR_MAX_WIDTH = 80
COLUMN_DIVIDER = "│"
DIR_ICON = "📁"
FILE_ICON = "📄"
FOOTER_HINT = "[Ctrl+N/P] move  [Enter] select  [Ctrl+D] quit"
HEADER_ROWS = 3


def display_path(entry: Entry) -> str:
    """Parent path joined with the name, or the bare name at the scan root."""
    if entry.parent_path == ROOT_PARENT:
        return entry.name
    return os.path.join(entry.parent_path, entry.name)


def format_entry_row(entry: Entry, selected: bool, theme: UITheme) -> str:
    marker = paint(theme.cursor_marker, ">", theme.reset) if selected else " "
    if entry.is_dir:
        label = paint(theme.entry_dir, display_path(entry), theme.reset)
        icon = DIR_ICON
    else:
        label = paint(theme.entry_file, display_path(entry), theme.reset)
        icon = FILE_ICON
    return f"{marker} {icon} {label}"


def use_split_layout(session: Session) -> bool:
    return session.preview_enabled and bool(session.preview_lines)


def split_column_widths(total_width: int) -> tuple[int, int]:
    """Return ``(left, right)`` widths; one column between them is the divider."""
    left = max(1, total_width // 2 - 1)
    right = max(0, total_width - left - 1)
    return left, right


def _header_rows(session: Session, theme: UITheme) -> list[str]:
    width = max(1, session.viewport.width)
    title = (
        paint(theme.header_path, str(session.current_directory), theme.reset)
        + " "
        + paint(theme.header_count, f"[{len(session.all_entries)} files]", theme.reset)
    )
    query = paint(theme.query, f"> {session.query}", theme.reset)
    separator = paint(theme.separator, SEPARATOR_CHAR * min(width, SEPARATOR_MAX_WIDTH), theme.reset)
    return [truncate_ansi_line(title, width), truncate_ansi_line(query, width), separator]


def _footer_rows(session: Session, theme: UITheme) -> list[str]:
    width = max(1, session.viewport.width)
    rows = [""]
    if session.error_message:
        rows.append(truncate_ansi_line(paint(theme.error, session.error_message, theme.reset), width))
    rows.append(truncate_ansi_line(paint(theme.footer, FOOTER_HINT, theme.reset), width))
    return rows


def _body_row_budget(session: Session, footer_rows: int) -> int:
    return max(1, session.viewport.height - HEADER_ROWS - footer_rows)


def _list_body(session: Session, theme: UITheme, budget: int) -> list[str]:
    width = max(1, session.viewport.width)
    rows = [
        truncate_ansi_line(format_entry_row(entry, idx == session.cursor, theme), width)
        for idx, entry in enumerate(session.filtered_entries)
    ]
    return rows[:budget]


def _split_body(session: Session, theme: UITheme, budget: int) -> list[str]:
    left_width, right_width = split_column_widths(max(2, session.viewport.width))
    left_rows = [
        pad_ansi_line(
            truncate_ansi_line(format_entry_row(entry, idx == session.cursor, theme), left_width),
            left_width,
        )
        for idx, entry in enumerate(session.filtered_entries)
    ]
    right_rows = list(session.preview_lines)
    divider = paint(theme.divider, COLUMN_DIVIDER, theme.reset)
    blank_left = " " * left_width

    rows: list[str] = []
    for row in range(min(budget, max(len(left_rows), len(right_rows)))):
        left = left_rows[row] if row < len(left_rows) else blank_left
        right = ""
        if row < len(right_rows):
            right = clip_ansi_line(right_rows[row], right_width)
            if "\033" in right:
                right += "\033[0m"
        rows.append(f"{left}{divider}{right}")
    return rows


def render_session(session: Session, theme: UITheme = DEFAULT_THEME) -> str:
    """Render ``session`` into rows joined for a raw-mode terminal."""
    footer = _footer_rows(session, theme)
    budget = _body_row_budget(session, len(footer))
    if use_split_layout(session):
        body = _split_body(session, theme, budget)
    else:
        body = _list_body(session, theme, budget)
    return ROW_SEPARATOR.join(_header_rows(session, theme) + body + footer)


def build_frame(text: str) -> str:
    """Cursor-home, each row cleared to end of line, then clear to end of screen."""
    rows = text.split(ROW_SEPARATOR)
    return "\033[H" + ("\033[K" + ROW_SEPARATOR).join(rows) + "\033[K\033[J"


__all__ = [
    "display_path",
    "format_entry_row",
    "use_split_layout",
    "split_column_widths",
    "render_session",
    "build_frame",
]
