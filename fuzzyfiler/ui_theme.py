"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (header/list/footer chrome). Syntax
highlighting style for file previews remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    header_path: str
    header_count: str
    query: str
    separator: str
    cursor_marker: str
    entry_dir: str
    entry_file: str
    divider: str
    footer: str
    error: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    header_path="\033[1;36m",
    header_count="\033[2m",
    query="\033[1m",
    separator="\033[2m",
    cursor_marker="\033[1;33m",
    entry_dir="\033[1;34m",
    entry_file="",
    divider="\033[2m",
    footer="\033[2m",
    error="\033[1;31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    header_path="\033[1;38;5;45m",
    header_count="\033[2;38;5;110m",
    query="\033[1;38;5;45m",
    separator="\033[2;38;5;31m",
    cursor_marker="\033[1;38;5;81m",
    entry_dir="\033[1;38;5;39m",
    entry_file="\033[38;5;252m",
    divider="\033[2;38;5;31m",
    footer="\033[2;38;5;110m",
    error="\033[1;38;5;203m",
)

MONO_THEME = UITheme(
    name="mono",
    reset="",
    header_path="",
    header_count="",
    query="",
    separator="",
    cursor_marker="",
    entry_dir="",
    entry_file="",
    divider="",
    footer="",
    error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    MONO_THEME.name: MONO_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    return tuple(_THEMES)


def resolve_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Return the named theme; ``no_color`` always wins and unknown names fall back."""
    if no_color:
        return MONO_THEME
    if name is None:
        return DEFAULT_THEME
    return _THEMES.get(name.strip().lower(), DEFAULT_THEME)


def paint(theme_code: str, text: str, reset: str) -> str:
    """Wrap ``text`` in ``theme_code`` unless the slot is uncoloured."""
    if not theme_code:
        return text
    return f"{theme_code}{text}{reset}"
