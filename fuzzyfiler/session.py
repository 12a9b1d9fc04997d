"""Interactive session state and its input-driven transitions.

``Session`` owns the current directory, its scan result, the query, the
cursor, and the cached preview. Each call to ``handle_input`` processes one
input unit completely, so after it returns the cursor is a valid index (or 0
when nothing matches) and the preview matches the selected entry.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path

from .config import DEFAULT_CONFIG, FilerConfig
from .highlight import colorize_preview_lines
from .keymap import DEFAULT_KEYMAP, KeyAction, KeyMap, classify_key
from .preview import build_preview_result
from .ranker import rank_entries
from .scanner import Entry, ScanError, ScanLimits, absolute_entry_path, scan_entries

logger = logging.getLogger(__name__)


class SessionOutcome(enum.Enum):
    RUNNING = "running"
    QUIT_EMPTY = "quit-empty"
    QUIT_SELECTED = "quit-selected"


@dataclass(frozen=True)
class StepResult:
    outcome: SessionOutcome
    selected_path: Path | None = None

    @property
    def done(self) -> bool:
        return self.outcome is not SessionOutcome.RUNNING


RUNNING = StepResult(SessionOutcome.RUNNING)
QUIT_EMPTY = StepResult(SessionOutcome.QUIT_EMPTY)


@dataclass(frozen=True)
class Viewport:
    width: int = 80
    height: int = 24


class Session:
    def __init__(
        self,
        current_directory: Path,
        all_entries: list[Entry],
        config: FilerConfig = DEFAULT_CONFIG,
        viewport: Viewport = Viewport(),
        keymap: KeyMap = DEFAULT_KEYMAP,
        color: bool = True,
    ) -> None:
        self.config = config
        self.keymap = keymap
        self.color = color
        self.viewport = viewport
        self.current_directory = current_directory
        self.all_entries = all_entries
        self.filtered_entries: list[Entry] = []
        self.query = ""
        self.cursor = 0
        self.preview_lines: list[str] = []
        self.error_message = ""
        self._refilter()

    @classmethod
    def create(
        cls,
        start_dir: str | Path,
        config: FilerConfig = DEFAULT_CONFIG,
        viewport: Viewport = Viewport(),
        keymap: KeyMap = DEFAULT_KEYMAP,
        color: bool = True,
    ) -> "Session":
        """Scan ``start_dir`` and build the initial browse view.

        Raises ``ScanError`` when the start directory cannot be scanned.
        """
        root = Path(start_dir).expanduser().resolve()
        entries = scan_entries(root, ScanLimits.from_config(config))
        return cls(root, entries, config=config, viewport=viewport, keymap=keymap, color=color)

    @property
    def selected_entry(self) -> Entry | None:
        if not self.filtered_entries:
            return None
        return self.filtered_entries[self.cursor]

    @property
    def preview_enabled(self) -> bool:
        return self.config.enable_preview

    def resize(self, viewport: Viewport) -> None:
        self.viewport = viewport

    def handle_input(self, unit: str) -> StepResult:
        """Apply one input unit; an empty unit means end of input."""
        if not unit:
            return QUIT_EMPTY
        self.error_message = ""

        action = classify_key(unit, self.keymap)
        if action is KeyAction.QUIT:
            return QUIT_EMPTY
        if action is KeyAction.MOVE_DOWN:
            self.move_cursor(1)
        elif action is KeyAction.MOVE_UP:
            self.move_cursor(-1)
        elif action is KeyAction.CONFIRM:
            return self.confirm()
        elif action is KeyAction.ERASE:
            self.erase_query()
        elif action is KeyAction.CLEAR_QUERY:
            self.clear_query()
        elif action is KeyAction.INSERT:
            self.append_query(unit)
        return RUNNING

    def move_cursor(self, delta: int) -> bool:
        target = self.cursor + delta
        if target < 0 or target >= len(self.filtered_entries):
            return False
        self.cursor = target
        self._refresh_preview()
        return True

    def append_query(self, text: str) -> None:
        self.query += text
        self._refilter()

    def erase_query(self) -> bool:
        if not self.query:
            return False
        self.query = self.query[:-1]
        self._refilter()
        return True

    def clear_query(self) -> bool:
        if not self.query:
            return False
        self.query = ""
        self._refilter()
        return True

    def confirm(self) -> StepResult:
        entry = self.selected_entry
        if entry is None:
            return RUNNING
        target = absolute_entry_path(self.current_directory, entry)
        if entry.is_dir:
            self.drill_down(target)
            return RUNNING
        return StepResult(SessionOutcome.QUIT_SELECTED, target.resolve())

    def drill_down(self, directory: Path) -> bool:
        """Make ``directory`` the new scan root.

        On scan failure the session keeps its current directory and entries
        and exposes the failure through ``error_message``.
        """
        try:
            entries = scan_entries(directory, ScanLimits.from_config(self.config))
        except ScanError as exc:
            logger.info("drill-down into %s failed: %s", directory, exc)
            self.error_message = f"Error: {exc}"
            return False

        self.current_directory = directory
        self.all_entries = entries
        self.query = ""
        self.cursor = 0
        self._refilter()
        return True

    def _refilter(self) -> None:
        self.filtered_entries = rank_entries(self.all_entries, self.query)
        if not self.filtered_entries:
            self.cursor = 0
        else:
            self.cursor = max(0, min(self.cursor, len(self.filtered_entries) - 1))
        self._refresh_preview()

    def _refresh_preview(self) -> None:
        entry = self.selected_entry
        if not self.config.enable_preview or entry is None:
            self.preview_lines = []
            return

        target = absolute_entry_path(self.current_directory, entry)
        result = build_preview_result(target, self.config.preview_lines)
        if not (self.color and result.is_text):
            self.preview_lines = result.lines
            return
        body = result.lines[:-1] if result.truncated else result.lines
        colored = colorize_preview_lines(body, target, self.config.syntax_style)
        self.preview_lines = colored + result.lines[len(body) :]
