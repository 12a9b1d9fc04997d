"""Persistent JSON config helpers.

Stores scan limits, exclude patterns, and preview/theme preferences.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "fuzzy-filer"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path.home() / ".config" / APP_NAME / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "target",
    "dist",
    "build",
    "*.log",
    ".DS_Store",
    "__pycache__",
    ".pytest_cache",
    ".venv",
    "venv",
)


@dataclass(frozen=True)
class FilerConfig:
    """Effective settings threaded into the session at construction."""

    exclude_patterns: tuple[str, ...] = field(default=DEFAULT_EXCLUDE_PATTERNS)
    max_depth: int = 10
    max_files: int = 100_000
    enable_preview: bool = True
    preview_lines: int = 20
    theme: str = "default"
    syntax_style: str = "monokai"

    def to_json_dict(self) -> dict[str, object]:
        data = asdict(self)
        data["exclude_patterns"] = list(self.exclude_patterns)
        return data


DEFAULT_CONFIG = FilerConfig()


def should_exclude(rel_path: str, patterns: tuple[str, ...] | list[str]) -> bool:
    """Return whether ``rel_path`` matches any exclude pattern.

    ``*.ext`` patterns match by suffix; every other pattern is a plain
    substring test against the whole relative path.
    """
    for pattern in patterns:
        if pattern.startswith("*."):
            if rel_path.endswith(pattern[1:]):
                return True
        elif pattern in rel_path:
            return True
    return False


def _load_config_path() -> Path:
    """Return preferred config path, falling back to legacy location when needed."""
    if CONFIG_PATH.exists():
        return CONFIG_PATH
    if CONFIG_PATH == DEFAULT_CONFIG_PATH and LEGACY_CONFIG_PATH.exists():
        return LEGACY_CONFIG_PATH
    return CONFIG_PATH


def load_config_data() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = _load_config_path()
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_positive_int(value: object, default: int) -> int:
    """Booleans and non-positive or non-integer values fall back to ``default``."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _coerce_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_name(value: object, default: str) -> str:
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _coerce_patterns(value: object, default: tuple[str, ...]) -> tuple[str, ...]:
    if not isinstance(value, list):
        return default
    return tuple(item for item in value if isinstance(item, str) and item)


def config_from_data(data: dict[str, object]) -> FilerConfig:
    """Build a ``FilerConfig`` validating every key independently."""
    base = DEFAULT_CONFIG
    return FilerConfig(
        exclude_patterns=_coerce_patterns(data.get("exclude_patterns"), base.exclude_patterns),
        max_depth=_coerce_positive_int(data.get("max_depth"), base.max_depth),
        max_files=_coerce_positive_int(data.get("max_files"), base.max_files),
        enable_preview=_coerce_bool(data.get("enable_preview"), base.enable_preview),
        preview_lines=_coerce_positive_int(data.get("preview_lines"), base.preview_lines),
        theme=_coerce_name(data.get("theme"), base.theme),
        syntax_style=_coerce_name(data.get("syntax_style"), base.syntax_style),
    )


def load_config() -> FilerConfig:
    """Load the effective config, using defaults for anything missing or invalid."""
    return config_from_data(load_config_data())


def save_config(config: FilerConfig) -> bool:
    """Persist ``config`` as pretty-printed JSON.

    Filesystem errors are logged and reported through the return value so a
    failed write never interrupts startup.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(config.to_json_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not save config to %s: %s", CONFIG_PATH, exc)
        return False
    return True
