"""Command-line front door for fuzzyfiler.

Parses CLI options, merges them over the persisted config, builds the
session for the start directory, and runs the picker on the controlling tty.
The selected path is printed to stdout (or injected into the shell input).
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from .app import install_termination_handler, run_session
from .config import FilerConfig, load_config, save_config
from .runtime_logging import configure_logging
from .scanner import ScanError
from .session import Session, SessionOutcome, Viewport
from .shell import emit_selection
from .terminal import open_controlling_tty
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fuzzyfiler",
        description="Pick a file by typing part of its name; prints the chosen path.",
    )
    parser.add_argument("path", nargs="?", default=".", help="Directory to scan. Defaults to current directory.")
    parser.add_argument("--no-preview", action="store_true", help="Disable the preview pane.")
    parser.add_argument("--preview-lines", type=_positive_int, default=None, help="Maximum preview rows.")
    parser.add_argument("--max-depth", type=_positive_int, default=None, help="Maximum directory depth to scan.")
    parser.add_argument("--max-files", type=_positive_int, default=None, help="Maximum number of entries to scan.")
    parser.add_argument(
        "--exclude",
        action="append",
        metavar="PATTERN",
        default=None,
        help="Exclude pattern (substring or *.ext). Repeat to replace the configured list.",
    )
    parser.add_argument("--theme", default=None, help=f"UI theme name ({', '.join(available_theme_names())}).")
    parser.add_argument("--style", default=None, help="Pygments style name for file previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable colors and syntax highlighting.")
    parser.add_argument("--inject", action="store_true", help="Type the selected path into the shell prompt.")
    parser.add_argument("--save-config", action="store_true", help="Persist the effective settings before starting.")
    parser.add_argument("--print-config", action="store_true", help="Print the effective settings as JSON and exit.")
    parser.add_argument("--log-file", default=None, help="Write logs to this file ('auto' for the user log dir).")
    parser.add_argument("--log-level", default=None, help="Log level (debug, info, warning, error).")
    return parser


def effective_config(args: argparse.Namespace, base: FilerConfig) -> FilerConfig:
    """Overlay explicitly passed CLI options on ``base``."""
    overrides: dict[str, object] = {}
    if args.no_preview:
        overrides["enable_preview"] = False
    if args.preview_lines is not None:
        overrides["preview_lines"] = args.preview_lines
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    if args.max_files is not None:
        overrides["max_files"] = args.max_files
    if args.exclude is not None:
        overrides["exclude_patterns"] = tuple(args.exclude)
    if args.theme is not None:
        overrides["theme"] = args.theme
    if args.style is not None:
        overrides["syntax_style"] = args.style
    return dataclasses.replace(base, **overrides)


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the picker, and deliver the selection.

    Returns the process exit status: 0 for a selection or an aborted pick,
    1 when the start directory cannot be scanned or no tty is available.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    config = effective_config(args, load_config())

    if args.print_config:
        sys.stdout.write(json.dumps(config.to_json_dict(), indent=2) + "\n")
        return 0
    if args.save_config:
        save_config(config)

    try:
        session = Session.create(Path(args.path), config, color=not args.no_color)
    except ScanError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    theme = resolve_theme(config.theme, no_color=args.no_color)
    install_termination_handler()
    try:
        with open_controlling_tty() as terminal:
            result = run_session(session, terminal, theme)
            if result.outcome is SessionOutcome.QUIT_SELECTED and result.selected_path is not None:
                emit_selection(str(result.selected_path), inject_fd=terminal.tty_fd if args.inject else None)
    except OSError as exc:
        logger.error("terminal session failed: %s", exc)
        sys.stderr.write(f"Error: {exc}\n")
        return 1
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
