"""Main interactive loop: render, read one input unit, apply it, repeat.

Strictly synchronous; each unit is fully processed and the new frame drawn
before the next unit is read. The terminal is restored on every exit path.
"""

from __future__ import annotations

import logging
import signal
from types import FrameType

from .render import build_frame, render_session
from .session import Session, StepResult, Viewport
from .terminal import TerminalSession
from .ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)


def _raise_system_exit(signum: int, _frame: FrameType | None) -> None:
    raise SystemExit(128 + signum)


def install_termination_handler() -> None:
    """Turn SIGTERM/SIGHUP into ``SystemExit`` so ``finally`` blocks run."""
    for signum in (signal.SIGTERM, signal.SIGHUP):
        signal.signal(signum, _raise_system_exit)


def draw(session: Session, terminal: TerminalSession, theme: UITheme) -> None:
    width, height = terminal.query_viewport_size()
    session.resize(Viewport(width=width, height=height))
    terminal.write_frame(build_frame(render_session(session, theme)))


def run_session(
    session: Session,
    terminal: TerminalSession,
    theme: UITheme = DEFAULT_THEME,
) -> StepResult:
    """Run the picker until the user quits or selects a file."""
    terminal.enter_raw_mode()
    try:
        while True:
            draw(session, terminal, theme)
            result = session.handle_input(terminal.read_input_unit())
            if result.done:
                logger.debug("session finished: %s", result.outcome.value)
                return result
    finally:
        terminal.restore_mode()
