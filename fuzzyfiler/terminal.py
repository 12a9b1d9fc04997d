"""Terminal control for the picker session.

Owns raw-mode lifecycle, alternate-screen switching, and frame output on the
controlling tty. The session loop only sees the ``TerminalSession`` protocol,
so tests can drive it with an in-memory fake.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty
from collections.abc import Iterator
from typing import Protocol

from .input import read_key

DEFAULT_VIEWPORT = (80, 24)


class TerminalSession(Protocol):
    def enter_raw_mode(self) -> None: ...

    def restore_mode(self) -> None: ...

    def read_input_unit(self) -> str: ...

    def write_frame(self, frame: str) -> None: ...

    def query_viewport_size(self) -> tuple[int, int]: ...


class TerminalController:
    """Drive a real tty: raw mode, alternate screen, key input, and frames."""

    def __init__(self, tty_fd: int) -> None:
        """Capture tty state for ``tty_fd`` so it can be restored on exit."""
        self.tty_fd = tty_fd
        self._saved_tty_state = termios.tcgetattr(tty_fd)

    def enter_raw_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.tty_fd, termios.TCSAFLUSH)
        # Enter alternate screen, clear it, and hide cursor.
        os.write(self.tty_fd, b"\x1b[?1049h\x1b[2J\x1b[H\x1b[?25l")

    def restore_mode(self) -> None:
        """Restore the main screen, the cursor, and the saved tty attributes."""
        os.write(self.tty_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.tty_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def read_input_unit(self) -> str:
        return read_key(self.tty_fd)

    def write_frame(self, frame: str) -> None:
        data = frame.encode("utf-8", errors="replace")
        while data:
            written = os.write(self.tty_fd, data)
            data = data[written:]

    def query_viewport_size(self) -> tuple[int, int]:
        try:
            size = os.get_terminal_size(self.tty_fd)
        except OSError:
            return DEFAULT_VIEWPORT
        return size.columns, size.lines


@contextlib.contextmanager
def open_controlling_tty(path: str = "/dev/tty") -> Iterator[TerminalController]:
    """Open the controlling terminal so stdout stays free for the result."""
    fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
    try:
        yield TerminalController(fd)
    finally:
        os.close(fd)
