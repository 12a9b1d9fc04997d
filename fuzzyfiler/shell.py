"""Hand the selected path back to the enclosing shell."""

from __future__ import annotations

import fcntl
import logging
import sys
import termios
from typing import TextIO

logger = logging.getLogger(__name__)


def inject_to_shell(text: str, fd: int) -> bool:
    """Push ``text`` into the terminal input queue of ``fd`` via TIOCSTI.

    Returns ``False`` when the platform or kernel refuses the ioctl; the
    queue may then hold a prefix of ``text``.
    """
    request = getattr(termios, "TIOCSTI", None)
    if request is None:
        logger.warning("TIOCSTI is not available on this platform")
        return False
    try:
        for byte in text.encode("utf-8"):
            fcntl.ioctl(fd, request, bytes([byte]))
    except OSError as exc:
        logger.warning("TIOCSTI injection failed: %s", exc)
        return False
    return True


def emit_selection(path: str, inject_fd: int | None = None, stream: TextIO | None = None) -> None:
    """Deliver ``path`` by injection when requested, else print it."""
    if inject_fd is not None and inject_to_shell(path, inject_fd):
        return
    out = stream if stream is not None else sys.stdout
    out.write(path + "\n")
    out.flush()
