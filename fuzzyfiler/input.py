"""Low-level terminal input decoding.

Reads raw bytes from the tty and turns them into input units: one decoded
character, or a named token (``UP``, ``DOWN``, ``LEFT``, ``RIGHT``, ``ESC``,
``UNKNOWN``) for escape sequences. End of input yields ``""``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_ESCAPE_BYTES = 16

_PENDING_BYTES: list[bytes] = []

_ARROW_TOKENS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_sequence_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_escape(fd: int) -> str:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if final is None:
        return "ESC"
    token = _ARROW_TOKENS.get(final)
    if token is not None:
        return token
    # Drain the rest of an unrecognized CSI sequence up to its final byte.
    for _ in range(MAX_ESCAPE_BYTES):
        if 0x40 <= final[0] <= 0x7E:
            break
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            break
    return "UNKNOWN"


def read_key(fd: int) -> str:
    """Block for one input unit from ``fd``."""
    ch = _PENDING_BYTES.pop(0) if _PENDING_BYTES else os.read(fd, 1)
    if not ch:
        return ""
    if ch == b"\x1b":
        return _read_escape(fd)

    needed = _utf8_sequence_length(ch[0]) - 1
    raw = ch
    for _ in range(needed):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        raw += nxt
    return raw.decode("utf-8", errors="replace")
