"""Key-binding table and input-unit classification."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class KeyAction(enum.Enum):
    QUIT = "quit"
    MOVE_UP = "move-up"
    MOVE_DOWN = "move-down"
    CONFIRM = "confirm"
    ERASE = "erase"
    CLEAR_QUERY = "clear-query"
    INSERT = "insert"
    IGNORE = "ignore"


@dataclass(frozen=True)
class KeyMap:
    """Input units bound to each action.

    Units are single characters from the terminal or the named tokens the
    input decoder produces for escape sequences (``UP``, ``DOWN``, ``ESC``).
    """

    quit: frozenset[str] = frozenset({"\x04", "\x03", "ESC"})
    up: frozenset[str] = frozenset({"\x10", "UP"})
    down: frozenset[str] = frozenset({"\x0e", "DOWN"})
    confirm: frozenset[str] = frozenset({"\r", "\n"})
    erase: frozenset[str] = frozenset({"\b", "\x7f"})
    clear_query: frozenset[str] = frozenset({"\x15"})


DEFAULT_KEYMAP = KeyMap()


def is_printable(unit: str) -> bool:
    return len(unit) == 1 and 32 <= ord(unit) <= 126


def classify_key(unit: str, keymap: KeyMap = DEFAULT_KEYMAP) -> KeyAction:
    if unit in keymap.quit:
        return KeyAction.QUIT
    if unit in keymap.down:
        return KeyAction.MOVE_DOWN
    if unit in keymap.up:
        return KeyAction.MOVE_UP
    if unit in keymap.confirm:
        return KeyAction.CONFIRM
    if unit in keymap.erase:
        return KeyAction.ERASE
    if unit in keymap.clear_query:
        return KeyAction.CLEAR_QUERY
    if is_printable(unit):
        return KeyAction.INSERT
    return KeyAction.IGNORE
