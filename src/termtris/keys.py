"""Decoding of raw terminal bytes into logical keys."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple


class Key(Enum):
    """Logical keys understood by the game."""

    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    ROTATE = "rotate"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    PAUSE = "pause"
    GHOST = "ghost"
    QUIT = "quit"
    RESTART = "restart"


ESC = 0x1B

_LETTER_KEYS: Dict[str, Key] = {
    "a": Key.LEFT,
    "d": Key.RIGHT,
    "w": Key.ROTATE,
    "s": Key.SOFT_DROP,
    "x": Key.SOFT_DROP,
    " ": Key.HARD_DROP,
    "p": Key.PAUSE,
    "g": Key.GHOST,
    "q": Key.QUIT,
    "r": Key.RESTART,
}

CHAR_KEYS: Dict[int, Key] = {}
for _char, _key in _LETTER_KEYS.items():
    CHAR_KEYS[ord(_char)] = _key
    CHAR_KEYS[ord(_char.upper())] = _key

# Final byte of the cursor key escape sequences.
ARROW_KEYS: Dict[int, Key] = {
    ord("A"): Key.ROTATE,
    ord("B"): Key.SOFT_DROP,
    ord("C"): Key.RIGHT,
    ord("D"): Key.LEFT,
}


def split_keys(data: bytes) -> Tuple[List[Key], bytes]:
    """Decode ``data`` and return ``(keys, remainder)``.

    ``remainder`` holds an escape sequence cut off at the end of ``data``
    (``ESC``, ``ESC [`` or ``ESC [ 1 ;``); prepend it to the next chunk read
    from the terminal.  It is empty when ``data`` ends on a complete key.
    """

    keys: List[Key] = []
    i = 0
    while i < len(data):
        byte = data[i]
        if byte != ESC:
            key = CHAR_KEYS.get(byte)
            if key is not None:
                keys.append(key)
            i += 1
            continue

        if i + 1 == len(data):
            return keys, data[i:]
        if data[i + 1:i + 2] not in (b"[", b"O"):
            i += 1
            continue
        # Skip parameter and intermediate bytes up to the final byte.
        j = i + 2
        while j < len(data) and 0x20 <= data[j] <= 0x3F:
            j += 1
        if j == len(data):
            return keys, data[i:]
        key = ARROW_KEYS.get(data[j])
        if key is not None:
            keys.append(key)
        i = j + 1
    return keys, b""


def decode_keys(data: bytes) -> List[Key]:
    """Return the logical keys contained in ``data`` in order.

    Arrow keys arrive as ``ESC [ <final>`` or, in application cursor mode,
    ``ESC O <final>``, optionally with parameters (``ESC [ 1 ; 5 A``).  They
    decode to the same keys as their letter equivalents.  Unrecognised bytes,
    unknown escape sequences and an unfinished trailing sequence are dropped.
    """

    return split_keys(data)[0]


def decode_key(data: bytes) -> Key:
    """Return the first logical key in ``data`` or ``Key.NONE``."""

    keys = decode_keys(data)
    return keys[0] if keys else Key.NONE
