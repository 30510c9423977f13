"""Raw terminal handling for POSIX terminals.

:class:`Terminal` switches standard input into cbreak mode (no line
buffering, no echo) for the duration of a ``with`` block and polls it without
blocking.  Bytes read from the terminal are decoded with
:func:`termtris.keys.split_keys`; the decoded keys are queued and handed out
one per :meth:`Terminal.poll` call.  An escape sequence cut off by a read is
kept and completed by the next one.
"""

from __future__ import annotations

import logging
import os
import select
import sys
import termios
import time
import tty
from collections import deque
from typing import Deque, List, Optional, TextIO

from .keys import Key, split_keys

LOGGER = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[2J\033[1;1H"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
RESET_STYLE = "\033[0m"

READ_CHUNK = 64
WAIT_POLL_SECONDS = 0.05


class Terminal:
    """Non-blocking keyboard polling and full-screen drawing."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._fd: Optional[int] = None
        self._saved_attrs: Optional[List] = None
        self._pending: Deque[Key] = deque()
        self._partial = b""

    def __enter__(self) -> "Terminal":
        self._fd = self._stdin.fileno()
        if os.isatty(self._fd):
            self._saved_attrs = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        else:
            LOGGER.warning("Standard input is not a terminal; keys will need Enter")
        self._stdout.write(HIDE_CURSOR)
        self._stdout.flush()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._saved_attrs is not None and self._fd is not None:
            termios.tcsetattr(self._fd, termios.TCSAFLUSH, self._saved_attrs)
            self._saved_attrs = None
        self._stdout.write(RESET_STYLE + SHOW_CURSOR + "\n")
        self._stdout.flush()
        return False

    def _read_available(self) -> Optional[bytes]:
        """Return the bytes waiting on stdin, ``b""`` if none, ``None`` on EOF."""

        if self._fd is None:
            raise RuntimeError("Terminal used outside of its context manager")
        ready, _, _ = select.select([self._fd], [], [], 0)
        if not ready:
            return b""
        data = os.read(self._fd, READ_CHUNK)
        return data or None

    def poll(self) -> Key:
        """Return the next pending key without blocking, or ``Key.NONE``."""

        if not self._pending:
            data = self._read_available()
            if data is None:
                return Key.QUIT
            keys, self._partial = split_keys(self._partial + data)
            self._pending.extend(keys)
        return self._pending.popleft() if self._pending else Key.NONE

    def wait_for_key(self, interval: float = WAIT_POLL_SECONDS) -> Key:
        """Wait until any key is pressed and return it decoded.

        Unrecognised keys return ``Key.NONE``.  Waiting is a bounded sleep
        loop around a non-blocking read.
        """

        self._pending.clear()
        while True:
            data = self._read_available()
            if data is None:
                return Key.QUIT
            if data:
                keys, self._partial = split_keys(self._partial + data)
                if keys or not self._partial:
                    self.flush()
                    return keys[0] if keys else Key.NONE
            elif self._partial:
                # Nothing completed the escape sequence: a bare Esc press.
                self.flush()
                return Key.NONE
            time.sleep(interval)

    def flush(self) -> None:
        """Discard keys typed but not yet processed."""

        self._pending.clear()
        self._partial = b""
        if self._saved_attrs is not None and self._fd is not None:
            termios.tcflush(self._fd, termios.TCIFLUSH)

    def draw(self, text: str) -> None:
        """Replace the screen contents with ``text``."""

        self._stdout.write(CLEAR_SCREEN + text)
        self._stdout.flush()
