"""The terminal the frame loop draws on and reads keys from.

``Terminal`` is the protocol the app is written against; tests drive it with
an in-memory double. ``ProcessTerminal`` is the real one: it puts the
controlling tty into cbreak mode, switches to the alternate screen and polls
stdin for one key at a time.
"""

from __future__ import annotations

import codecs
import collections
import logging
import os
import select
import sys
import termios
from pathlib import Path
from typing import Protocol

from todo.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------

ENTER_ALT_SCREEN = "\x1b[?1049h"
LEAVE_ALT_SCREEN = "\x1b[?1049l"
CURSOR_HIDE = "\x1b[?25l"
CURSOR_SHOW = "\x1b[?25h"
ERASE_SCREEN = "\x1b[2J\x1b[H"
SGR_RESET = "\x1b[0m"

# Grace period for the tail of an escape sequence split across reads. When it
# runs out, whatever arrived is taken as a key on its own (usually a lone ESC).
ESCAPE_GRACE = 0.01

DEFAULT_SIZE = os.terminal_size((80, 24))


class Terminal(Protocol):
    """What :class:`todo.app.App` needs from a terminal."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def poll_key(self, timeout: float) -> str | None:
        """Return one key sequence, or ``None`` if none arrived within *timeout*."""
        ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def clear_screen(self) -> None: ...


class ProcessTerminal:
    """Terminal on the process's own stdin and stdout.

    Input is read in cbreak mode: no echo and no line editing, but ISIG stays
    on so Ctrl+C still raises SIGINT.
    """

    def __init__(self) -> None:
        self._saved_attrs: list | None = None
        self._sequences = StdinBuffer()
        self._utf8 = codecs.getincrementaldecoder("utf-8")("replace")
        self._ready: collections.deque[str] = collections.deque()
        self._write_log = os.environ.get("TODO_TUI_WRITE_LOG") or None

    def _size(self) -> os.terminal_size:
        try:
            return os.get_terminal_size(sys.stdout.fileno())
        except (ValueError, OSError):
            return DEFAULT_SIZE

    @property
    def columns(self) -> int:
        return self._size().columns

    @property
    def rows(self) -> int:
        return self._size().lines

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> None:
        """Switch to cbreak mode and the alternate screen."""
        stdin_fd = sys.stdin.fileno()
        self._saved_attrs = termios.tcgetattr(stdin_fd)
        _enter_cbreak(stdin_fd)

        self._emit(ENTER_ALT_SCREEN)
        self.hide_cursor()
        self.clear_screen()
        logger.debug("Terminal started at %dx%d", self.columns, self.rows)

    def stop(self) -> None:
        """Undo everything :meth:`start` did. Safe to call more than once."""
        self._emit(SGR_RESET + CURSOR_SHOW + LEAVE_ALT_SCREEN)

        if self._saved_attrs is not None:
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

        self._sequences.clear()
        self._ready.clear()
        logger.debug("Terminal stopped")

    # -- input --------------------------------------------------------------

    def poll_key(self, timeout: float) -> str | None:
        if not self._ready and self._readable(timeout):
            self._consume_input()
        return self._ready.popleft() if self._ready else None

    def _consume_input(self) -> None:
        self._ready.extend(self._sequences.process(self._read()))
        while self._sequences.pending:
            chunk = self._read() if self._readable(ESCAPE_GRACE) else ""
            if chunk:
                self._ready.extend(self._sequences.process(chunk))
            else:
                self._ready.extend(self._sequences.flush())

    def _readable(self, timeout: float) -> bool:
        ready, _, _ = select.select([sys.stdin], [], [], timeout)
        return bool(ready)

    def _read(self) -> str:
        try:
            chunk = os.read(sys.stdin.fileno(), 1024)
        except OSError as e:
            logger.debug("stdin read failed: %s", e)
            return ""
        return self._utf8.decode(chunk)

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        self._emit(data)
        if self._write_log is not None:
            try:
                with Path(self._write_log).open("a", encoding="utf-8") as log:
                    log.write(data)
            except OSError:
                logger.warning("Cannot append to write log %s", self._write_log)
                self._write_log = None

    def hide_cursor(self) -> None:
        self._emit(CURSOR_HIDE)

    def show_cursor(self) -> None:
        self._emit(CURSOR_SHOW)

    def clear_screen(self) -> None:
        self._emit(ERASE_SCREEN)

    def _emit(self, data: str) -> None:
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError:
            # The tty went away; nothing left to draw on
            pass


def _enter_cbreak(fd: int) -> None:
    """No echo, no canonical mode, no flow control; signals stay enabled."""
    iflag, oflag, cflag, lflag, ispeed, ospeed, cc = termios.tcgetattr(fd)
    iflag &= ~(termios.IXON | termios.IXOFF | termios.ICRNL | termios.INLCR)
    lflag &= ~(termios.ICANON | termios.ECHO | termios.IEXTEN)
    cc[termios.VMIN] = 1
    cc[termios.VTIME] = 0
    termios.tcsetattr(fd, termios.TCSANOW, [iflag, oflag, cflag, lflag, ispeed, ospeed, cc])
