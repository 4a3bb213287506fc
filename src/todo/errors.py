"""Exception types raised by the todo TUI."""

from __future__ import annotations


class TodoError(Exception):
    """Base class for all todo errors."""


class InvalidStateError(TodoError):
    """A layout call was made out of order.

    Raised for unbalanced ``begin``/``end`` pairs or for widgets placed
    outside of any layout. This is a programming error in the frame
    sequencing and is never caught.
    """


class MalformedLineError(TodoError):
    """A line of the task file starts with neither ``TODO: `` nor ``DONE: ``."""

    def __init__(self, path: str, lineno: int, line: str) -> None:
        self.path = path
        self.lineno = lineno
        self.line = line
        super().__init__(f"{path}:{lineno}: ERROR: ill-formed item line")


class UndecodableFileError(TodoError):
    """The task file is not valid UTF-8."""

    def __init__(self, path: str, offset: int) -> None:
        self.path = path
        self.offset = offset
        super().__init__(f"{path}: ERROR: not valid UTF-8 at byte {offset}")
