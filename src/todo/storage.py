"""Flat-file persistence for the two task lists.

One item per line, ``TODO: <title>`` or ``DONE: <title>``. Saving writes all
todo lines before all done lines.
"""

from __future__ import annotations

import logging
from pathlib import Path

from todo.errors import MalformedLineError, UndecodableFileError

logger = logging.getLogger(__name__)

TODO_PREFIX = "TODO: "
DONE_PREFIX = "DONE: "


def parse_item(line: str) -> tuple[str, str] | None:
    """Split a line into ``("todo" | "done", title)``, or ``None`` if ill-formed."""
    if line.startswith(TODO_PREFIX):
        return "todo", line[len(TODO_PREFIX):]
    if line.startswith(DONE_PREFIX):
        return "done", line[len(DONE_PREFIX):]
    return None


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping one trailing ``\\r`` from each line.

    Other line separators (form feed, NEL, U+2028 ...) are part of a title.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_items(path: str | Path) -> tuple[list[str], list[str]]:
    """Read *path* and return ``(todos, dones)`` in file order.

    Raises :class:`MalformedLineError` on the first line that matches
    neither prefix, and :class:`UndecodableFileError` if the file is not
    UTF-8. In either case nothing is returned.
    """
    todos: list[str] = []
    dones: list[str] = []

    raw = Path(path).read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise UndecodableFileError(str(path), e.start) from e

    for index, line in enumerate(split_lines(text)):
        parsed = parse_item(line)
        if parsed is None:
            raise MalformedLineError(str(path), index + 1, line)
        status, title = parsed
        if status == "todo":
            todos.append(title)
        else:
            dones.append(title)

    logger.info("Loaded %d todo and %d done items from %s", len(todos), len(dones), path)
    return todos, dones


def save_items(path: str | Path, todos: list[str], dones: list[str]) -> None:
    """Write both lists to *path*, replacing whatever was there."""
    lines = [TODO_PREFIX + todo for todo in todos]
    lines.extend(DONE_PREFIX + done for done in dones)
    Path(path).write_text(
        "".join(f"{line}\n" for line in lines), encoding="utf-8", newline=""
    )
    logger.info("Saved %d todo and %d done items to %s", len(todos), len(dones), path)


def load_state(path: str | Path) -> tuple[list[str], list[str], str]:
    """Load *path* for the UI: ``(todos, dones, notification)``.

    A file that does not exist yet starts both lists empty; it is created on
    save.
    """
    try:
        todos, dones = load_items(path)
    except FileNotFoundError:
        logger.info("%s does not exist, starting with empty lists", path)
        return [], [], f"New file {path}"
    return todos, dones, f"Loaded file {path}"
