"""Render surface: a cell grid that widgets draw into each frame.

The layout stack only knows the :class:`Surface` protocol. :class:`Screen`
implements it on top of a grid of ``(text, style)`` cells and flushes the
grid to a terminal, rewriting only the rows that changed since the previous
frame.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Protocol

from todo.utils import grapheme_width, split_graphemes
from todo.vec import Vec2

if TYPE_CHECKING:
    from todo.terminal import Terminal

logger = logging.getLogger(__name__)

_REVERSE_ON = "\x1b[7m"
_REVERSE_OFF = "\x1b[27m"
_RESET = "\x1b[0m"
_CLEAR_LINE = "\x1b[2K"
_MOVE_FMT = "\x1b[{};{}H"


class Style(enum.Enum):
    REGULAR = 0
    HIGHLIGHT = 1


class Surface(Protocol):
    """Anything a widget can draw a run of text onto."""

    def draw_text(self, pos: Vec2, text: str, style: Style) -> None: ...


_BLANK = (" ", Style.REGULAR)


class Screen:
    """Fixed-size grid of cells with differential presentation.

    Wide characters occupy two cells; the second one holds an empty string
    so the row still renders to the right number of columns. Anything drawn
    outside the grid is clipped.
    """

    def __init__(self, columns: int = 80, rows: int = 24) -> None:
        self._columns = columns
        self._rows = rows
        self._cells = self._make_cells()
        self._previous_lines: list[str] = []

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def rows(self) -> int:
        return self._rows

    def _make_cells(self) -> list[list[tuple[str, Style]]]:
        return [[_BLANK] * self._columns for _ in range(self._rows)]

    def resize(self, columns: int, rows: int) -> None:
        """Change the grid size. The next :meth:`present` repaints everything."""
        if columns == self._columns and rows == self._rows:
            return
        logger.debug("Screen resized to %dx%d", columns, rows)
        self._columns = columns
        self._rows = rows
        self._cells = self._make_cells()
        self._previous_lines = []

    def erase(self) -> None:
        for row in self._cells:
            row[:] = [_BLANK] * self._columns

    def draw_text(self, pos: Vec2, text: str, style: Style) -> None:
        if pos.y < 0 or pos.y >= self._rows:
            return

        row = self._cells[pos.y]
        col = pos.x
        for g in split_graphemes(text):
            w = grapheme_width(g)
            if w == 0:
                continue
            if col < 0:
                col += w
                continue
            if col + w > self._columns:
                break
            self._split_wide_neighbours(row, col, w)
            row[col] = (g, style)
            if w == 2:
                row[col + 1] = ("", style)
            col += w

    def _split_wide_neighbours(self, row: list[tuple[str, Style]], col: int, w: int) -> None:
        # Overwriting half of a wide glyph blanks the other half
        if row[col][0] == "" and col > 0:
            row[col - 1] = (" ", row[col - 1][1])
        end = col + w
        if end < self._columns and row[end][0] == "":
            row[end] = (" ", row[end][1])

    def cell(self, row: int, col: int) -> tuple[str, Style]:
        return self._cells[row][col]

    def row_text(self, row: int) -> str:
        """Return the plain text of *row* without any styling."""
        return "".join(text for text, _ in self._cells[row])

    def render_lines(self) -> list[str]:
        """Render every row to a string with reverse-video highlight runs."""
        lines: list[str] = []
        for row in self._cells:
            parts: list[str] = []
            current = Style.REGULAR
            for text, style in row:
                if style is not current:
                    parts.append(_REVERSE_ON if style is Style.HIGHLIGHT else _REVERSE_OFF)
                    current = style
                parts.append(text)
            if current is Style.HIGHLIGHT:
                parts.append(_REVERSE_OFF)
            lines.append("".join(parts))
        return lines

    def present(self, terminal: Terminal) -> int:
        """Write the rows that changed since the last call to *terminal*.

        Returns the number of rows written.
        """
        lines = self.render_lines()
        full = len(self._previous_lines) != len(lines)

        out: list[str] = []
        for y, line in enumerate(lines):
            if not full and self._previous_lines[y] == line:
                continue
            out.append(_MOVE_FMT.format(y + 1, 1) + _CLEAR_LINE + line + _RESET)

        if out:
            terminal.write("".join(out))
        self._previous_lines = lines
        return len(out)
