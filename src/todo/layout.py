"""Immediate-mode layout: a stack of nested flow containers rebuilt every frame.

Nothing is retained between frames. Each widget call draws itself at the
position the innermost layout hands out and reports its size back, and
closing a layout folds its accumulated size into its parent::

    ui.begin(Vec2(0, 0), LayoutKind.VERT)
    ui.label("header", Style.REGULAR)
    ui.begin_layout(LayoutKind.HORZ)
    ui.label_fixed_width("left", 20, Style.REGULAR)
    ui.label_fixed_width("right", 20, Style.HIGHLIGHT)
    ui.end_layout()
    ui.end()
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from todo.edit import TextEditState
from todo.errors import InvalidStateError
from todo.screen import Style, Surface
from todo.utils import visible_width
from todo.vec import Vec2


class LayoutKind(enum.Enum):
    HORZ = Vec2(1, 0)
    VERT = Vec2(0, 1)

    @property
    def direction(self) -> Vec2:
        return self.value


@dataclass
class Layout:
    kind: LayoutKind
    pos: Vec2
    size: Vec2 = field(default_factory=Vec2)

    def available_pos(self) -> Vec2:
        return self.pos + self.size * self.kind.direction

    def add_widget(self, size: Vec2) -> None:
        if self.kind is LayoutKind.HORZ:
            self.size = Vec2(self.size.x + size.x, max(self.size.y, size.y))
        else:
            self.size = Vec2(max(self.size.x, size.x), self.size.y + size.y)


class LayoutStack:
    """The per-frame layout call stack.

    The bottom entry is the root pushed by :meth:`begin`; the top entry is
    where the next widget goes.
    """

    def __init__(self, surface: Surface) -> None:
        self.surface = surface
        self._layouts: list[Layout] = []

    @property
    def depth(self) -> int:
        return len(self._layouts)

    def _top(self, what: str) -> Layout:
        if not self._layouts:
            raise InvalidStateError(f"{what} outside of any layout")
        return self._layouts[-1]

    def begin(self, pos: Vec2, kind: LayoutKind) -> None:
        if self._layouts:
            raise InvalidStateError("begin() called while a frame is still open")
        self._layouts.append(Layout(kind, pos))

    def begin_layout(self, kind: LayoutKind) -> None:
        top = self._top("begin_layout()")
        self._layouts.append(Layout(kind, top.available_pos()))

    def end_layout(self) -> None:
        if len(self._layouts) < 2:
            raise InvalidStateError("end_layout() without a matching begin_layout()")
        layout = self._layouts.pop()
        self._layouts[-1].add_widget(layout.size)

    def end(self) -> Vec2:
        """Close the frame and return the total size it occupied."""
        if len(self._layouts) != 1:
            raise InvalidStateError(
                f"end() expects only the root layout, found {len(self._layouts)}"
            )
        return self._layouts.pop().size

    # -- widgets -----------------------------------------------------------

    def label_fixed_width(self, text: str, width: int, style: Style) -> None:
        # Text wider than ``width`` is drawn in full and overflows into the
        # neighbouring widget.
        layout = self._top("label_fixed_width()")
        self.surface.draw_text(layout.available_pos(), text, style)
        layout.add_widget(Vec2(width, 1))

    def label(self, text: str, style: Style) -> None:
        self.label_fixed_width(text, visible_width(text), style)

    def edit_field(self, state: TextEditState, width: int) -> None:
        """Draw *state* as a one-line text field with a highlighted cursor cell."""
        layout = self._top("edit_field()")
        pos = layout.available_pos()
        state.clamp()

        self.surface.draw_text(pos, state.buffer, Style.REGULAR)
        under_cursor = state.buffer[state.cursor : state.cursor + 1] or " "
        cursor_pos = pos + Vec2(visible_width(state.buffer[: state.cursor]), 0)
        self.surface.draw_text(cursor_pos, under_cursor, Style.HIGHLIGHT)

        layout.add_widget(Vec2(width, 1))
