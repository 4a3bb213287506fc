"""Task lists: a cursor over an ordered list of titles, and the todo/done pair.

None of the operations raise. Boundary conditions (an empty list, the cursor
on the first or last item) make the operation a no-op or reclamp the cursor.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class ListModel:
    """Ordered items plus the index of the focused one.

    ``cursor`` is ``0`` for an empty list and a valid index otherwise.
    """

    items: list[str] = field(default_factory=list)
    cursor: int = 0

    def __len__(self) -> int:
        return len(self.items)

    def current(self) -> str | None:
        if self.cursor < len(self.items):
            return self.items[self.cursor]
        return None

    # -- navigation --------------------------------------------------------

    def up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def down(self) -> None:
        if self.cursor + 1 < len(self.items):
            self.cursor += 1

    def first(self) -> None:
        if self.items:
            self.cursor = 0

    def last(self) -> None:
        if self.items:
            self.cursor = len(self.items) - 1

    # -- mutation ----------------------------------------------------------

    def drag_up(self) -> None:
        if 0 < self.cursor < len(self.items):
            i = self.cursor
            self.items[i - 1], self.items[i] = self.items[i], self.items[i - 1]
            self.cursor -= 1

    def drag_down(self) -> None:
        if self.cursor + 1 < len(self.items):
            i = self.cursor
            self.items[i], self.items[i + 1] = self.items[i + 1], self.items[i]
            self.cursor += 1

    def rename(self, text: str) -> None:
        if self.cursor < len(self.items):
            self.items[self.cursor] = text

    def delete(self) -> str | None:
        """Remove the focused item and return it."""
        if self.cursor >= len(self.items):
            return None
        item = self.items.pop(self.cursor)
        self._reclamp()
        return item

    def transfer(self, other: ListModel) -> str | None:
        """Move the focused item to the end of *other* and return it."""
        item = self.delete()
        if item is not None:
            other.items.append(item)
        return item

    def _reclamp(self) -> None:
        if self.items and self.cursor >= len(self.items):
            self.cursor = len(self.items) - 1
        elif not self.items:
            self.cursor = 0


class Panel(enum.Enum):
    TODO = "todo"
    DONE = "done"

    def toggle(self) -> Panel:
        match self:
            case Panel.TODO:
                return Panel.DONE
            case Panel.DONE:
                return Panel.TODO


@dataclass
class TaskManager:
    """The todo and done lists plus which of them has focus."""

    todos: ListModel = field(default_factory=ListModel)
    dones: ListModel = field(default_factory=ListModel)
    panel: Panel = Panel.TODO

    @classmethod
    def from_items(cls, todos: list[str], dones: list[str]) -> TaskManager:
        return cls(todos=ListModel(list(todos)), dones=ListModel(list(dones)))

    def active(self) -> ListModel:
        return self.todos if self.panel is Panel.TODO else self.dones

    def inactive(self) -> ListModel:
        return self.dones if self.panel is Panel.TODO else self.todos

    def toggle_panel(self) -> None:
        self.panel = self.panel.toggle()

    def transfer(self) -> str | None:
        """Move the focused item of the active list to the other list."""
        item = self.active().transfer(self.inactive())
        if item is not None:
            logger.info("Moved %r from %s to %s", item, self.panel.value, self.panel.toggle().value)
        return item
