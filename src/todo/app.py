"""Frame controller: one key in, one full frame out, until quit.

Every iteration of :meth:`App.run` polls the interrupt flag, polls at most
one key, routes it through the handler chain and redraws the whole screen
through a fresh layout pass.

Key routing is a fixed chain of handlers. Each receives the key (or
``None`` once something consumed it) and hands back whatever it did not
use, so the next handler gets a chance::

    edit field -> list commands -> panel toggle -> quit
"""

from __future__ import annotations

import logging
from typing import Callable

from todo import interrupt
from todo.config import Config
from todo.edit import TextEditState
from todo.keybindings import KeybindingsManager, get_keybindings
from todo.layout import LayoutKind, LayoutStack
from todo.lists import ListModel, Panel, TaskManager
from todo.screen import Screen, Style
from todo.terminal import Terminal
from todo.utils import visible_width
from todo.vec import Vec2

logger = logging.getLogger(__name__)

TODO_PREFIX = "- [ ] "
DONE_PREFIX = "- [x] "

KeyHandler = Callable[[str], str | None]


class App:
    """The todo/done TUI bound to a terminal."""

    def __init__(
        self,
        terminal: Terminal,
        tasks: TaskManager,
        *,
        notification: str = "",
        config: Config | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        self.terminal = terminal
        self.tasks = tasks
        self.notification = notification
        self.config = config or Config()
        self.keybindings = keybindings or get_keybindings()

        # Set while the focused item is being renamed
        self.editing: TextEditState | None = None
        self.quit = False

        self.screen = Screen(terminal.columns, terminal.rows)
        self.ui = LayoutStack(self.screen)

        self._handlers: tuple[KeyHandler, ...] = (
            self._handle_edit,
            self._handle_list,
            self._handle_panel,
            self._handle_quit,
        )

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Run frames until quit or Ctrl+C, restoring the terminal afterwards."""
        try:
            self.terminal.start()
            interrupt.install()
            self.render()
            while not self.quit:
                self.step()
        finally:
            self.terminal.stop()
            interrupt.uninstall()

        if self.editing is not None:
            self.commit_edit()

    def step(self) -> None:
        """Run one frame."""
        if interrupt.poll():
            logger.info("Interrupted, quitting")
            self.quit = True
            return

        key = self.terminal.poll_key(self.config.frame_timeout_ms / 1000)
        if key is not None:
            self.notification = ""
            self.dispatch(key)

        self.render()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def dispatch(self, key: str) -> str | None:
        """Offer *key* to each handler in turn; return it if nobody took it."""
        remaining = key
        for handler in self._handlers:
            leftover = handler(remaining)
            if leftover is None:
                return None
            remaining = leftover
        logger.debug("Unhandled key %r", key)
        return remaining

    def _handle_edit(self, key: str) -> str | None:
        if self.editing is None:
            return key

        leftover = self.editing.handle_key(key, self.keybindings)
        if leftover is not None and self.keybindings.matches(leftover, "editCommit"):
            self.commit_edit()
        # Everything else is swallowed while editing
        return None

    def _handle_list(self, key: str) -> str | None:
        kb = self.keybindings
        tasks = self.tasks
        active = tasks.active()

        if kb.matches(key, "up"):
            active.up()
        elif kb.matches(key, "down"):
            active.down()
        elif kb.matches(key, "first"):
            active.first()
        elif kb.matches(key, "last"):
            active.last()
        elif kb.matches(key, "dragUp"):
            active.drag_up()
        elif kb.matches(key, "dragDown"):
            active.drag_down()
        elif kb.matches(key, "rename"):
            self.begin_edit(active)
        elif kb.matches(key, "transfer"):
            if tasks.transfer() is not None:
                self.notification = "DONE!" if tasks.panel is Panel.TODO else "No, not done yet..."
        elif kb.matches(key, "delete") and tasks.panel is Panel.DONE:
            item = active.delete()
            if item is not None:
                logger.info("Deleted %r", item)
                self.notification = "Into The Abyss!"
        else:
            return key
        return None

    def _handle_panel(self, key: str) -> str | None:
        if self.keybindings.matches(key, "togglePanel"):
            self.tasks.toggle_panel()
            return None
        return key

    def _handle_quit(self, key: str) -> str | None:
        if self.keybindings.matches(key, "quit"):
            self.quit = True
            return None
        return key

    # ------------------------------------------------------------------
    # Edit mode
    # ------------------------------------------------------------------

    def begin_edit(self, lst: ListModel) -> None:
        current = lst.current()
        if current is None:
            return
        self.editing = TextEditState.at_end(current)

    def commit_edit(self) -> None:
        if self.editing is None:
            return
        active = self.tasks.active()
        logger.info("Renamed %r to %r", active.current(), self.editing.buffer)
        active.rename(self.editing.buffer)
        self.editing = None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> Vec2:
        """Lay out and draw a full frame, then push it to the terminal."""
        width = self.terminal.columns
        self.screen.resize(width, self.terminal.rows)
        self.screen.erase()

        ui = self.ui
        ui.begin(Vec2(0, 0), LayoutKind.VERT)
        ui.label_fixed_width(self.notification, width, Style.REGULAR)
        ui.label_fixed_width("", width, Style.REGULAR)

        ui.begin_layout(LayoutKind.HORZ)
        self._render_panel(Panel.TODO, "TODO", TODO_PREFIX, width // 2)
        self._render_panel(Panel.DONE, "DONE", DONE_PREFIX, width // 2)
        ui.end_layout()
        size = ui.end()

        self.screen.present(self.terminal)
        return size

    def _render_panel(self, panel: Panel, title: str, prefix: str, width: int) -> None:
        ui = self.ui
        lst = self.tasks.todos if panel is Panel.TODO else self.tasks.dones
        active = self.tasks.panel is panel

        ui.begin_layout(LayoutKind.VERT)
        ui.label_fixed_width(title, width, Style.HIGHLIGHT if active else Style.REGULAR)

        for index, item in enumerate(lst.items):
            focused = active and index == lst.cursor
            if focused and self.editing is not None:
                ui.begin_layout(LayoutKind.HORZ)
                ui.label(prefix, Style.REGULAR)
                ui.edit_field(self.editing, width - visible_width(prefix))
                ui.end_layout()
            else:
                ui.label_fixed_width(
                    prefix + item, width, Style.HIGHLIGHT if focused else Style.REGULAR
                )

        ui.end_layout()
