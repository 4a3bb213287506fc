"""Single-line text editing state driven one key at a time."""

from __future__ import annotations

from dataclasses import dataclass

from todo.keybindings import KeybindingsManager, get_keybindings
from todo.keys import is_printable


@dataclass
class TextEditState:
    """Text being edited plus the cursor offset into it.

    The cursor always lies in ``[0, len(buffer)]``; a cursor equal to
    ``len(buffer)`` sits on the blank cell after the last character.
    """

    buffer: str = ""
    cursor: int = 0

    @classmethod
    def at_end(cls, text: str) -> TextEditState:
        return cls(buffer=text, cursor=len(text))

    def clamp(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self.buffer)))

    def handle_key(
        self, key: str | None, keybindings: KeybindingsManager | None = None
    ) -> str | None:
        """Apply *key* to the buffer.

        Returns ``None`` when the key was consumed, or the key itself so the
        caller can give it a meaning (committing the edit on enter, for
        instance).
        """
        if key is None:
            return None

        self.clamp()

        if is_printable(key):
            self.buffer = self.buffer[: self.cursor] + key + self.buffer[self.cursor :]
            self.cursor += 1
            return None

        kb = keybindings or get_keybindings()

        if kb.matches(key, "cursorLeft"):
            if self.cursor > 0:
                self.cursor -= 1
            return None

        if kb.matches(key, "cursorRight"):
            if self.cursor < len(self.buffer):
                self.cursor += 1
            return None

        if kb.matches(key, "deleteCharBackward"):
            if self.cursor > 0:
                self.cursor -= 1
                self.buffer = self.buffer[: self.cursor] + self.buffer[self.cursor + 1 :]
            return None

        if kb.matches(key, "deleteCharForward"):
            if self.cursor < len(self.buffer):
                self.buffer = self.buffer[: self.cursor] + self.buffer[self.cursor + 1 :]
            return None

        return key
