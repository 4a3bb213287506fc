"""Tests for the text edit widget state machine."""

from __future__ import annotations

from todo.edit import TextEditState
from todo.keybindings import KeybindingsManager

# Raw escape codes for key sequences
KEY_LEFT = "\x1b[D"
KEY_RIGHT = "\x1b[C"
KEY_UP = "\x1b[A"
KEY_ENTER = "\r"
KEY_TAB = "\t"
KEY_BACKSPACE = "\x7f"
KEY_DELETE = "\x1b[3~"


def type_text(state: TextEditState, text: str) -> None:
    for ch in text:
        assert state.handle_key(ch) is None


class TestTextEditInsertion:
    def test_insert_into_empty(self) -> None:
        state = TextEditState()
        type_text(state, "hi")
        assert state.buffer == "hi"
        assert state.cursor == 2

    def test_insert_at_cursor(self) -> None:
        state = TextEditState("ac", 1)
        state.handle_key("b")
        assert state.buffer == "abc"
        assert state.cursor == 2

    def test_space_and_tilde_are_printable(self) -> None:
        state = TextEditState()
        type_text(state, " ~")
        assert state.buffer == " ~"

    def test_non_ascii_is_not_inserted(self) -> None:
        state = TextEditState("a", 1)
        assert state.handle_key("é") == "é"
        assert state.buffer == "a"

    def test_at_end_places_cursor_after_text(self) -> None:
        state = TextEditState.at_end("Buy milk")
        assert state.cursor == 8


class TestTextEditCursor:
    def test_left_floors_at_zero(self) -> None:
        state = TextEditState("ab", 1)
        state.handle_key(KEY_LEFT)
        state.handle_key(KEY_LEFT)
        assert state.cursor == 0

    def test_right_caps_at_length(self) -> None:
        state = TextEditState("ab", 1)
        state.handle_key(KEY_RIGHT)
        state.handle_key(KEY_RIGHT)
        assert state.cursor == 2

    def test_cursor_is_clamped_before_each_key(self) -> None:
        state = TextEditState("abc", 42)
        state.handle_key("d")
        assert state.buffer == "abcd"
        assert state.cursor == 4


class TestTextEditDeletion:
    def test_backspace_removes_char_before_cursor(self) -> None:
        state = TextEditState("abc", 2)
        state.handle_key(KEY_BACKSPACE)
        assert state.buffer == "ac"
        assert state.cursor == 1

    def test_backspace_at_start_does_nothing(self) -> None:
        state = TextEditState("abc", 0)
        assert state.handle_key(KEY_BACKSPACE) is None
        assert state.buffer == "abc"
        assert state.cursor == 0

    def test_ctrl_h_is_backspace(self) -> None:
        state = TextEditState.at_end("abc")
        state.handle_key("\x08")
        assert state.buffer == "ab"

    def test_delete_removes_char_at_cursor(self) -> None:
        state = TextEditState("abc", 1)
        state.handle_key(KEY_DELETE)
        assert state.buffer == "ac"
        assert state.cursor == 1

    def test_delete_at_end_does_nothing(self) -> None:
        state = TextEditState.at_end("abc")
        state.handle_key(KEY_DELETE)
        assert state.buffer == "abc"

    def test_typing_then_backspacing_restores_original(self) -> None:
        state = TextEditState.at_end("Buy milk")
        type_text(state, " and eggs")
        for _ in range(len(" and eggs")):
            state.handle_key(KEY_BACKSPACE)
        assert state.buffer == "Buy milk"
        assert state.cursor == 8


class TestTextEditUnconsumed:
    def test_enter_is_returned(self) -> None:
        state = TextEditState("abc", 3)
        assert state.handle_key(KEY_ENTER) == KEY_ENTER
        assert state.buffer == "abc"

    def test_other_keys_are_returned(self) -> None:
        state = TextEditState("abc", 1)
        assert state.handle_key(KEY_TAB) == KEY_TAB
        assert state.handle_key(KEY_UP) == KEY_UP
        assert state.handle_key("\x01") == "\x01"
        assert state.buffer == "abc"
        assert state.cursor == 1

    def test_none_is_a_no_op(self) -> None:
        state = TextEditState("abc", 1)
        assert state.handle_key(None) is None
        assert state.buffer == "abc"


class TestTextEditKeybindings:
    def test_custom_cursor_keys(self) -> None:
        kb = KeybindingsManager({"cursorLeft": "ctrl+b", "cursorRight": "ctrl+f"})
        state = TextEditState.at_end("abc")
        state.handle_key("\x02", kb)
        assert state.cursor == 2
        state.handle_key("\x06", kb)
        assert state.cursor == 3
        # The default binding no longer applies
        assert state.handle_key(KEY_LEFT, kb) == KEY_LEFT
