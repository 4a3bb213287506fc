"""Tests for todo.keybindings -- action to key resolution."""

from __future__ import annotations

import logging

from todo.keybindings import (
    ACTIONS,
    DEFAULT_KEYBINDINGS,
    KeybindingsManager,
    get_keybindings,
    set_keybindings,
)
from todo.keys import Key


class TestDefaults:
    def test_every_action_has_a_default(self):
        assert set(DEFAULT_KEYBINDINGS) == set(ACTIONS)

    def test_navigation_defaults(self):
        kb = KeybindingsManager()
        assert kb.matches("k", "up")
        assert kb.matches("\x1b[A", "up")
        assert kb.matches("j", "down")
        assert kb.matches("g", "first")
        assert kb.matches("G", "last")

    def test_drag_is_shifted_navigation(self):
        kb = KeybindingsManager()
        assert kb.matches("K", "dragUp")
        assert kb.matches("J", "dragDown")
        assert not kb.matches("K", "up")
        assert not kb.matches("k", "dragUp")

    def test_enter_transfers_and_commits(self):
        kb = KeybindingsManager()
        assert kb.matches("\r", "transfer")
        assert kb.matches("\r", "editCommit")

    def test_application_defaults(self):
        kb = KeybindingsManager()
        assert kb.matches("\t", "togglePanel")
        assert kb.matches("q", "quit")
        assert kb.matches("d", "delete")
        assert kb.matches("r", "rename")

    def test_get_keys(self):
        kb = KeybindingsManager()
        assert kb.get_keys("up") == ["k", "up"]
        assert kb.get_keys("quit") == ["q"]

    def test_defaults_are_written_with_key_names(self):
        assert DEFAULT_KEYBINDINGS["up"] == ["k", Key.up]
        assert DEFAULT_KEYBINDINGS["last"] == ["G", Key.end]
        assert DEFAULT_KEYBINDINGS["transfer"] == Key.enter
        assert DEFAULT_KEYBINDINGS["deleteCharForward"] == Key.delete


class TestOverrides:
    def test_override_replaces_defaults(self):
        kb = KeybindingsManager({"quit": ["x", "ctrl+q"]})
        assert kb.matches("x", "quit")
        assert kb.matches("\x11", "quit")
        assert not kb.matches("q", "quit")

    def test_single_key_override(self):
        kb = KeybindingsManager({"up": "w"})
        assert kb.get_keys("up") == ["w"]
        # Other actions keep their defaults
        assert kb.matches("j", "down")

    def test_empty_list_unbinds(self):
        kb = KeybindingsManager({"delete": []})
        assert not kb.matches("d", "delete")

    def test_unknown_action_is_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="todo.keybindings"):
            kb = KeybindingsManager({"explode": "x"})
        assert "explode" in caplog.text
        assert kb.get_keys("explode") == []

    def test_set_config_rebuilds_from_defaults(self):
        kb = KeybindingsManager({"quit": "x"})
        kb.set_config({"up": "w"})
        assert kb.matches("q", "quit")
        assert kb.matches("w", "up")


class TestGlobalManager:
    def test_set_and_get(self):
        manager = KeybindingsManager({"quit": "x"})
        set_keybindings(manager)
        assert get_keybindings() is manager

    def test_get_returns_same_instance(self):
        assert get_keybindings() is get_keybindings()
