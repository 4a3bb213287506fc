"""Keybindings manager: maps application actions to key identifiers."""

from __future__ import annotations

import logging
from typing import Literal, get_args

from todo.keys import Key, KeyId, matches_key

logger = logging.getLogger(__name__)

Action = Literal[
    # List navigation
    "up",
    "down",
    "first",
    "last",
    # List mutation
    "dragUp",
    "dragDown",
    "transfer",
    "delete",
    "rename",
    # Application
    "togglePanel",
    "quit",
    # Text editing
    "cursorLeft",
    "cursorRight",
    "deleteCharBackward",
    "deleteCharForward",
    "editCommit",
]

ACTIONS: tuple[str, ...] = get_args(Action)

KeybindingsConfig = dict[Action, KeyId | list[KeyId]]

DEFAULT_KEYBINDINGS: dict[Action, KeyId | list[KeyId]] = {
    # List navigation
    "up": ["k", Key.up],
    "down": ["j", Key.down],
    "first": ["g", Key.home],
    "last": ["G", Key.end],
    # List mutation
    "dragUp": "K",
    "dragDown": "J",
    "transfer": Key.enter,
    "delete": "d",
    "rename": "r",
    # Application
    "togglePanel": Key.tab,
    "quit": "q",
    # Text editing
    "cursorLeft": Key.left,
    "cursorRight": Key.right,
    "deleteCharBackward": Key.backspace,
    "deleteCharForward": Key.delete,
    "editCommit": Key.enter,
}


class KeybindingsManager:
    """Resolves actions to keys, with per-action overrides from config."""

    def __init__(self, config: KeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[Action, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: KeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for action, keys in DEFAULT_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        for action, keys in config.items():
            if action not in ACTIONS:
                logger.warning("Ignoring keybinding for unknown action %r", action)
                continue
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def matches(self, data: str | None, action: Action) -> bool:
        """Check if input matches a specific action."""
        keys = self._action_to_keys.get(action)
        if not keys:
            return False
        return any(matches_key(data, key) for key in keys)

    def get_keys(self, action: Action) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: KeybindingsConfig) -> None:
        self._build_maps(config)


_global_keybindings: KeybindingsManager | None = None


def get_keybindings() -> KeybindingsManager:
    global _global_keybindings
    if _global_keybindings is None:
        _global_keybindings = KeybindingsManager()
    return _global_keybindings


def set_keybindings(manager: KeybindingsManager) -> None:
    global _global_keybindings
    _global_keybindings = manager
