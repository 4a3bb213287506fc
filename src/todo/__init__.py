"""todo: a terminal TODO/DONE list manager built on an immediate-mode layout."""

import logging

from todo.app import App
from todo.config import Config, load_config
from todo.edit import TextEditState
from todo.errors import (
    InvalidStateError,
    MalformedLineError,
    TodoError,
    UndecodableFileError,
)
from todo.keybindings import (
    DEFAULT_KEYBINDINGS,
    Action,
    KeybindingsManager,
    get_keybindings,
    set_keybindings,
)
from todo.keys import Key, KeyId, is_printable, matches_key, parse_key
from todo.layout import Layout, LayoutKind, LayoutStack
from todo.lists import ListModel, Panel, TaskManager
from todo.screen import Screen, Style, Surface
from todo.storage import load_items, load_state, save_items
from todo.terminal import ProcessTerminal, Terminal
from todo.vec import Vec2

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Frame controller
    "App",
    # Config
    "Config",
    "load_config",
    # Editing
    "TextEditState",
    # Errors
    "InvalidStateError",
    "MalformedLineError",
    "TodoError",
    "UndecodableFileError",
    # Keybindings
    "DEFAULT_KEYBINDINGS",
    "Action",
    "KeybindingsManager",
    "get_keybindings",
    "set_keybindings",
    # Keys
    "Key",
    "KeyId",
    "is_printable",
    "matches_key",
    "parse_key",
    # Layout
    "Layout",
    "LayoutKind",
    "LayoutStack",
    # Lists
    "ListModel",
    "Panel",
    "TaskManager",
    # Screen
    "Screen",
    "Style",
    "Surface",
    # Storage
    "load_items",
    "load_state",
    "save_items",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Vectors
    "Vec2",
]
