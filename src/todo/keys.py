"""Keyboard input parsing and matching.

A key event is the raw text of one complete terminal input sequence, as
split off by :class:`todo.stdin_buffer.StdinBuffer`. :func:`parse_key` gives
it a name such as ``"j"``, ``"K"``, ``"enter"``, ``"ctrl+a"`` or
``"shift+up"``; :func:`matches_key` checks raw input against such a name.
"""

from __future__ import annotations

KeyId = str


class Key:
    """Names of the non-character keys, plus modifier helpers."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return "ctrl+" + key

    @staticmethod
    def shift(key: str) -> str:
        return "shift+" + key

    @staticmethod
    def alt(key: str) -> str:
        return "alt+" + key


# ---------------------------------------------------------------------------
# Escape sequence tables
# ---------------------------------------------------------------------------

# Final byte of ``CSI <final>`` and ``SS3 <final>``
_CURSOR_FINALS: dict[str, str] = {
    "A": Key.up,
    "B": Key.down,
    "C": Key.right,
    "D": Key.left,
    "H": Key.home,
    "F": Key.end,
}
_SS3_ONLY_FINALS: dict[str, str] = {"P": "f1", "Q": "f2", "R": "f3", "S": "f4"}

# Number in ``CSI <n> ~``
_TILDE_CODES: dict[str, str] = {
    "1": Key.home,
    "2": Key.insert,
    "3": Key.delete,
    "4": Key.end,
    "5": Key.page_up,
    "6": Key.page_down,
    "15": "f5",
    "17": "f6",
    "18": "f7",
    "19": "f8",
    "20": "f9",
    "21": "f10",
    "23": "f11",
    "24": "f12",
}

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    **{f"\x1b[{final}": name for final, name in _CURSOR_FINALS.items()},
    **{f"\x1bO{final}": name for final, name in _CURSOR_FINALS.items()},
    **{f"\x1bO{final}": name for final, name in _SS3_ONLY_FINALS.items()},
    **{f"\x1b[{code}~": name for code, name in _TILDE_CODES.items()},
}

# xterm modifier parameter -> prefix, as in ``CSI 1 ; 5 C`` for ctrl+right
_MODIFIERS: dict[str, str] = {
    "2": "shift+",
    "3": "alt+",
    "4": "shift+alt+",
    "5": "ctrl+",
    "6": "ctrl+shift+",
    "7": "ctrl+alt+",
    "8": "ctrl+shift+alt+",
}

_SINGLE_CHAR_KEYS: dict[str, str] = {
    "\x1b": Key.escape,
    "\r": Key.enter,
    "\n": Key.enter,
    "\t": Key.tab,
    " ": Key.space,
    "\x7f": Key.backspace,
    "\x08": Key.backspace,
    "\x00": Key.ctrl(Key.space),
}


def is_printable(data: str | None) -> bool:
    """``True`` for exactly one printable ASCII character (32-126)."""
    return data is not None and len(data) == 1 and " " <= data <= "~"


def _parse_modified_cursor_key(data: str) -> str | None:
    # CSI 1 ; <mod> <final>
    if len(data) != 6 or not data.startswith("\x1b[1;"):
        return None
    prefix = _MODIFIERS.get(data[4])
    name = _CURSOR_FINALS.get(data[5])
    if prefix is None or name is None:
        return None
    return prefix + name


def _parse_alt_key(ch: str) -> str | None:
    match ch:
        case "\r" | "\n":
            return Key.alt(Key.enter)
        case "\x7f" | "\x08":
            return Key.alt(Key.backspace)
        case _ if ch.isprintable():
            return Key.alt(ch)
    return None


def parse_key(data: str | None) -> KeyId | None:
    """Name the key in *data*, or return ``None`` if it is not recognised.

    Letters keep their case, so ``"K"`` and ``"k"`` are different keys.
    """
    if not data:
        return None

    name = LEGACY_KEY_SEQUENCES.get(data) or _SINGLE_CHAR_KEYS.get(data)
    if name is not None:
        return name
    if data == "\x1b[Z":
        return Key.shift(Key.tab)

    if data.startswith("\x1b["):
        return _parse_modified_cursor_key(data)

    if len(data) == 2 and data[0] == "\x1b":
        return _parse_alt_key(data[1])

    if len(data) != 1:
        return None

    code = ord(data)
    if 1 <= code <= 26:
        return Key.ctrl(chr(code + 96))
    if data.isprintable():
        return data
    return None


def matches_key(data: str | None, key_id: KeyId) -> bool:
    """Check whether raw input *data* is the key named *key_id*."""
    parsed = parse_key(data)
    if parsed is None:
        return False
    # A literal " " in a binding means the space key
    return parsed == key_id or (parsed == Key.space and key_id == " ")
