"""Split raw terminal input into one string per key.

A single read can hold several keys (``"jjk"``) or stop half way through an
escape sequence (``ESC [`` now, ``A`` on the next read). :class:`StdinBuffer`
returns the complete sequences and keeps an unfinished tail until the rest
arrives. The caller decides when to stop waiting and calls
:meth:`StdinBuffer.flush`; that is how a lone ESC press is told apart from
the start of an arrow key.
"""

from __future__ import annotations

ESC = "\x1b"
BEL = "\x07"


def escape_length(data: str) -> int | None:
    """Length of the escape sequence *data* starts with.

    *data* must start with ESC. Returns ``None`` while the sequence is still
    incomplete.
    """
    if len(data) < 2:
        return None

    intro = data[1]
    match intro:
        case "[":
            # CSI: parameters, then one final byte in 0x40-0x7E
            for i in range(2, len(data)):
                if "@" <= data[i] <= "~":
                    return i + 1
            return None
        case "]" | "P" | "_":
            # OSC, DCS, APC: up to ST; OSC may also end at BEL
            for i in range(2, len(data)):
                if intro == "]" and data[i] == BEL:
                    return i + 1
                if data[i] == "\\" and data[i - 1] == ESC:
                    return i + 1
            return None
        case "O":
            # SS3: exactly one more character
            return 3 if len(data) >= 3 else None
        case _:
            # ESC plus one character: alt/meta
            return 2


def split_sequences(data: str) -> tuple[list[str], str]:
    """Return the complete sequences in *data* and the incomplete remainder."""
    sequences: list[str] = []
    pos = 0
    while pos < len(data):
        if data[pos] != ESC:
            sequences.append(data[pos])
            pos += 1
            continue
        length = escape_length(data[pos:])
        if length is None:
            return sequences, data[pos:]
        sequences.append(data[pos : pos + length])
        pos += length
    return sequences, ""


class StdinBuffer:
    """Holds back a partial escape sequence between reads."""

    def __init__(self) -> None:
        self._tail = ""

    @property
    def pending(self) -> bool:
        """``True`` while an unfinished escape sequence is being held."""
        return bool(self._tail)

    def process(self, data: str) -> list[str]:
        sequences, self._tail = split_sequences(self._tail + data)
        return sequences

    def flush(self) -> list[str]:
        """Stop waiting and hand back the held tail as a single sequence."""
        tail, self._tail = self._tail, ""
        return [tail] if tail else []

    def clear(self) -> None:
        self._tail = ""
