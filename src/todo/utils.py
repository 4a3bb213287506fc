"""How many terminal cells a piece of text takes up.

Text is measured per grapheme cluster (what the user sees as one character),
so an accented letter built from two code points is one cell and most emoji
sequences are two.
"""

from __future__ import annotations

import functools
import unicodedata

import grapheme
import wcwidth

_VS16 = 0xFE0F
_ZWJ = 0x200D
_SKIN_TONES = range(0x1F3FB, 0x1F400)
_REGIONAL_INDICATORS = range(0x1F1E6, 0x1F200)


def split_graphemes(text: str) -> list[str]:
    """Split *text* into user-perceived characters."""
    return list(grapheme.graphemes(text))


def _is_control(cp: int) -> bool:
    return cp < 0x20 or 0x7F <= cp <= 0x9F


def _is_emoji_cluster(g: str) -> bool:
    for ch in g:
        cp = ord(ch)
        if cp in (_VS16, _ZWJ) or cp in _SKIN_TONES or cp in _REGIONAL_INDICATORS:
            return True
    lead = ord(g[0])
    # Pictographs, and the misc symbols / dingbats blocks
    return lead >= 0x1F000 or 0x2600 <= lead <= 0x27BF


def grapheme_width(g: str) -> int:
    """Cell width of one grapheme cluster: 0, 1 or 2."""
    if not g:
        return 0
    if len(g) == 1:
        return 0 if _is_control(ord(g)) else max(wcwidth.wcwidth(g), 0)
    if _is_emoji_cluster(g):
        return 2
    if unicodedata.category(g[0]) in ("Mn", "Me", "Mc", "Cf"):
        return 0
    return max(wcwidth.wcwidth(g[0]), 0)


@functools.lru_cache(maxsize=512)
def _cluster_width(text: str) -> int:
    return sum(grapheme_width(g) for g in grapheme.graphemes(text))


def visible_width(text: str) -> int:
    """Number of terminal cells *text* occupies."""
    if text.isascii() and text.isprintable():
        return len(text)
    return _cluster_width(text)
