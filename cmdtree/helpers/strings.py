#!/usr/bin/env python3
# cmdtree/helpers/strings.py
from __future__ import annotations

"""
String matching helpers used by command resolution.

Provides:
- prefix_score: rank a command name against a typed (possibly partial) word.
- edit_distance: Levenshtein distance for "did you mean" suggestions.
- parse_integer: decimal / 0x-hex scanner behind numeric token accessors.
"""

# Exact match outranks any prefix length.
MATCH_EXACT = 2**31 - 1
MATCH_NONE = -1

_UINT64_MASK = 2**64 - 1
_HEX_DIGITS = "0123456789abcdefABCDEF"


def prefix_score(name: str, sub: str) -> int:
    """
    Score how well `sub` matches the start of `name`.

    Returns:
        MATCH_EXACT when both strings are equal,
        len(sub) when `sub` is a non-empty proper prefix of `name`,
        MATCH_NONE otherwise (mismatch, `sub` too long, or `sub` empty).
    """
    if sub == name:
        return MATCH_EXACT
    if not sub or len(sub) > len(name):
        return MATCH_NONE
    return len(sub) if name.startswith(sub) else MATCH_NONE


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between `a` and `b` (single rolling column)."""
    if len(a) < len(b):
        a, b = b, a
    column = list(range(len(b) + 1))
    for x, ch_a in enumerate(a, start=1):
        last_diag, column[0] = column[0], x
        for y, ch_b in enumerate(b, start=1):
            old_diag = column[y]
            column[y] = min(
                column[y] + 1,
                column[y - 1] + 1,
                last_diag + (ch_a != ch_b),
            )
            last_diag = old_diag
    return column[len(b)]


def parse_integer(text: str, *, lenient: bool = False) -> tuple[int, bool] | None:
    """
    Scan `text` as an optionally negative decimal or `0x` hex integer.

    Returns (magnitude, negative) with the magnitude wrapped to 64 bits, or
    None when the text is not a number. In lenient mode a space ends the
    number and whatever follows it is ignored. Words produced by the
    tokenizer never contain spaces, so this only matters for text handed to
    Token or parse_integer directly.
    """
    if lenient:
        text = text.split(" ", 1)[0]

    negative = text.startswith("-")
    if negative:
        text = text[1:]

    base = 10
    if text.startswith("0x"):
        base = 16
        text = text[2:]

    if not text:
        return None
    if base == 16:
        if any(ch not in _HEX_DIGITS for ch in text):
            return None
    elif not all("0" <= ch <= "9" for ch in text):
        return None

    return int(text, base) & _UINT64_MASK, negative
