#!/usr/bin/env python3
# cmdtree/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

Suggestions are computed for the word under the cursor in the last statement
of the buffer:
- First word: top-level command names and aliases.
- Later words: children of the command the preceding words resolve to.
- Flags and words after an unresolvable path get no suggestions.
"""

from typing import TYPE_CHECKING

from cmdtree.interface.parser import FLAG_PREFIX, split_words

if TYPE_CHECKING:
    from cmdtree.interface.handler import Dispatcher


def _split_current_token(raw_input: str) -> tuple[list[str], str]:
    """
    Return (parts, current_prefix).

    Trailing whitespace starts a new, empty word.
    """
    if not raw_input:
        return [], ""
    parts = split_words(raw_input)
    if raw_input[-1] in " \t":
        parts.append("")
    current_prefix = parts[-1] if parts else ""
    return parts, current_prefix


def current_statement(dispatcher: "Dispatcher", text_before_cursor: str) -> str:
    """The statement being typed: everything after the last delimiter."""
    return text_before_cursor.rsplit(dispatcher.delimiter, 1)[-1].lstrip(" \t")


def suggest(dispatcher: "Dispatcher", text_before_cursor: str) -> list[str]:
    """Produce sorted completion candidates for the word under the cursor."""
    parts, current_prefix = _split_current_token(
        current_statement(dispatcher, text_before_cursor))
    if current_prefix.startswith(FLAG_PREFIX):
        return []

    words = [w for w in parts[:-1] if not w.startswith(FLAG_PREFIX)]
    if not words:
        universe = [c.name for c in dispatcher.commands] + dispatcher.aliases.names()
        return sorted({w for w in universe if w.startswith(current_prefix)})

    node = dispatcher.aliases.find(words[0])
    if node is not None:
        node = dispatcher.lookup(words[1:], start=node)
    else:
        node = dispatcher.lookup(words)
    if node is None:
        return []
    return sorted(c.name for c in node.children if c.name.startswith(current_prefix))
