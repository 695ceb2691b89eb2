#!/usr/bin/env python3
# cmdtree/interface/parser.py
from __future__ import annotations

"""
Statement tokenizer.

Responsibilities:
- Split an expression into ';'-delimited statements.
- Split a statement into words on runs of space/tab.
- Classify words into positional tokens, boolean flags and '-name value' pairs.
- Substitute '$name' words with identifier values before classification.
"""

import re
from collections import deque
from dataclasses import dataclass
from typing import Iterator, Mapping

from cmdtree.helpers import parse_integer

_WORD_SPLIT_RE = re.compile(r"[ \t]+")

STATEMENT_DELIMITER = ";"
IDENT_PREFIX = "$"
FLAG_PREFIX = "-"


@dataclass(frozen=True, slots=True, eq=False)
class Token:
    """
    A single word typed by the user.

    Equality compares the underlying text, so a Token also compares equal to
    a plain string with the same contents.
    """

    text: str
    lenient: bool = False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Token):
            return self.text == other.text
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)

    def __str__(self) -> str:
        return self.text

    def as_int(self) -> int | None:
        """Parse as a signed 64-bit integer ('-5', '0x1F', '-0x10'), or None."""
        parsed = parse_integer(self.text, lenient=self.lenient)
        if parsed is None:
            return None
        magnitude, negative = parsed
        value = (-magnitude if negative else magnitude) & (2**64 - 1)
        return value - 2**64 if value >= 2**63 else value

    def as_uint(self) -> int | None:
        """Parse as an unsigned 64-bit integer; a leading '-' wraps around."""
        parsed = parse_integer(self.text, lenient=self.lenient)
        if parsed is None:
            return None
        magnitude, negative = parsed
        return (-magnitude if negative else magnitude) & (2**64 - 1)


class TokenStream:
    """
    Parallel views over the words of one statement.

    Attributes:
        raw: every (substituted) word in the order typed.
        positional: words that are neither flags nor pair values.
        flags: flag names never followed by a value.
        pairs: flag name -> the value word that followed it.
    """

    def __init__(
        self,
        idents: Mapping[str, int] | None = None,
        *,
        lenient_numbers: bool = False,
    ) -> None:
        self.idents = idents
        self.lenient_numbers = lenient_numbers
        self.raw: deque[Token] = deque()
        self.positional: deque[Token] = deque()
        self.flags: set[str] = set()
        self.pairs: dict[str, Token] = {}
        self._staged_flag = ""

    # ---------------- Building ----------------

    def push(self, word: str) -> None:
        """Consume one word; the empty word flushes a staged flag."""
        if not word:
            self.flush()
            return

        if self.idents is not None and word.startswith(IDENT_PREFIX):
            value = self.idents.get(word[len(IDENT_PREFIX):])
            if value is not None:
                word = str(value)

        token = self._make(word)
        self.raw.append(token)

        if word.startswith(FLAG_PREFIX):
            if self._staged_flag:
                self.flags.add(self._staged_flag)
            self._staged_flag = word
        elif self._staged_flag:
            self.pairs[self._staged_flag] = token
            self._staged_flag = ""
        else:
            self.positional.append(token)

    def flush(self) -> None:
        if self._staged_flag:
            self.flags.add(self._staged_flag)
            self._staged_flag = ""

    def _make(self, word: str) -> Token:
        return Token(word, lenient=self.lenient_numbers)

    # ---------------- Positional access ----------------

    def token_size(self) -> int:
        return len(self.positional)

    def __len__(self) -> int:
        return len(self.positional)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.positional)

    def token_empty(self) -> bool:
        return not self.positional

    @property
    def front(self) -> Token | None:
        return self.positional[0] if self.positional else None

    def pop_token(self) -> Token | None:
        """
        Remove and return the front positional token.

        The same Token object is removed from `raw` as well, so both views
        keep describing the same unconsumed words.
        """
        if not self.positional:
            return None
        token = self.positional.popleft()
        index = next(i for i, item in enumerate(self.raw) if item is token)
        del self.raw[index]
        return token

    def pop_str(self) -> str | None:
        token = self.pop_token()
        return None if token is None else token.text

    def pop_int(self) -> int | None:
        """Consume the front token as a signed integer; untouched on failure."""
        if not self.positional:
            return None
        value = self.positional[0].as_int()
        if value is not None:
            self.pop_token()
        return value

    def pop_uint(self) -> int | None:
        """Consume the front token as an unsigned integer; untouched on failure."""
        if not self.positional:
            return None
        value = self.positional[0].as_uint()
        if value is not None:
            self.pop_token()
        return value

    def contains(self, text: str) -> bool:
        return any(token == text for token in self.positional)

    # ---------------- Flags and pairs ----------------

    def flag(self, name: str) -> bool:
        return name in self.flags

    def pair(self, name: str) -> Token | None:
        return self.pairs.get(name)

    def __repr__(self) -> str:
        pairs = {name: value.text for name, value in self.pairs.items()}
        positional = [token.text for token in self.positional]
        return (
            f"TokenStream(positional={positional!r}, "
            f"flags={sorted(self.flags)!r}, pairs={pairs!r})"
        )


def split_words(text: str) -> list[str]:
    """Split on runs of space/tab, dropping leading and trailing blanks."""
    return [word for word in _WORD_SPLIT_RE.split(text) if word]


def tokenize(
    text: str,
    idents: Mapping[str, int] | None = None,
    *,
    lenient_numbers: bool = False,
) -> TokenStream:
    """
    Build a TokenStream from one statement.

    `idents` enables '$name' substitution; pass None to disable it.
    The number of positional tokens is available as `len(stream)`.
    """
    stream = TokenStream(idents, lenient_numbers=lenient_numbers)
    for word in split_words(text):
        stream.push(word)
    # trailing marker commits a flag left without a value
    stream.push("")
    return stream


def split_statements(expr: str, delimiter: str = STATEMENT_DELIMITER) -> list[str]:
    """Split an expression into trimmed statements, keeping empty ones."""
    return [segment.strip(" \t\r\n") for segment in expr.split(delimiter)]
