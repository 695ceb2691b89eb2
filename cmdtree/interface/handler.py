#!/usr/bin/env python3
# cmdtree/interface/handler.py
from __future__ import annotations

"""
Command dispatch.

The Dispatcher owns the command tree, the alias and identifier tables and the
input history, and turns a line of user text into a call on one command node:

  expr --split ';'--> statements --tokenize--> TokenStream
       --alias lookup | prefix walk--> node.on_execute() / node.on_usage()

Every failure is reported to the Output at the point it happens and signalled
to the caller with a False return; nothing here raises for bad user input.
"""

import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional

from cmdtree.commands import (
    INHERIT,
    AliasTable,
    CommandNode,
    CommandRegistry,
    FunctionCommand,
    IdentifierTable,
    messages,
)
from cmdtree.helpers import MATCH_NONE, prefix_score
from cmdtree.interface.parser import (
    STATEMENT_DELIMITER,
    TokenStream,
    split_statements,
    split_words,
    tokenize,
)
from cmdtree.ui.static.output import DEFAULT_INDENT, Output

logger = logging.getLogger(__name__)

USAGE_QUERY = "?"
DEFAULT_FUZZY_THRESHOLD = 3


class Dispatcher:
    """
    Parses and dispatches user input to the command tree.

    Attributes:
        user: opaque data handed to top-level commands unless overridden.
        registry: arena owning every command node.
        aliases: alias name -> command table.
        idents: identifier values for '$name' substitution.
        history: every statement passed to execute_one(), in order.
    """

    def __init__(
        self,
        user: Any = None,
        *,
        delimiter: str = STATEMENT_DELIMITER,
        ident_substitution: bool = True,
        strict_numbers: bool = True,
        fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD,
        indent_width: int = DEFAULT_INDENT,
    ) -> None:
        if len(delimiter) != 1 or delimiter.isspace():
            raise ValueError(f"Statement delimiter must be one visible character, got {delimiter!r}")
        self.user = user
        self.delimiter = delimiter
        self.ident_substitution = ident_substitution
        self.strict_numbers = strict_numbers
        self.fuzzy_threshold = fuzzy_threshold
        self.indent_width = indent_width

        self.registry = CommandRegistry()
        self.aliases = AliasTable(self.registry)
        self.idents = IdentifierTable()
        self.history: List[str] = []

    @classmethod
    def from_config(cls, config: Any, user: Any = None) -> "Dispatcher":
        """Build a dispatcher from an AppConfig."""
        return cls(
            user,
            delimiter=config.delimiter,
            ident_substitution=config.ident_substitution,
            strict_numbers=config.strict_numbers,
            fuzzy_threshold=config.fuzzy_threshold,
            indent_width=config.indent_width,
        )

    # ---------------- Tree construction ----------------

    def add_command(self, cls: type[CommandNode] | None = None, user: Any = INHERIT, **kwargs: Any) -> CommandNode:
        """
        Instantiate `cls` as a new top-level command.

        The command receives the dispatcher's user data unless `user` is given.
        """
        cls = cls or CommandNode
        node = cls(self, None, self.user if user is INHERIT else user, **kwargs)
        self.registry.attach(node)
        return node

    def command(
        self,
        path: str,
        *,
        usage: str | None = None,
        description: str | None = None,
        aliases: Iterable[str] = (),
        user: Any = INHERIT,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """
        Decorator registering `func(tokens, out)` as the command at `path`.

        Missing intermediate words of the path are created as plain group
        nodes; existing ones are reused.
        """
        words = split_words(path)
        if not words:
            raise ValueError("Command path must not be empty.")

        def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
            parent: CommandNode | None = None
            for word in words[:-1]:
                existing = next(
                    (c for c in self.registry.children_of(parent) if c.name == word), None)
                parent = existing or self._attach(CommandNode, parent, INHERIT, name=word)
            node = self._attach(
                FunctionCommand, parent, user,
                name=words[-1], callback=func, usage=usage, description=description,
            )
            for alias in aliases:
                node.alias_add(alias)
            return func

        return wrapper

    def _attach(self, cls: type[CommandNode], parent: CommandNode | None, user: Any, **kwargs: Any) -> CommandNode:
        if parent is None:
            return self.add_command(cls, user, **kwargs)
        return parent.add_sub_command(cls, user, **kwargs)

    def remove_command(self, node: CommandNode) -> int:
        """Destroy `node` with its subtree, dropping aliases that point into it."""
        for item in self.registry.walk([node]):
            self.aliases.remove_target(item)
        removed = self.registry.detach(node)
        logger.debug("removed %d command(s) under '%s'", len(removed), node.name)
        return len(removed)

    @property
    def commands(self) -> List[CommandNode]:
        """Top-level commands in registration order."""
        return self.registry.roots()

    def iter_commands(self) -> Iterator[CommandNode]:
        return self.registry.walk()

    def lookup(self, path: str | Iterable[str], start: CommandNode | None = None) -> Optional[CommandNode]:
        """
        Resolve a command path silently (exact or unique prefix per word).

        The walk begins below `start` (top-level commands by default); an
        empty path yields `start`. Returns None when any word is unknown or
        ambiguous.
        """
        words = split_words(path) if isinstance(path, str) else list(path)
        node = start
        candidates = self.registry.children_of(start)
        for word in words:
            matches = self._find_matches(candidates, word)
            if len(matches) != 1:
                return None
            node = matches[0]
            candidates = node.children
        return node

    # ---------------- Aliases ----------------

    def alias_add(self, node: CommandNode, name: str) -> bool:
        return self.aliases.add(name, node)

    def alias_remove(self, name: str) -> bool:
        return self.aliases.remove(name)

    def alias_remove_target(self, node: CommandNode) -> int:
        return self.aliases.remove_target(node)

    def alias_find(self, name: str) -> Optional[CommandNode]:
        return self.aliases.find(name)

    # ---------------- Execution ----------------

    @property
    def last_cmd(self) -> str | None:
        """The most recent statement submitted, or None before any input."""
        return self.history[-1] if self.history else None

    def tokenize(self, statement: str) -> TokenStream:
        idents = self.idents if self.ident_substitution else None
        return tokenize(statement, idents, lenient_numbers=not self.strict_numbers)

    def execute(self, expr: str, out: Output) -> bool:
        """
        Execute a ';'-separated expression, statement by statement.

        Stops at the first failing statement. Input that is entirely blank is
        run once as an empty statement, which repeats the last command.
        """
        if not expr.strip():
            return self._run(expr.strip(), out)
        for statement in split_statements(expr, self.delimiter):
            if statement and not self._run(statement, out):
                return False
        return True

    def _run(self, statement: str, out: Output) -> bool:
        if self.execute_one(statement, out):
            return True
        messages.command_failed(out, statement)
        logger.info("statement failed: %r", statement)
        return False

    def execute_one(self, statement: str, out: Output) -> bool:
        """Execute a single statement (no delimiter handling)."""
        self.history.append(statement)
        tokens = self.tokenize(statement)

        if tokens.token_empty():
            previous = self._last_repeatable()
            if previous is None:
                logger.debug("nothing to execute or repeat")
                return False
            messages.repeat_command(out, previous)
            return self.execute_one(previous, out)

        node = self.resolve(tokens, out)
        if node is None:
            messages.invalid_command(out)
            return False

        if tokens.raw and tokens.raw[-1] == USAGE_QUERY:
            return node.on_usage(out)
        return node.on_execute(tokens, out)

    def resolve(self, tokens: TokenStream, out: Output) -> Optional[CommandNode]:
        """
        Find the command addressed by the leading positional tokens.

        Consumes one token per level descended. Ambiguity is reported to
        `out` and yields None.
        """
        if tokens.front is None:
            return None

        alias = tokens.front.text
        node = self.aliases.find(alias)
        if node is not None:
            tokens.pop_token()
            logger.debug("alias '%s' -> '%s'", alias, node.get_command_path())
            return node

        candidates = self.registry.roots()
        while tokens.front is not None:
            matches = self._find_matches(candidates, tokens.front.text)
            if not matches:
                break
            if len(matches) > 1:
                self._print_completions(matches, out)
                return None
            node = matches[0]
            candidates = node.children
            tokens.pop_token()
        return node

    def _print_completions(self, matches: List[CommandNode], out: Output) -> None:
        with out.guard():
            messages.possible_completions(out)
            with out.indent_push(self.indent_width):
                for node in matches:
                    out.println(True, node.name)

    @staticmethod
    def _find_matches(candidates: List[CommandNode], word: str) -> List[CommandNode]:
        """Candidates tied for the best prefix score against `word`."""
        best = MATCH_NONE
        matches: List[CommandNode] = []
        for node in candidates:
            score = prefix_score(node.name, word)
            if score == MATCH_NONE or score < best:
                continue
            if score > best:
                best = score
                matches = []
            matches.append(node)
        return matches

    def _last_repeatable(self) -> str | None:
        """Most recent earlier statement that names a command."""
        for entry in reversed(self.history[:-1]):
            if tokenize(entry).token_size():
                return entry
        return None

