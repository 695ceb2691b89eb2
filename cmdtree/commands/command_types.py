#!/usr/bin/env python3
# cmdtree/commands/command_types.py
from __future__ import annotations

"""
Command node types.

This module defines:
- CommandNode: base class for every command in the tree. Subclasses override
  on_execute() / on_usage(); plain instances act as groups that list or
  suggest their children.
- CommandCallback: the callable protocol for function-backed commands.
- FunctionCommand: a CommandNode delegating on_execute() to a callback.
"""

import logging
from typing import TYPE_CHECKING, Any, Protocol

from cmdtree.helpers import edit_distance
from cmdtree.commands import messages

if TYPE_CHECKING:
    from cmdtree.interface.handler import Dispatcher
    from cmdtree.interface.parser import TokenStream
    from cmdtree.ui.static.output import Output

logger = logging.getLogger(__name__)

# Sentinel: a new child receives its parent's user data.
INHERIT: Any = object()


class CommandCallback(Protocol):
    """Protocol for function-backed commands."""

    def __call__(self, tokens: "TokenStream", out: "Output") -> bool | None:  # pragma: no cover - signature only
        ...


class CommandNode:
    """
    A node in the command tree.

    Class attributes give subclass defaults:
        command_name: name used when none is passed to the constructor.
        usage: argument synopsis shown after the command path.
        description: one-line description shown by on_usage().

    Nodes are owned by the dispatcher's CommandRegistry, which assigns
    `handle`; parent and children are resolved through it by handle.
    """

    command_name: str = ""
    usage: str | None = None
    description: str | None = None

    def __init__(
        self,
        dispatcher: "Dispatcher",
        parent: "CommandNode | None" = None,
        user: Any = None,
        *,
        name: str | None = None,
        usage: str | None = None,
        description: str | None = None,
    ) -> None:
        resolved = name if name is not None else type(self).command_name
        if not resolved or any(ch in resolved for ch in " \t;"):
            raise ValueError(f"Invalid command name: {resolved!r}")
        self._name = resolved
        self.dispatcher = dispatcher
        self.user = user
        self.handle: int | None = None
        self.parent_handle: int | None = parent.handle if parent is not None else None
        self.child_handles: list[int] = []
        if usage is not None:
            self.usage = usage
        if description is not None:
            self.description = description

    # ---------------- Tree access ----------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> "CommandNode | None":
        if self.parent_handle is None:
            return None
        return self.dispatcher.registry.get(self.parent_handle)

    @property
    def children(self) -> list["CommandNode"]:
        return self.dispatcher.registry.children_of(self)

    def add_sub_command(self, cls: type["CommandNode"] | None = None, user: Any = INHERIT, **kwargs: Any) -> "CommandNode":
        """
        Instantiate `cls` (CommandNode by default) as a new child of this node.

        The child receives this node's user data unless `user` is given.
        """
        cls = cls or CommandNode
        node = cls(self.dispatcher, self, self.user if user is INHERIT else user, **kwargs)
        self.dispatcher.registry.attach(node, self)
        return node

    def get_command_path(self) -> str:
        """Names from the root command down to this one, space separated."""
        parent = self.parent
        if parent is None:
            return self.name
        return f"{parent.get_command_path()} {self.name}"

    def alias_add(self, name: str) -> bool:
        """Register `name` as a direct alias for this command."""
        return self.dispatcher.alias_add(self, name)

    # ---------------- Handlers ----------------

    def on_execute(self, tokens: "TokenStream", out: "Output") -> bool:
        """
        Default handler for nodes without custom logic.

        A childless node has nothing to run and fails. A group reports the
        unmatched word with close spellings of its children, or lists its
        children when no word is left.
        """
        children = self.children
        if not children:
            logger.debug("command '%s' has no handler", self.get_command_path())
            return False

        word = tokens.front
        if word is None:
            self.print_cmd_list(children, out)
            return True

        threshold = self.dispatcher.fuzzy_threshold
        close = [c for c in children if edit_distance(c.name, word.text) < threshold]
        with out.guard():
            messages.no_subcommand(out, word.text)
            if close:
                messages.did_you_mean(out)
                self.print_cmd_list(close, out)
        return True

    def on_usage(self, out: "Output") -> bool:
        with out.guard(), out.indent_push(self.dispatcher.indent_width):
            messages.usage(out, self.get_command_path(), self.usage, self.description)
            children = self.children
            if children:
                messages.subcommands(out)
                self.print_cmd_list(children, out)
        return True

    # ---------------- Helpers for subclasses ----------------

    def error(self, out: "Output", fmt: str, *args: Any) -> bool:
        """Report an error line; returns False so handlers can `return self.error(...)`."""
        messages.error(out, fmt.format(*args) if args else fmt)
        return False

    def print_cmd_list(self, nodes: list["CommandNode"], out: "Output") -> None:
        with out.guard(), out.indent_push(self.dispatcher.indent_width):
            for node in nodes:
                out.println(True, node.name)

    def print_sub_commands(self, out: "Output") -> None:
        self.print_cmd_list(self.children, out)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.get_command_path()!r} handle={self.handle}>"


class FunctionCommand(CommandNode):
    """CommandNode whose on_execute() calls a plain function."""

    def __init__(self, dispatcher: "Dispatcher", parent: "CommandNode | None" = None, user: Any = None, *, callback: CommandCallback, **kwargs: Any) -> None:
        super().__init__(dispatcher, parent, user, **kwargs)
        self.callback = callback
        if self.description is None and callback.__doc__:
            self.description = callback.__doc__.strip().splitlines()[0]

    def on_execute(self, tokens: "TokenStream", out: "Output") -> bool:
        result = self.callback(tokens, out)
        return True if result is None else bool(result)
