#!/usr/bin/env python3
# cmdtree/commands/tables.py
from __future__ import annotations

"""
Lookup tables shared by every statement of a dispatcher.

- AliasTable: alias name -> command handle, bypassing tree resolution.
- IdentifierTable: identifier name -> unsigned 64-bit value for '$name' substitution.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from cmdtree.commands.command_types import CommandNode
from cmdtree.commands.commands import CommandRegistry

logger = logging.getLogger(__name__)

UINT64_MAX = 2**64 - 1


class AliasTable:
    """
    Alias names bound to command handles.

    Handles are validated against the registry on lookup, so an alias whose
    command was removed is never returned.
    """

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry
        self._aliases: Dict[str, int] = {}

    def add(self, name: str, node: CommandNode) -> bool:
        if not name or any(ch in name for ch in " \t;"):
            raise ValueError(f"Invalid alias name: {name!r}")
        if node not in self._registry:
            raise ValueError(f"Command '{node.name}' is not registered.")
        self._aliases[name] = node.handle  # type: ignore[assignment]
        logger.debug("alias '%s' -> '%s'", name, node.get_command_path())
        return True

    def remove(self, name: str) -> bool:
        """Remove one alias by name; False when it did not exist."""
        return self._aliases.pop(name, None) is not None

    def remove_target(self, node: CommandNode) -> int:
        """Remove every alias pointing at `node`; returns how many were removed."""
        handle = node.handle
        stale = [name for name, target in self._aliases.items() if target == handle]
        for name in stale:
            del self._aliases[name]
        return len(stale)

    def find(self, name: str) -> Optional[CommandNode]:
        handle = self._aliases.get(name)
        if handle is None:
            return None
        node = self._registry.get(handle)
        if node is None:
            # target vanished without teardown
            del self._aliases[name]
        return node

    def items(self) -> List[Tuple[str, CommandNode]]:
        """Live (alias, command) pairs sorted by alias name."""
        out: List[Tuple[str, CommandNode]] = []
        for name in sorted(self._aliases):
            node = self.find(name)
            if node is not None:
                out.append((name, node))
        return out

    def names(self) -> List[str]:
        return [name for name, _ in self.items()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def __len__(self) -> int:
        return len(self.items())


class IdentifierTable:
    """Identifier values substituted for '$name' words by the tokenizer."""

    def __init__(self) -> None:
        self._values: Dict[str, int] = {}

    def set(self, name: str, value: int) -> None:
        if not name or name.startswith("$") or any(ch.isspace() or ch == ";" for ch in name):
            raise ValueError(f"Invalid identifier name: {name!r}")
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Identifier value must be an integer, got {value!r}")
        if not 0 <= value <= UINT64_MAX:
            raise ValueError(f"Identifier value out of range 0..2**64-1: {value}")
        self._values[name] = value

    def remove(self, name: str) -> bool:
        return self._values.pop(name, None) is not None

    def get(self, name: str, default: Optional[int] = None) -> Optional[int]:
        return self._values.get(name, default)

    def __getitem__(self, name: str) -> int:
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def items(self) -> List[Tuple[str, int]]:
        return sorted(self._values.items())
