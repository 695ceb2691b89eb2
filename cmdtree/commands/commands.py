#!/usr/bin/env python3
# cmdtree/commands/commands.py
from __future__ import annotations

"""
Command tree storage.

CommandRegistry is an arena: every node is stored under a stable integer
handle, nodes refer to their parent and children by handle, and removing a
node removes its whole subtree from the arena.
"""

import itertools
import logging
from typing import Dict, Iterator, List, Optional

from cmdtree.commands.command_types import CommandNode

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Holds every command node of one dispatcher, addressed by handle."""

    def __init__(self) -> None:
        # Handle -> node
        self._nodes: Dict[int, CommandNode] = {}
        # Handles of top-level commands, in registration order
        self._root_handles: List[int] = []
        self._next_handle = itertools.count(1)

    # ---------------- Registration ----------------

    def attach(self, node: CommandNode, parent: Optional[CommandNode] = None) -> int:
        """
        Store `node` under a new handle as a child of `parent` (or as a root).

        Raises ValueError when the node is already attached, the parent is not
        part of this registry, or a sibling already uses the same name.
        """
        if node.handle is not None:
            raise ValueError(f"Command '{node.name}' is already attached.")
        if parent is not None and self.get(parent.handle) is not parent:
            raise ValueError(f"Parent '{parent.name}' is not registered.")

        siblings = self.children_of(parent)
        if any(sibling.name == node.name for sibling in siblings):
            where = parent.get_command_path() if parent is not None else "<root>"
            raise ValueError(f"Command '{node.name}' already registered under {where}.")

        handle = next(self._next_handle)
        node.handle = handle
        node.parent_handle = parent.handle if parent is not None else None
        self._nodes[handle] = node
        if parent is None:
            self._root_handles.append(handle)
        else:
            parent.child_handles.append(handle)
        logger.debug("attached command '%s' as handle %d", node.get_command_path(), handle)
        return handle

    def detach(self, node: CommandNode) -> List[CommandNode]:
        """Remove `node` and all of its descendants; returns the removed nodes."""
        if node.handle is None or self._nodes.get(node.handle) is not node:
            raise KeyError(f"Command '{node.name}' is not registered.")

        parent = node.parent
        if parent is None:
            self._root_handles.remove(node.handle)
        else:
            parent.child_handles.remove(node.handle)

        removed = list(self.walk([node]))
        for item in removed:
            del self._nodes[item.handle]  # type: ignore[arg-type]
        for item in removed:
            item.handle = None
        return removed

    # ---------------- Lookup ----------------

    def get(self, handle: Optional[int]) -> Optional[CommandNode]:
        """Return the node stored under `handle`, or None if it is gone."""
        if handle is None:
            return None
        return self._nodes.get(handle)

    def roots(self) -> List[CommandNode]:
        return [self._nodes[h] for h in self._root_handles]

    def children_of(self, node: Optional[CommandNode]) -> List[CommandNode]:
        """Children of `node`, or the top-level commands when `node` is None."""
        if node is None:
            return self.roots()
        return [self._nodes[h] for h in node.child_handles if h in self._nodes]

    def walk(self, nodes: Optional[List[CommandNode]] = None) -> Iterator[CommandNode]:
        """Depth-first, pre-order iteration starting at `nodes` (default: roots)."""
        stack = list(reversed(nodes if nodes is not None else self.roots()))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(self.children_of(node)))

    def __contains__(self, node: object) -> bool:
        return isinstance(node, CommandNode) and self.get(node.handle) is node

    def __len__(self) -> int:
        return len(self._nodes)
