#!/usr/bin/env python3
# cmdtree/commands/__init__.py
from __future__ import annotations

"""
Package for the command tree.

Provides:
- Node types (`CommandNode`, `FunctionCommand`, `CommandCallback`).
- The handle-addressed arena owning every node (`CommandRegistry`).
- Alias and identifier tables (`AliasTable`, `IdentifierTable`).

This package re-exports public APIs from:
- command_types.py
- commands.py
- tables.py
"""


# Re-export from submodules
from . import messages
from .command_types import CommandNode, FunctionCommand, CommandCallback, INHERIT
from .commands import CommandRegistry
from .tables import AliasTable, IdentifierTable, UINT64_MAX

__all__ = [
    "messages",
    "CommandNode",
    "FunctionCommand",
    "CommandCallback",
    "INHERIT",
    "CommandRegistry",
    "AliasTable",
    "IdentifierTable",
    "UINT64_MAX",
]
