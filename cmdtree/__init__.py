#!/usr/bin/env python3
# cmdtree/__init__.py
from __future__ import annotations
"""
Hierarchical command interpreter.

Typical embedding:

    dispatcher = Dispatcher()

    @dispatcher.command("status show", usage="[-v]")
    def show(tokens, out):
        ...

    dispatcher.execute("stat sh -v; status show", create_output_stdio())
"""

from cmdtree.commands import CommandNode, FunctionCommand
from cmdtree.interface import Dispatcher, Token, TokenStream, tokenize
from cmdtree.ui import BufferOutput, Output, StreamOutput, create_output_stdio

__version__ = "0.1.0"

__all__ = [
    "CommandNode",
    "FunctionCommand",
    "Dispatcher",
    "Token",
    "TokenStream",
    "tokenize",
    "Output",
    "StreamOutput",
    "BufferOutput",
    "create_output_stdio",
    "__version__",
]
