#!/usr/bin/env python3
# cmdtree/interface/__init__.py
from __future__ import annotations

"""
Package for statement parsing, dispatch and the interactive console.

Provides:
- Tokenizer and token types.
- The Dispatcher (statement splitting, aliases, prefix resolution, history).
- Token-aware completion helpers.
- Dynamic command loader for plugin packages.
- CLI frontends with history and completion (prompt_toolkit / readline / plain).
"""


from .parser import (
    Token,
    TokenStream,
    tokenize,
    split_statements,
    split_words,
    STATEMENT_DELIMITER,
)

from .handler import Dispatcher, USAGE_QUERY

from .completion import suggest

from .loader import load_commands, DEFAULT_PLUGIN_PACKAGE

from .cli import (
    BaseCLI,
    PromptToolkitCLI,
    ReadlineCLI,
    make_cli,
    run_repl,
    HISTORY_FILE_PATH,
)

__all__ = [
    # parser
    "Token",
    "TokenStream",
    "tokenize",
    "split_statements",
    "split_words",
    "STATEMENT_DELIMITER",
    # handler
    "Dispatcher",
    "USAGE_QUERY",
    # completion
    "suggest",
    # loader
    "load_commands",
    "DEFAULT_PLUGIN_PACKAGE",
    # cli
    "BaseCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "make_cli",
    "run_repl",
    "HISTORY_FILE_PATH",
]
