#!/usr/bin/env python3
# cmdtree/commands/messages.py
from __future__ import annotations

"""
User-facing diagnostic texts.

Every message is written to an Output as one indented line; keeping them in
one place keeps wording consistent between the dispatcher, the default
command handlers and the stock plugins.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdtree.ui.static.output import Output


def possible_completions(out: "Output") -> None:
    out.println(True, "possible completions:")


def invalid_command(out: "Output") -> None:
    out.println(True, "invalid command")


def command_failed(out: "Output", statement: str) -> None:
    out.println(True, "command failed: '{}'", statement)


def no_subcommand(out: "Output", word: str) -> None:
    out.println(True, "no subcommand '{}'", word)


def did_you_mean(out: "Output") -> None:
    out.println(True, "did you mean:")


def repeat_command(out: "Output", statement: str) -> None:
    out.println(False, "> {}", statement)


def unknown_ident(out: "Output", name: str) -> None:
    out.println(True, "unknown identifier '{}'", name)


def error(out: "Output", text: str) -> None:
    out.println(True, "error: {}", text)


def usage(out: "Output", path: str, args: str | None, desc: str | None) -> None:
    out.println(True, "usage: {}", f"{path} {args}" if args else path)
    if desc:
        out.println(True, "desc:  {}", desc)


def subcommands(out: "Output") -> None:
    out.println(True, "subcommands:")


def unable_to_find_cmd(out: "Output", path: str) -> None:
    out.println(True, "unable to find command '{}'", path)


def num_aliases(out: "Output", count: int) -> None:
    if count:
        out.println(True, "{} aliases:", count)
    else:
        out.println(True, "no aliases")


def num_idents(out: "Output", count: int) -> None:
    if count:
        out.println(True, "{} identifiers:", count)
    else:
        out.println(True, "no identifiers")
