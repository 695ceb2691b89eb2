# cmdtree/plugins/shell/entrypoint.py
from __future__ import annotations

from typing import TYPE_CHECKING

from cmdtree.commands import CommandNode, messages
from cmdtree.interface.parser import TokenStream
from cmdtree.ui import print_table
from cmdtree.ui.static.output import Output

if TYPE_CHECKING:
    from cmdtree.interface.handler import Dispatcher


# -------------------------- help --------------------------

class HelpCommand(CommandNode):
    """Shows usage for a command path, or a summary of top-level commands."""

    command_name = "help"
    usage = "[path...]"
    description = "show usage for a command"

    def on_execute(self, tokens: TokenStream, out: Output) -> bool:
        words = [token.text for token in tokens]
        if not words:
            rows = [(node.name, node.description or "") for node in self.dispatcher.commands]
            print_table(rows, out=out)
            return True
        node = self.dispatcher.lookup(words)
        if node is None:
            messages.unable_to_find_cmd(out, " ".join(words))
            return False
        return node.on_usage(out)


def _rest(tokens: TokenStream) -> list[str]:
    return [token.text for token in tokens]


# ----------------------- registration -----------------------

def register(dispatcher: "Dispatcher") -> None:
    dispatcher.add_command(HelpCommand)

    @dispatcher.command("history", usage="[-n count]")
    def history(tokens: TokenStream, out: Output) -> bool:
        """list previously executed statements"""
        entries = dispatcher.history
        count = tokens.pair("-n")
        if count is not None:
            limit = count.as_uint()
            if limit is None:
                messages.error(out, f"'{count.text}' is not a number")
                return False
            entries = entries[-limit:] if limit else []
        first = len(dispatcher.history) - len(entries) + 1
        print_table([(first + i, entry) for i, entry in enumerate(entries)], out=out)
        return True

    @dispatcher.command("echo", usage="[words...]")
    def echo(tokens: TokenStream, out: Output) -> None:
        """print the words after the command"""
        out.println(True, " ".join(_rest(tokens)))

    # ---- aliases ----

    @dispatcher.command("alias add", usage="<name> <path...>", description="create an alias for a command")
    def alias_add(tokens: TokenStream, out: Output) -> bool:
        name = tokens.pop_str()
        path = _rest(tokens)
        if name is None or not path:
            messages.error(out, "expected an alias name and a command path")
            return False
        node = dispatcher.lookup(path)
        if node is None:
            messages.unable_to_find_cmd(out, " ".join(path))
            return False
        try:
            return dispatcher.alias_add(node, name)
        except ValueError as exc:
            messages.error(out, str(exc))
            return False

    @dispatcher.command("alias remove", usage="<name>", description="remove an alias")
    def alias_remove(tokens: TokenStream, out: Output) -> bool:
        name = tokens.pop_str()
        if name is None:
            messages.error(out, "expected an alias name")
            return False
        if not dispatcher.alias_remove(name):
            messages.error(out, f"no alias '{name}'")
            return False
        return True

    @dispatcher.command("alias list", description="list aliases")
    def alias_list(tokens: TokenStream, out: Output) -> None:
        items = dispatcher.aliases.items()
        messages.num_aliases(out, len(items))
        if items:
            with out.indent_push(dispatcher.indent_width):
                print_table([(name, node.get_command_path()) for name, node in items], out=out)

    # ---- identifiers ----

    @dispatcher.command("ident set", usage="<name> <value>", description="set an identifier value")
    def ident_set(tokens: TokenStream, out: Output) -> bool:
        name = tokens.pop_str()
        if name is None:
            messages.error(out, "expected an identifier name")
            return False
        raw = tokens.front
        value = tokens.pop_uint()
        if value is None:
            messages.error(out, f"'{raw.text if raw else ''}' is not a number")
            return False
        try:
            dispatcher.idents.set(name, value)
        except ValueError as exc:
            messages.error(out, str(exc))
            return False
        return True

    @dispatcher.command("ident remove", usage="<name>", description="remove an identifier")
    def ident_remove(tokens: TokenStream, out: Output) -> bool:
        name = tokens.pop_str()
        if name is None or not dispatcher.idents.remove(name):
            messages.unknown_ident(out, name or "")
            return False
        return True

    @dispatcher.command("ident list", description="list identifiers")
    def ident_list(tokens: TokenStream, out: Output) -> None:
        items = dispatcher.idents.items()
        messages.num_idents(out, len(items))
        if items:
            with out.indent_push(dispatcher.indent_width):
                print_table([(name, f"{value} (0x{value:x})") for name, value in items], out=out)
