"""Tests for the stock console commands, plugin loading and boot."""

import io
import logging

import pytest

from cmdtree.__main__ import main
from cmdtree.boot import boot_sequence
from cmdtree.config import load_config
from cmdtree.interface import BaseCLI, Dispatcher, load_commands, run_repl


@pytest.fixture
def shell():
    d = Dispatcher()
    assert load_commands(d, "cmdtree.plugins") == 1
    return d


class TestShellCommands:
    """Test help, history, echo, alias and ident."""

    def test_echo(self, shell, out):
        """echo prints its words."""
        assert shell.execute("echo hello  world", out)
        assert out.lines() == ["hello world"]

    def test_help_for_command(self, shell, out):
        """help prints usage for a path."""
        assert shell.execute("help echo", out)
        assert out.lines() == ["usage: echo [words...]", "desc:  print the words after the command"]

    def test_help_unknown(self, shell, out):
        """help reports paths that do not resolve."""
        assert not shell.execute("help nothing", out)
        assert out.lines()[0] == "unable to find command 'nothing'"

    def test_help_summary(self, shell, out):
        """help alone lists top-level commands."""
        assert shell.execute("help", out)
        assert [line.split()[0] for line in out.lines()] == ["help", "history", "echo", "alias", "ident"]

    def test_ambiguous_h(self, shell, out):
        """'h' is ambiguous between help and history."""
        assert not shell.execute("h", out)
        assert out.lines()[:3] == ["possible completions:", "help", "history"]

    def test_history(self, shell, out):
        """history -n limits to the most recent entries."""
        shell.execute("echo a", out)
        out.clear()
        assert shell.execute("history -n 1", out)
        assert out.lines() == ["2  history -n 1"]

    def test_history_bad_count(self, shell, out):
        """A non-numeric count is an error."""
        assert not shell.execute("history -n lots", out)
        assert out.lines()[0] == "error: 'lots' is not a number"

    def test_alias_lifecycle(self, shell, out):
        """Aliases can be added, used, listed and removed."""
        assert shell.execute("alias add e echo", out)
        out.clear()
        assert shell.execute("e hi", out)
        assert out.lines() == ["hi"]
        out.clear()
        assert shell.execute("alias list", out)
        assert out.lines() == ["1 aliases:", "e  echo"]
        assert shell.execute("alias remove e", out)
        out.clear()
        assert not shell.execute("alias remove e", out)
        assert out.lines()[0] == "error: no alias 'e'"

    def test_alias_to_nested_path(self, shell, out):
        """Aliases may target nested commands by prefix."""
        assert shell.execute("alias add il ident l", out)
        assert shell.alias_find("il").get_command_path() == "ident list"

    def test_alias_unknown_target(self, shell, out):
        """Aliases to unknown paths are refused."""
        assert not shell.execute("alias add x nowhere", out)
        assert out.lines()[0] == "unable to find command 'nowhere'"

    def test_alias_list_empty(self, shell, out):
        """An empty alias table says so."""
        assert shell.execute("alias list", out)
        assert out.lines() == ["no aliases"]

    def test_ident_lifecycle(self, shell, out):
        """Identifiers can be set, substituted, listed and removed."""
        assert shell.execute("ident set x 0x10", out)
        assert shell.idents["x"] == 16
        out.clear()
        assert shell.execute("echo $x", out)
        assert out.lines() == ["16"]
        out.clear()
        assert shell.execute("ident list", out)
        assert out.lines() == ["1 identifiers:", "x  16 (0x10)"]
        assert shell.execute("ident remove x", out)
        assert "x" not in shell.idents

    def test_ident_bad_value(self, shell, out):
        """Non-numeric values are rejected."""
        assert not shell.execute("ident set y abc", out)
        assert out.lines()[0] == "error: 'abc' is not a number"

    def test_ident_remove_unknown(self, shell, out):
        """Removing an unknown identifier fails."""
        assert not shell.execute("ident remove zz", out)
        assert out.lines()[0] == "unknown identifier 'zz'"


class TestLoader:
    """Test plugin discovery."""

    def test_commands_attribute(self, tmp_path, monkeypatch):
        """COMMANDS classes are added; private modules are skipped."""
        pkg = tmp_path / "cmdtree_loader_fixture"
        pkg.mkdir()
        (pkg / "__init__.py").write_text("", encoding="utf-8")
        (pkg / "ping.py").write_text(
            "from cmdtree.commands import CommandNode\n"
            "class Ping(CommandNode):\n"
            "    command_name = 'ping'\n"
            "COMMANDS = [Ping]\n",
            encoding="utf-8",
        )
        (pkg / "_hidden.py").write_text("raise RuntimeError('imported')\n", encoding="utf-8")
        monkeypatch.syspath_prepend(str(tmp_path))

        d = Dispatcher()
        assert load_commands(d, "cmdtree_loader_fixture") == 1
        assert [c.name for c in d.commands] == ["ping"]

    def test_not_a_package(self):
        """Loading from a plain module fails."""
        with pytest.raises(RuntimeError):
            load_commands(Dispatcher(), "cmdtree.__main__")


class _ScriptedCLI(BaseCLI):
    def __init__(self, lines):
        super().__init__()
        self.lines = list(lines)

    def get_line(self):
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


class TestRepl:
    """Test the read-execute loop."""

    def test_counts_failures_and_exits(self, dispatcher, out, calls):
        """Failures are counted and an exit word ends the loop."""
        cli = _ScriptedCLI(["status", "bogus", "quit", "stop"])
        assert run_repl(dispatcher, out, cli) == 1
        assert [c[0] for c in calls] == ["status"]

    def test_eof_ends_loop(self, dispatcher, out):
        """EOF ends the loop cleanly."""
        assert run_repl(dispatcher, out, _ScriptedCLI(["status"])) == 0


class TestBoot:
    """Test the boot sequence and entry point."""

    def test_boot_loads_plugins(self, tmp_path, out):
        """Boot builds a dispatcher with the stock commands."""
        config = load_config(tmp_path, environ={})
        state = boot_sequence(config, output=out)
        assert state.output is out
        assert state.loaded_count == len(state.dispatcher.registry) == 11
        assert isinstance(state.logger, logging.Logger)
        assert state.dispatcher.execute("echo ok", out)

    def test_boot_without_plugins(self, tmp_path, out):
        """No plugin package means an empty tree."""
        config = load_config(tmp_path, environ={"CMDTREE_PLUGIN_PACKAGE": "none"})
        assert boot_sequence(config, output=out).loaded_count == 0

    def test_banner(self, tmp_path, out, capsys):
        """Step lines are printed when the banner is on."""
        config = load_config(tmp_path, environ={"CMDTREE_SHOW_BANNER": "1"})
        boot_sequence(config, output=out)
        assert "[  OK  ] Create dispatcher" in capsys.readouterr().out

    def test_main_runs_expression(self, tmp_path, monkeypatch, capsys):
        """Arguments run once as an expression."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("CMDTREE_PLUGIN_PACKAGE", raising=False)
        assert main(["echo", "hi;", "echo", "there"]) == 0
        assert capsys.readouterr().out.split() == ["hi", "there"]

    def test_main_failure_exit_code(self, tmp_path, monkeypatch, capsys):
        """A failing expression exits non-zero."""
        monkeypatch.chdir(tmp_path)
        assert main(["nowhere"]) == 1
