#!/usr/bin/env python3
# cmdtree/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order:
    1) prompt_toolkit (live completion + file history)
    2) readline (tab completion + history)
    3) plain input (last resort)
"""

from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

from cmdtree.interface.completion import _split_current_token, current_statement, suggest

if TYPE_CHECKING:
    from cmdtree.interface.handler import Dispatcher
    from cmdtree.ui.static.output import Output

# History location in the user home directory
HISTORY_FILE_PATH = Path.home() / ".cmdtree_history"
DEFAULT_PROMPT = "> "
EXIT_WORDS = ("exit", "quit")


class BaseCLI:
    """
    Plain input frontend and base interface for richer ones.

    Subclasses may override:
        - setup()
        - get_line()
        - teardown()

    Context manager support guarantees teardown.
    """

    def __init__(self, prompt: str = DEFAULT_PROMPT) -> None:
        self.prompt = prompt

    def setup(self) -> None:
        pass

    def get_line(self) -> str:
        return input(self.prompt)

    def teardown(self) -> None:
        pass

    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


# ===== Preferred: prompt_toolkit =====
class PromptToolkitCLI(BaseCLI):
    """Line editor with history and live completion."""

    def __init__(
        self,
        dispatcher: "Dispatcher",
        *,
        prompt: str = DEFAULT_PROMPT,
        history_path: Path = HISTORY_FILE_PATH,
        complete: bool = True,
    ) -> None:
        from prompt_toolkit import PromptSession
        from prompt_toolkit.completion import Completer, Completion
        from prompt_toolkit.history import FileHistory

        super().__init__(prompt)
        self.history_path = history_path

        class _Completer(Completer):
            def get_completions(self, document, complete_event):
                text_before_cursor = document.text_before_cursor
                # replace exactly the word under the cursor
                _, current_prefix = _split_current_token(
                    current_statement(dispatcher, text_before_cursor))
                for word in suggest(dispatcher, text_before_cursor):
                    yield Completion(word, start_position=-len(current_prefix))

        self._session_factory = lambda: PromptSession(
            history=FileHistory(str(self.history_path)),
            completer=_Completer() if complete else None,
            complete_while_typing=complete,
        )
        self._session = None

    def setup(self) -> None:
        self.history_path.touch(exist_ok=True)
        self._session = self._session_factory()

    def get_line(self) -> str:
        if self._session is None:
            self.setup()
        return self._session.prompt(self.prompt)  # type: ignore[union-attr]


# ===== Fallback: readline =====
class ReadlineCLI(BaseCLI):
    """Fallback editor with basic completion and history."""

    def __init__(
        self,
        dispatcher: "Dispatcher",
        *,
        prompt: str = DEFAULT_PROMPT,
        history_path: Path = HISTORY_FILE_PATH,
        complete: bool = True,
    ) -> None:
        import readline  # type: ignore[attr-defined]

        super().__init__(prompt)
        self.readline = readline
        self.dispatcher = dispatcher
        self.history_path = history_path
        self.complete = complete

    def setup(self) -> None:
        self.history_path.touch(exist_ok=True)
        try:
            self.readline.read_history_file(str(self.history_path))
        except OSError:
            pass
        if not self.complete:
            return

        self.readline.set_completer_delims(" \t" + self.dispatcher.delimiter)

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            buffer_text = self.readline.get_line_buffer()
            matches = [
                word for word in suggest(self.dispatcher, buffer_text)
                if word.startswith(text_fragment)]
            return matches[state_index] if state_index < len(matches) else None

        self.readline.set_completer(_complete)
        self.readline.parse_and_bind("tab: complete")

    def teardown(self) -> None:
        try:
            self.readline.write_history_file(str(self.history_path))
        except OSError:
            pass


def make_cli(
    dispatcher: "Dispatcher",
    *,
    prompt: str = DEFAULT_PROMPT,
    history_path: Path = HISTORY_FILE_PATH,
    complete: bool = True,
) -> BaseCLI:
    """Select the best available CLI frontend at runtime."""
    try:
        return PromptToolkitCLI(
            dispatcher, prompt=prompt, history_path=history_path, complete=complete)
    except ImportError:
        try:
            return ReadlineCLI(
                dispatcher, prompt=prompt, history_path=history_path, complete=complete)
        except ImportError:
            return BaseCLI(prompt)


def run_repl(
    dispatcher: "Dispatcher",
    out: "Output",
    cli: BaseCLI,
    *,
    exit_words: Iterable[str] = EXIT_WORDS,
) -> int:
    """
    Read-execute loop until EOF, Ctrl-C or an exit word.

    Returns the number of input lines that failed.
    """
    exit_set = set(exit_words)
    failures = 0
    with cli:
        while True:
            try:
                line = cli.get_line()
            except (EOFError, KeyboardInterrupt):
                out.eol()
                break
            if line.strip() in exit_set:
                break
            if not dispatcher.execute(line, out):
                failures += 1
    return failures
