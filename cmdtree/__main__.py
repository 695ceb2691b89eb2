#!/usr/bin/env python3
# cmdtree/__main__.py
from __future__ import annotations
"""
Console entry point.

    python -m cmdtree                 interactive prompt
    python -m cmdtree EXPR [EXPR...]  run one expression and exit
"""

import sys
from typing import Sequence

from cmdtree.boot import boot_sequence
from cmdtree.interface import HISTORY_FILE_PATH, make_cli, run_repl


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    state = boot_sequence()

    if args:
        ok = state.dispatcher.execute(" ".join(args), state.output)
        return 0 if ok else 1

    config = state.config
    cli = make_cli(
        state.dispatcher,
        prompt=config.prompt,
        history_path=config.history_file_path or HISTORY_FILE_PATH,
        complete=config.enable_completion,
    )
    failures = run_repl(state.dispatcher, state.output, cli)
    state.logger.debug("session ended with %d failed line(s)", failures)
    return 0


if __name__ == "__main__":
    sys.exit(main())
