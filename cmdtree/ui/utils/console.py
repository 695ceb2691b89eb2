#!/usr/bin/env python3
# cmdtree/ui/utils/console.py
from __future__ import annotations

import sys
import threading
from typing import TextIO

# Serialises boot step lines and log records on the terminal.
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file: TextIO | None = None, flush: bool = False) -> None:
    """Write one line while holding PRINT_MUTEX."""
    target = sys.stdout if file is None else file
    with PRINT_MUTEX:
        target.write(text + "\n")
        if flush:
            target.flush()
