#!/usr/bin/env python3
# cmdtree/ui/utils/ansi.py
from __future__ import annotations

import ctypes
import functools
import os
import re

# SGR codes for the styles the console uses (boot lines, log levels).
_SGR_CODES = {
    "reset": 0,
    "bold": 1,
    "dim": 2,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "bright_black": 90,
}
ANSI = {style: f"\x1b[{code}m" for style, code in _SGR_CODES.items()}

_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    """Drop escape sequences, leaving only the visible characters."""
    return _ESCAPE_RE.sub("", text)


@functools.cache
def enable_windows_vt() -> bool:
    """
    True when escape sequences render on this console.

    POSIX terminals and Windows Terminal always qualify; a classic Windows
    console is switched to VT mode on first call. The answer is cached.
    """
    if os.name != "nt" or os.environ.get("WT_SESSION"):
        return True
    try:
        kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
        handle = kernel32.GetStdHandle(-11)  # STD_OUTPUT_HANDLE
        mode = ctypes.c_uint()
        if not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            return False
        # ENABLE_VIRTUAL_TERMINAL_PROCESSING
        return bool(kernel32.SetConsoleMode(handle, mode.value | 0x0004))
    except (AttributeError, OSError):
        return False


def colorize(text: str, *styles: str) -> str:
    """Wrap `text` in the named styles; unknown names are ignored."""
    prefix = "".join(ANSI.get(style, "") for style in styles)
    if not prefix:
        return text
    return prefix + text + ANSI["reset"]
