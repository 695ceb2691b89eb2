#!/usr/bin/env python3
# cmdtree/ui/static/output.py
from __future__ import annotations

"""
Output sinks handed to commands during execution.

All text a command produces goes through an Output so that:
- grouped writes (e.g. a usage block) can be rendered atomically via lock()/unlock(),
- nested listings share one indentation counter with scoped push/pop.

Concrete sinks:
- StreamOutput: writes to a text stream (stdout by default).
- BufferOutput: collects text in memory (embedding, tests).
"""

import io
import sys
import threading
from contextlib import contextmanager
from typing import Any, Iterator, TextIO

DEFAULT_INDENT = 2


class Output:
    """
    Base output sink.

    Subclasses implement write(). The lock is re-entrant so a guarded block
    may call helpers that take the guard again.
    """

    def __init__(self, indent: int = DEFAULT_INDENT) -> None:
        self.indent_level = indent
        self._mutex = threading.RLock()

    # ---------------- Locking ----------------

    def lock(self) -> None:
        self._mutex.acquire()

    def unlock(self) -> None:
        self._mutex.release()

    @contextmanager
    def guard(self) -> Iterator["Output"]:
        """Hold the sink lock for the duration of the block."""
        self.lock()
        try:
            yield self
        finally:
            self.unlock()

    # ---------------- Indentation ----------------

    @contextmanager
    def indent_push(self, amount: int) -> Iterator[int]:
        """Increase indentation for the block; the prior level is always restored."""
        restore = self.indent_level
        self.indent_level += amount
        try:
            yield self.indent_level
        finally:
            self.indent_level = restore

    def indent(self) -> None:
        self.write(" " * self.indent_level)

    # ---------------- Writing ----------------

    def write(self, text: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def print(self, indent: bool, fmt: str, *args: Any) -> None:
        """Write `fmt.format(*args)` (or `fmt` verbatim without args)."""
        with self.guard():
            if indent:
                self.indent()
            self.write(_render(fmt, args))

    def println(self, indent: bool, fmt: str, *args: Any) -> None:
        with self.guard():
            if indent:
                self.indent()
            self.write(_render(fmt, args) + "\n")

    def eol(self) -> None:
        self.write("\n")


def _render(fmt: str, args: tuple[Any, ...]) -> str:
    return fmt.format(*args) if args else fmt


class StreamOutput(Output):
    """Sink writing straight to a text stream."""

    def __init__(self, stream: TextIO | None = None, indent: int = DEFAULT_INDENT) -> None:
        super().__init__(indent)
        self.stream = stream if stream is not None else sys.stdout

    def write(self, text: str) -> None:
        self.stream.write(text)

    def unlock(self) -> None:
        try:
            self.stream.flush()
        finally:
            super().unlock()


class BufferOutput(Output):
    """Sink collecting everything written into memory."""

    def __init__(self, indent: int = DEFAULT_INDENT) -> None:
        super().__init__(indent)
        self._buffer = io.StringIO()

    def write(self, text: str) -> None:
        self._buffer.write(text)

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def lines(self) -> list[str]:
        """Written lines with indentation stripped."""
        return [line.strip() for line in self.getvalue().splitlines()]

    def clear(self) -> None:
        self._buffer = io.StringIO()


def create_output_stdio(stream: TextIO | None = None, indent: int = DEFAULT_INDENT) -> StreamOutput:
    """Create an Output that writes directly to `stream` (stdout by default)."""
    return StreamOutput(stream, indent)
