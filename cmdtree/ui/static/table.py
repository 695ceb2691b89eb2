#!/usr/bin/env python3
# cmdtree/ui/static/table.py
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from ..utils import print_line, strip_ansi

if TYPE_CHECKING:
    from .output import Output


def _visible_len(cell: str) -> int:
    return len(strip_ansi(cell))


def _column_widths(rows: Iterable[Sequence[str]]) -> List[int]:
    widths: List[int] = []
    for row in rows:
        widths.extend([0] * (len(row) - len(widths)))
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], _visible_len(cell))
    return widths


def format_table(
    rows: Sequence[Sequence[object]],
    headers: Optional[Sequence[object]] = None,
    *,
    padding: int = 1,
) -> str:
    """
    Lay out `rows` in left-aligned columns without borders.

    Columns are separated by 2 * `padding` spaces; headers, when given, are
    underlined with dashes. Widths ignore escape sequences.
    """
    body = [[str(cell) for cell in row] for row in rows]
    head = [str(cell) for cell in headers] if headers else []
    widths = _column_widths([head, *body])
    separator = " " * (2 * padding)

    def line(cells: Sequence[str]) -> str:
        padded = (cell.ljust(width + len(cell) - _visible_len(cell))
                  for cell, width in zip(cells, widths))
        return separator.join(padded).rstrip()

    lines = [line(row) for row in body]
    if head:
        lines[:0] = [line(head), line(["-" * width for width in widths])]
    return "\n".join(lines)


def print_table(
    rows: Sequence[Sequence[object]],
    headers: Optional[Sequence[object]] = None,
    *,
    padding: int = 1,
    out: "Output | None" = None,
) -> None:
    """Print a table to `out` as indented lines, or to stdout when no sink is given."""
    text = format_table(rows, headers, padding=padding)
    if out is None:
        print_line(text)
        return
    with out.guard():
        for row_text in text.splitlines():
            out.println(True, row_text)
