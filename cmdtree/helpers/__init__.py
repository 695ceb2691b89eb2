#!/usr/bin/env python3
# cmdtree/helpers/__init__.py
from __future__ import annotations

from .strings import (
    MATCH_EXACT,
    MATCH_NONE,
    edit_distance,
    parse_integer,
    prefix_score,
)

__all__ = [
    "MATCH_EXACT",
    "MATCH_NONE",
    "edit_distance",
    "parse_integer",
    "prefix_score",
]
