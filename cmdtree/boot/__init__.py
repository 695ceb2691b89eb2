#!/usr/bin/env python3
# cmdtree/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: configuration, logging, dispatcher and plugin start-up with [  OK  ] / [FAILED] lines.
- BootState: Dataclass holding the dispatcher, output sink, logger, config and command count.
"""


from .boot import BootState, boot_sequence

__all__ = ["boot_sequence", "BootState"]
