#!/usr/bin/env python3
# cmdtree/interface/loader.py
from __future__ import annotations

"""
Dynamic command loader.

Features:
- Imports all modules under a given package (default: 'cmdtree.plugins').
- Supports 'entrypoint.py' inside a subpackage.
- A module contributes commands through either:
    register(dispatcher)  -- builds its part of the tree itself, or
    COMMANDS              -- iterable of CommandNode subclasses added as top-level commands.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Iterable

from cmdtree.commands import CommandNode

if TYPE_CHECKING:
    from cmdtree.interface.handler import Dispatcher

logger = logging.getLogger(__name__)

DEFAULT_PLUGIN_PACKAGE = "cmdtree.plugins"


def _register_from_module(dispatcher: "Dispatcher", module: ModuleType) -> int:
    """Register commands exported by `module`; returns how many hooks ran."""
    registered_count = 0
    register = getattr(module, "register", None)
    if callable(register):
        register(dispatcher)
        registered_count += 1
    commands = getattr(module, "COMMANDS", None)
    if isinstance(commands, Iterable):
        for item in commands:
            if isinstance(item, type) and issubclass(item, CommandNode):
                dispatcher.add_command(item)
                registered_count += 1
    return registered_count


def load_commands(dispatcher: "Dispatcher", commands_package: str = DEFAULT_PLUGIN_PACKAGE) -> int:
    """
    Import all modules under the given package and register their commands.

    Supported layouts:
      1) Plain modules: pkg/foo.py          -> import pkg.foo
      2) Packages with an entrypoint:
         pkg/bar/entrypoint.py              -> import pkg.bar.entrypoint
      3) Other packages: pkg/baz/__init__.py -> import pkg.baz

    Modules whose name starts with '_' are skipped. Returns the number of
    modules imported.
    """
    package = importlib.import_module(commands_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]

    if not package_paths:
        raise RuntimeError(
            f"'{commands_package}' must be a package (folder) with modules.")

    loaded_count = 0
    for base_path in package_paths:
        for modinfo in sorted(pkgutil.iter_modules([base_path]), key=lambda m: m.name):
            module_name = modinfo.name
            if module_name.startswith("_"):
                continue

            target = f"{commands_package}.{module_name}"
            if modinfo.ispkg and (Path(base_path) / module_name / "entrypoint.py").exists():
                target += ".entrypoint"

            module = importlib.import_module(target)
            loaded_count += 1
            hooks = _register_from_module(dispatcher, module)
            logger.debug("loaded '%s' (%d registration hook(s))", target, hooks)

    return loaded_count
