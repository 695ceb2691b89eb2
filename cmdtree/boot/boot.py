#!/usr/bin/env python3
# cmdtree/boot/boot.py
from __future__ import annotations
"""
Start-up for an interactive command console.

Steps:
- Load configuration (falling back to defaults with a warning when invalid).
- Initialise the logger.
- Build the Dispatcher and the stdio Output.
- Load command plugins into the tree.
"""

from dataclasses import dataclass
import logging
from typing import Any, Callable

from cmdtree.config import AppConfig, default_config, load_config
from cmdtree.interface import Dispatcher, load_commands
from cmdtree.ui import Output, colorize, create_output_stdio, init_logger, print_line


@dataclass(slots=True)
class BootState:
    dispatcher: Dispatcher
    output: Output
    logger: logging.Logger
    config: AppConfig
    loaded_count: int


def _step(label: str, fn: Callable[[], Any], *, verbose: bool) -> Any:
    """Run a boot step, printing its status when verbose."""
    try:
        out = fn()
    except Exception as exc:
        if verbose:
            print_line(
                colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
            )
        raise
    if verbose:
        print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def _load_config_or_defaults() -> AppConfig:
    try:
        return load_config()
    except ValueError as exc:
        print_line(
            colorize(f"[ WARN ] Invalid configuration, using defaults: {exc}", "yellow"))
        return default_config()


def boot_sequence(
    config: AppConfig | None = None,
    *,
    output: Output | None = None,
    user: Any = None,
) -> BootState:
    # ---------- config ----------
    if config is None:
        config = _load_config_or_defaults()
    verbose = config.show_banner

    # ---------- logging ----------
    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "cmdtree",
            level=getattr(logging, config.log_level),
            logfile=str(config.log_file_path) if config.log_file_path else None,
        ),
        verbose=verbose,
    )

    # ---------- dispatcher ----------
    dispatcher = _step(
        "Create dispatcher",
        lambda: Dispatcher.from_config(config, user),
        verbose=verbose,
    )
    if output is None:
        output = create_output_stdio(indent=config.indent_width)

    # ---------- commands ----------
    if config.plugin_package:
        _step(
            f"Load commands from '{config.plugin_package}'",
            lambda: load_commands(dispatcher, config.plugin_package),
            verbose=verbose,
        )
    loaded_count = len(dispatcher.registry)
    logger.debug("boot complete: %d command node(s)", loaded_count)
    _step(f"Boot complete ({loaded_count} commands)", lambda: None, verbose=verbose)

    return BootState(
        dispatcher=dispatcher,
        output=output,
        logger=logger,
        config=config,
        loaded_count=loaded_count,
    )
