#!/usr/bin/env python3
# cmdtree/config/__init__.py
from __future__ import annotations

"""
Layered configuration (defaults < config files < CMDTREE_* environment).
"""

from .config import AppConfig, DEFAULTS, ENV_PREFIX, default_config, load_config

__all__ = [
    "AppConfig",
    "DEFAULTS",
    "ENV_PREFIX",
    "default_config",
    "load_config",
]
