# cmdtree/plugins/shell/__init__.py
from __future__ import annotations

"""
Console command group:
- help / history / echo
- alias add | remove | list
- ident set | remove | list
"""

CATEGORY_DESCRIPTION = "Built-in console commands (help, history, aliases, identifiers)."
