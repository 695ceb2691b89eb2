# cmdtree/plugins/__init__.py
"""Stock command plugins loaded by the console at boot."""
