#!/usr/bin/env python3
# cmdtree/config/config.py
from __future__ import annotations

"""
Console configuration.

Sources, later ones winning:
  1) DEFAULTS below
  2) Files in the working directory, in order: .env, cmdtree.ini,
     cmdtree.json, cmdtree.toml (nested tables become UPPER_SNAKE keys)
  3) CMDTREE_* environment variables (prefix stripped)

Every recognised key is coerced and checked before an AppConfig is built;
any bad value raises ValueError. Loading never writes to the filesystem.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping
import configparser
import json
import os
import re
import tomllib

ENV_PREFIX = "CMDTREE_"

DEFAULTS: dict[str, Any] = {
    "PROMPT": "> ",
    "LOG_LEVEL": "WARNING",
    "LOG_FILE_PATH": None,
    "HISTORY_FILE_PATH": str(Path.home() / ".cmdtree_history"),
    "ENABLE_COMPLETION": True,
    "SHOW_BANNER": False,
    "PLUGIN_PACKAGE": "cmdtree.plugins",
    "DELIMITER": ";",
    "FUZZY_THRESHOLD": 3,
    "IDENT_SUBSTITUTION": True,
    "STRICT_NUMBERS": True,
    "INDENT_WIDTH": 2,
}


@dataclass(frozen=True)
class AppConfig:
    prompt: str
    log_level: str
    log_file_path: Path | None
    history_file_path: Path | None
    enable_completion: bool
    show_banner: bool
    plugin_package: str | None

    delimiter: str
    fuzzy_threshold: int
    ident_substitution: bool
    strict_numbers: bool
    indent_width: int

    # keys nobody asked for, kept for inspection
    extra: dict[str, Any] = field(default_factory=dict)


# ---------------- Readers ----------------

_ENV_LINE_RE = re.compile(r"([A-Za-z_]\w*)\s*=\s*(.*)")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1]
    return value


def _read_env(path: Path) -> dict[str, Any]:
    """KEY=VALUE lines; only CMDTREE_ keys are taken since .env files are shared."""
    found: dict[str, Any] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line.startswith("#"):
            continue
        match = _ENV_LINE_RE.fullmatch(line)
        if match and match.group(1).upper().startswith(ENV_PREFIX):
            found[match.group(1)[len(ENV_PREFIX):]] = _unquote(match.group(2).strip())
    return found


def _read_ini(path: Path) -> dict[str, Any]:
    parser = configparser.ConfigParser(interpolation=None)
    with path.open(encoding="utf-8") as fh:
        parser.read_file(fh)
    # sections only group keys; they do not prefix them
    return {key: value for section in parser.sections() for key, value in parser.items(section)}


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path.name}: invalid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: top level must be an object")
    return _flatten(data)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return _flatten(tomllib.load(fh))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"{path.name}: invalid TOML ({exc})") from exc


def _flatten(tree: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """{'log': {'level': 'DEBUG'}} -> {'log_level': 'DEBUG'}"""
    flat: dict[str, Any] = {}
    for key, value in tree.items():
        name = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name))
        else:
            flat[name] = value
    return flat


CONFIG_FILES: tuple[tuple[str, Callable[[Path], dict[str, Any]]], ...] = (
    (".env", _read_env),
    ("cmdtree.ini", _read_ini),
    ("cmdtree.json", _read_json),
    ("cmdtree.toml", _read_toml),
)


# ---------------- Coercion ----------------

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})
_FALSY = frozenset({"0", "false", "no", "n", "off"})
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_MODULE_PATH_RE = re.compile(r"[A-Za-z_][\w.]*")


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUTHY or text in _FALSY:
        return text in _TRUTHY
    raise ValueError(f"not a boolean: {value!r}")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"not an integer: {value!r}") from None


def _to_optional(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return None if text.strip().lower() in ("", "none") else text


def _to_text(value: Any) -> str:
    return "" if value is None else str(value)


def _to_log_level(value: Any) -> str:
    level = str(value).strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"expected one of {', '.join(_LOG_LEVELS)}, got {value!r}")
    return level


def _to_delimiter(value: Any) -> str:
    text = str(value)
    if len(text) != 1 or text.isspace():
        raise ValueError(f"must be one non-whitespace character, got {text!r}")
    if text in "-$?":
        raise ValueError(f"{text!r} already has a meaning inside statements")
    return text


def _to_module_path(value: Any) -> str | None:
    text = _to_optional(value)
    if text is not None and not _MODULE_PATH_RE.fullmatch(text):
        raise ValueError(f"not a module path: {text!r}")
    return text


def _at_least(minimum: int) -> Callable[[Any], int]:
    def check(value: Any) -> int:
        number = _to_int(value)
        if number < minimum:
            raise ValueError(f"must be >= {minimum}, got {number}")
        return number
    return check


def _path_under(base: Path) -> Callable[[Any], Path | None]:
    def resolve(value: Any) -> Path | None:
        text = _to_optional(value)
        if text is None:
            return None
        path = Path(os.path.expandvars(text)).expanduser()
        return path if path.is_absolute() else (base / path).resolve()
    return resolve


def _coercers(base: Path) -> dict[str, Callable[[Any], Any]]:
    """Key -> coercer producing the AppConfig field value."""
    return {
        "PROMPT": _to_text,
        "LOG_LEVEL": _to_log_level,
        "LOG_FILE_PATH": _path_under(base),
        "HISTORY_FILE_PATH": _path_under(base),
        "ENABLE_COMPLETION": _to_bool,
        "SHOW_BANNER": _to_bool,
        "PLUGIN_PACKAGE": _to_module_path,
        "DELIMITER": _to_delimiter,
        "FUZZY_THRESHOLD": _at_least(1),
        "IDENT_SUBSTITUTION": _to_bool,
        "STRICT_NUMBERS": _to_bool,
        "INDENT_WIDTH": _at_least(0),
    }


# ---------------- Assembly ----------------

def _collect(cwd: Path, environ: Mapping[str, str]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)
    for filename, reader in CONFIG_FILES:
        path = cwd / filename
        if path.is_file():
            merged.update({str(k).upper(): v for k, v in reader(path).items()})
    merged.update({
        key[len(ENV_PREFIX):]: value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX) and re.fullmatch(r"[A-Z0-9_]+", key)
    })
    return merged


def _build(values: Mapping[str, Any], cwd: Path) -> AppConfig:
    fields: dict[str, Any] = {}
    for key, coerce in _coercers(cwd).items():
        try:
            fields[key.lower()] = coerce(values.get(key, DEFAULTS[key]))
        except ValueError as exc:
            raise ValueError(f"{key}: {exc}") from exc
    extra = {key: value for key, value in values.items() if key not in DEFAULTS}
    return AppConfig(**fields, extra=extra)


def load_config(
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Merge every source and validate the result.

    `cwd` defaults to the process working directory and `environ` to
    os.environ. Raises ValueError naming the offending key.
    """
    base = (cwd or Path.cwd()).resolve()
    return _build(_collect(base, os.environ if environ is None else environ), base)


def default_config() -> AppConfig:
    """AppConfig built from DEFAULTS alone."""
    return _build(DEFAULTS, Path.cwd())
