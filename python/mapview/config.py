"""Grouping configuration: defaults, JSON config file and overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping, Optional

from .classify import parse_name_list
from .stats import GroupingParams

LOGGER = logging.getLogger("mapview.config")

DEFAULT_CONFIG_PATH = Path.home() / ".mapview.json"
LOG_LEVEL_ENV = "MAPVIEW_LOG"

_BOOL_KEYS = {
    "showObjectFiles": "show_object_files",
    "groupByGroup": "group_by_group",
    "groupByModule": "group_by_module",
}
_NAME_KEYS = {
    "bssSectionNames": "bss",
    "dataSectionNames": "data",
    "textSectionNames": "text",
}
_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    """Raised for unreadable or ill-typed configuration."""


def default_log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, "WARNING")


def parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ConfigError(f"{key} must be a boolean (got {value!r})")


def _name_list(value: Any, key: str):
    if isinstance(value, str):
        return parse_name_list(value)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return parse_name_list(value)
    raise ConfigError(f"{key} must be a string or a list of strings (got {value!r})")


def apply_settings(params: GroupingParams, settings: Mapping[str, Any]) -> GroupingParams:
    """Return ``params`` updated from camelCase ``settings`` keys."""
    updates: dict[str, Any] = {}
    names: dict[str, Any] = {}
    for key, value in settings.items():
        if key in _BOOL_KEYS:
            updates[_BOOL_KEYS[key]] = parse_bool(value, key)
        elif key in _NAME_KEYS:
            names[_NAME_KEYS[key]] = _name_list(value, key)
        else:
            LOGGER.warning("ignoring unknown configuration key %r", key)
    if names:
        updates["names"] = replace(params.names, **names)
    return replace(params, **updates) if updates else params


def params_to_settings(params: GroupingParams) -> dict[str, Any]:
    return {
        "showObjectFiles": params.show_object_files,
        "groupByGroup": params.group_by_group,
        "groupByModule": params.group_by_module,
        "bssSectionNames": list(params.names.bss),
        "dataSectionNames": list(params.names.data),
        "textSectionNames": list(params.names.text),
    }


def load_config(path: Optional[Path | str] = None, *, params: Optional[GroupingParams] = None) -> GroupingParams:
    """Read grouping settings from a JSON file.

    With no explicit ``path`` the default ``~/.mapview.json`` is used when it
    exists; an explicit path that does not exist is an error.
    """
    base = params or GroupingParams()
    if path is None:
        candidate = DEFAULT_CONFIG_PATH
        if not candidate.exists():
            return base
    else:
        candidate = Path(path).expanduser()
    try:
        payload = json.loads(candidate.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"cannot read config {candidate}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"invalid JSON in {candidate}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"config {candidate} must contain a JSON object")
    LOGGER.debug("loaded config from %s", candidate)
    return apply_settings(base, payload)


__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "LOG_LEVEL_ENV",
    "apply_settings",
    "default_log_level",
    "load_config",
    "parse_bool",
    "params_to_settings",
]
