"""Configuration helpers shared across modules."""

from __future__ import annotations

import json
from collections.abc import Mapping
from contextlib import suppress
from pathlib import Path
from typing import Any

from locale_sync import utils
from locale_sync.discovery import DEFAULT_EXCLUDE

CONFIG_PATH = utils.CONFIG_FILE

DEFAULT_CONFIG: dict[str, Any] = {
    "indent_width": 2,
    "newline": "platform",
    "exclude_dirs": list(DEFAULT_EXCLUDE),
    "log_level": "INFO",
}

ERR_NOT_OBJECT = "Configuration must be a JSON object"
ERR_INDENT = "indent_width must be a non-negative integer, got {value!r}"
ERR_NEWLINE = "newline must be one of {choices}, got {value!r}"
ERR_EXCLUDE = "exclude_dirs must be a list of directory names"
ERR_LOG_LEVEL = "log_level must be one of {choices}, got {value!r}"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when configuration values have the wrong type or value."""


def validate_config(config: Mapping[str, Any]) -> dict[str, Any]:
    """Validate configuration values and return them as a new dict."""
    if not isinstance(config, Mapping):
        raise ConfigError(ERR_NOT_OBJECT)
    cfg = dict(config)
    indent = cfg.get("indent_width")
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        raise ConfigError(ERR_INDENT.format(value=indent))
    newline = cfg.get("newline")
    if not isinstance(newline, str) or newline.strip().lower() not in utils.NEWLINES:
        choices = ", ".join(utils.NEWLINES)
        raise ConfigError(ERR_NEWLINE.format(choices=choices, value=newline))
    exclude = cfg.get("exclude_dirs")
    if not isinstance(exclude, list | tuple) or not all(
        isinstance(name, str) for name in exclude
    ):
        raise ConfigError(ERR_EXCLUDE)
    level = cfg.get("log_level")
    if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
        choices = ", ".join(_LOG_LEVELS)
        raise ConfigError(ERR_LOG_LEVEL.format(choices=choices, value=level))
    return cfg


def load_config_at(path: Path) -> dict[str, Any]:
    """Load configuration from a specific path.

    A missing or unreadable file yields the defaults. Values that are present
    but invalid raise :class:`ConfigError`.
    """
    cfg = dict(DEFAULT_CONFIG)
    cfg["exclude_dirs"] = list(DEFAULT_EXCLUDE)
    if path.exists():
        stored: Any = None
        with suppress(OSError, ValueError):
            stored = json.loads(path.read_text(encoding="utf-8"))
        if stored is None:
            utils.logger.warning("ignoring unreadable config file %s", path)
        elif not isinstance(stored, dict):
            raise ConfigError(ERR_NOT_OBJECT)
        else:
            cfg.update(stored)
    return validate_config(cfg)


def load_config() -> dict[str, Any]:
    """Load configuration using :data:`CONFIG_PATH`."""
    return load_config_at(CONFIG_PATH)


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_CONFIG",
    "ConfigError",
    "load_config",
    "load_config_at",
    "validate_config",
]
