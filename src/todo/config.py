"""User configuration, stored as JSON at ``~/.todo/config.json``.

The directory can be moved with ``TODO_CONFIG_DIR``. Every field is
optional; a missing or unreadable file yields the defaults.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".todo"
CONFIG_FILE_NAME = "config.json"
LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class Config:
    """Runtime settings for the todo TUI."""

    frame_timeout_ms: int = 16
    keybindings: dict[str, str | list[str]] = field(default_factory=dict)
    log_file: str | None = None
    log_level: str = "warning"


# JSON key -> Config attribute
_FIELDS: dict[str, str] = {
    "frameTimeoutMs": "frame_timeout_ms",
    "keybindings": "keybindings",
    "logFile": "log_file",
    "logLevel": "log_level",
}


def get_config_dir() -> Path:
    return Path(os.environ.get("TODO_CONFIG_DIR", Path.home() / CONFIG_DIR_NAME))


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILE_NAME


def config_from_dict(data: dict[str, Any]) -> Config:
    """Build a :class:`Config` from parsed JSON, skipping bad entries."""
    config = Config()
    for key, value in data.items():
        attr = _FIELDS.get(key)
        if attr is None:
            logger.warning("Ignoring unknown config key %r", key)
            continue
        if not _valid(attr, value):
            logger.warning("Ignoring invalid value for %r: %r", key, value)
            continue
        setattr(config, attr, value)
    return config


def _valid(attr: str, value: Any) -> bool:
    if attr == "frame_timeout_ms":
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    if attr == "keybindings":
        return isinstance(value, dict) and all(
            isinstance(keys, str)
            or (isinstance(keys, list) and all(isinstance(k, str) for k in keys))
            for keys in value.values()
        )
    if attr == "log_file":
        return value is None or isinstance(value, str)
    if attr == "log_level":
        return value in LOG_LEVELS
    return False


def load_config(path: Path | None = None) -> Config:
    config_path = path or get_config_path()
    if not config_path.exists():
        return Config()
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Error reading config %s: %s", config_path, e)
        return Config()
    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object", config_path)
        return Config()
    return config_from_dict(data)
