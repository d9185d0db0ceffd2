"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import TasklistConfig

logger = logging.getLogger(__name__)

APP_DIR_NAME = "tasklist"
PROJECT_CONFIG_NAME = ".tasklist.json"

# Global cache to avoid reloading config multiple times per process
_config_cache: TasklistConfig | None = None


def get_xdg_config_home() -> Path:
    """Return ``$XDG_CONFIG_HOME``, or ``~/.config`` when it is unset or empty."""
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")


def user_config_dir() -> Path:
    """Directory holding the user's config.json and .env."""
    return get_xdg_config_home() / APP_DIR_NAME


def get_user_config_path() -> Path:
    return user_config_dir() / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    return (cwd or Path.cwd()) / PROJECT_CONFIG_NAME


def merge_layer(merged: dict[str, Any], layer: dict[str, Any]) -> dict[str, Any]:
    """
    Lay one config layer over the merged result so far.

    Config is sections of scalar/list settings, so a section present in
    both is merged key by key and anything else in ``layer`` replaces the
    existing value. Neither input is modified.

    Example:
        >>> merge_layer({"server": {"host": "h", "port": 1}}, {"server": {"port": 2}})
        {'server': {'host': 'h', 'port': 2}}
    """
    result = dict(merged)
    for name, value in layer.items():
        current = result.get(name)
        if isinstance(current, dict) and isinstance(value, dict):
            result[name] = {**current, **value}
        else:
            result[name] = value
    return result


def read_config_layer(path: Path) -> dict[str, Any]:
    """
    Read one JSON config file.

    A missing file is an empty layer. A file that cannot be read or parsed,
    or whose top level is not an object, is logged and treated as empty.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Skipping config %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Skipping config %s: top level must be an object", path)
        return {}
    return data


def _section(result: dict[str, Any], name: str) -> dict[str, Any]:
    section = result.get(name)
    result[name] = dict(section) if isinstance(section, dict) else {}
    return result[name]


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        TASKLIST_DATA_FILE - overrides storage.data_file
        TASKLIST_HOST - overrides server.host
        TASKLIST_PORT - overrides server.port
        TASKLIST_CORS_ORIGINS - overrides server.cors_origins (comma separated)
        TASKLIST_LOG_LEVEL - overrides logging.level

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if data_file := os.environ.get("TASKLIST_DATA_FILE"):
        _section(result, "storage")["data_file"] = data_file

    if host := os.environ.get("TASKLIST_HOST"):
        _section(result, "server")["host"] = host

    if port_str := os.environ.get("TASKLIST_PORT"):
        try:
            _section(result, "server")["port"] = int(port_str)
        except ValueError:
            logger.warning("Invalid TASKLIST_PORT value '%s', ignoring", port_str)

    if origins_str := os.environ.get("TASKLIST_CORS_ORIGINS"):
        origins = [o.strip() for o in origins_str.split(",") if o.strip()]
        _section(result, "server")["cors_origins"] = origins

    if level := os.environ.get("TASKLIST_LOG_LEVEL"):
        _section(result, "logging")["level"] = level

    return result


def get_default_config() -> dict[str, Any]:
    """Get hardcoded default configuration."""
    return {
        "storage": {"data_file": "data/tasks.json"},
        "server": {
            "host": "127.0.0.1",
            "port": 3001,
            "cors_origins": ["http://localhost:3000"],
        },
        "logging": {"level": "INFO"},
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> TasklistConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (TASKLIST_*)
        2. Project config (.tasklist.json)
        3. User config (~/.config/tasklist/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Project directory to load .tasklist.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated TasklistConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    for path in (get_user_config_path(), get_project_config_path(project_dir)):
        merged = merge_layer(merged, read_config_layer(path))

    merged = apply_env_overrides(merged)

    config = TasklistConfig(**merged)
    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
