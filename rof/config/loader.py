"""
Configuration Loader
~~~~~~~~~~~~~~~~~~~~

Loads and validates rof YAML configuration, merging with defaults.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import yaml

from rof.config.defaults import CONFIG_ENV_VAR, DEFAULT_CONFIG, LOCAL_CONFIG_NAME
from rof.config.schema import RofConfig
from rof.exceptions import (
    ConfigFileNotFoundError,
    ConfigValidationError,
)

__all__ = ["load_config", "load_config_from_dict", "resolve_config"]

logger = logging.getLogger(__name__)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts, with override taking precedence."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: str) -> RofConfig:
    """
    Load configuration from a YAML file.

    Merges user config with defaults and validates via Pydantic.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated RofConfig instance.

    Raises:
        ConfigFileNotFoundError: If the file doesn't exist.
        ConfigValidationError: If the config fails validation.
    """
    if not os.path.exists(path):
        raise ConfigFileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigValidationError(
            f"Invalid YAML in configuration file: {exc}"
        ) from exc

    if not isinstance(user_config, dict):
        raise ConfigValidationError(
            f"Configuration file must contain a mapping: {path}"
        )

    logger.debug("Loaded configuration from %s", path)
    return load_config_from_dict(user_config)


def load_config_from_dict(data: dict[str, Any]) -> RofConfig:
    """
    Load configuration from a dictionary, merging with defaults.

    Args:
        data: Configuration dictionary.

    Returns:
        Validated RofConfig instance.

    Raises:
        ConfigValidationError: If validation fails.
    """
    merged = _deep_merge(DEFAULT_CONFIG, data)

    try:
        return RofConfig(**merged)
    except Exception as exc:
        raise ConfigValidationError(f"Configuration validation failed: {exc}") from exc


def resolve_config(cwd: str | None = None) -> RofConfig:
    """
    Find and load the configuration for a run.

    ``$ROF_CONFIG`` wins when set; otherwise ``.rof.yaml`` in the working
    directory is used if present; otherwise the defaults apply.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return load_config(env_path)

    local_path = os.path.join(cwd or os.getcwd(), LOCAL_CONFIG_NAME)
    if os.path.isfile(local_path):
        return load_config(local_path)

    return load_config_from_dict({})
