"""rof configuration — loading, validation, and defaults."""

from rof.config.defaults import DEFAULT_CONFIG
from rof.config.loader import load_config, load_config_from_dict, resolve_config
from rof.config.schema import RofConfig

__all__ = [
    "load_config",
    "load_config_from_dict",
    "resolve_config",
    "RofConfig",
    "DEFAULT_CONFIG",
]
