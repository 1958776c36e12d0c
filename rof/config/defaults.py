"""
Default Configuration
~~~~~~~~~~~~~~~~~~~~~

Sensible defaults for rof when no config file is provided.
"""

from __future__ import annotations

__all__ = ["DEFAULT_CONFIG", "CONFIG_ENV_VAR", "LOCAL_CONFIG_NAME"]

CONFIG_ENV_VAR = "ROF_CONFIG"
LOCAL_CONFIG_NAME = ".rof.yaml"

DEFAULT_CONFIG: dict = {
    "snapshot_dir": ".rof_snapshots",
    "suffix": "bak",
    "tag_format": "%Y%m%d%H%M%S",
    "shell": "/bin/sh",
    "manifest": True,
    "log_level": "INFO",
}
