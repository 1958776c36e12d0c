"""
Configuration Schema
~~~~~~~~~~~~~~~~~~~~

Pydantic model for validating rof configuration.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime

from pydantic import BaseModel, field_validator

__all__ = ["RofConfig"]

_SUFFIX_RE = re.compile(r"[A-Za-z0-9_-]+")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RofConfig(BaseModel):
    """
    Root configuration model for rof.

    Validated on load with clear error messages for invalid values.
    """

    snapshot_dir: str = ".rof_snapshots"
    suffix: str = "bak"
    tag_format: str = "%Y%m%d%H%M%S"
    shell: str = "/bin/sh"
    manifest: bool = True
    log_level: str = "INFO"

    model_config = {"extra": "forbid"}

    @field_validator("snapshot_dir")
    @classmethod
    def validate_snapshot_dir(cls, v: str) -> str:
        """The snapshot directory is a single name inside the working directory."""
        if not v or v in (".", "..") or "/" in v or "\\" in v:
            raise ValueError(f"Invalid snapshot directory name: {v!r}")
        return v

    @field_validator("suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        """Letters, digits, "_" and "-" only."""
        if not _SUFFIX_RE.fullmatch(v):
            raise ValueError(f"Invalid snapshot suffix: {v!r}")
        return v

    @field_validator("tag_format")
    @classmethod
    def validate_tag_format(cls, v: str) -> str:
        """The rendered tag must not contain the name separator."""
        sample = datetime(2000, 1, 1).strftime(v)
        if not sample or "." in sample or "/" in sample:
            raise ValueError(f"Invalid run tag format: {v!r}")
        return v

    @field_validator("shell")
    @classmethod
    def validate_shell(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Shell must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v!r}")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)
