"""
rof Custom Exceptions
~~~~~~~~~~~~~~~~~~~~~

All custom exception classes for rof, organized by domain.

Only :class:`GenerationMismatchError` ever escapes a run; every other
failure is caught where it happens and reported as a warning.

**Structured Error Messages**

Fatal exceptions provide two structured fields:
- ``what_happened``: Clear plain-English description
- ``how_to_fix``: Concrete, actionable steps
"""

__all__ = [
    # Base
    "RofError",
    # Config
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigValidationError",
    # Snapshot
    "SnapshotError",
    "SnapshotDirectoryError",
    "SnapshotCopyError",
    # Execution
    "ExecutionError",
    "CommandLaunchError",
    # Restore
    "RestoreError",
    "RestoreCopyError",
    "GenerationMismatchError",
]


# ── Formatting Helper ────────────────────────────────────────────────────────

_SEPARATOR = "─" * 52


def _format_structured_error(
    title: str,
    what_happened: str,
    how_to_fix: str,
) -> str:
    """Build a rich, structured error message."""
    lines = [
        f"  {title}",
        f"  {_SEPARATOR}",
        "  What happened:",
        *[f"    {line}" for line in what_happened.strip().splitlines()],
        "",
        "  How to fix:",
        *[f"    {line}" for line in how_to_fix.strip().splitlines()],
    ]
    return "\n".join(lines)


# ── Base Exception ───────────────────────────────────────────────────────────


class RofError(Exception):
    """Base exception for all rof errors."""

    def __init__(self, message: str = "", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


# ── Config Exceptions ────────────────────────────────────────────────────────


class ConfigError(RofError):
    """Base exception for configuration-related errors."""


class ConfigFileNotFoundError(ConfigError):
    """Raised when a configuration file cannot be found at the specified path."""


class ConfigValidationError(ConfigError):
    """Raised when configuration values fail validation."""


# ── Snapshot Exceptions ──────────────────────────────────────────────────────


class SnapshotError(RofError):
    """Base exception for snapshot errors."""


class SnapshotDirectoryError(SnapshotError):
    """Raised when the snapshot directory cannot be created or listed."""


class SnapshotCopyError(SnapshotError):
    """Raised when a single file cannot be copied into the snapshot directory."""


# ── Execution Exceptions ─────────────────────────────────────────────────────


class ExecutionError(RofError):
    """Base exception for command execution errors."""


class CommandLaunchError(ExecutionError):
    """Raised when the shell running the command cannot be started."""


# ── Restore Exceptions ───────────────────────────────────────────────────────


class RestoreError(RofError):
    """Base exception for restoration errors."""


class RestoreCopyError(RestoreError):
    """Raised when a single snapshot cannot be copied back over its original."""


class GenerationMismatchError(RestoreError):
    """
    Raised when the snapshot directory holds an entry from another run.

    Restoration stops before any file is touched, and the snapshot
    directory is left in place so the user can recover by hand.

    Structured fields:
    - ``what_happened``: which entry carried which tag
    - ``how_to_fix``: how to recover manually
    """

    def __init__(
        self,
        message: str = "Snapshot generation mismatch",
        tag: str = "",
        entry_name: str = "",
        snapshot_dir: str = "",
        details: dict | None = None,
        what_happened: str = "",
        how_to_fix: str = "",
    ) -> None:
        self.tag = tag
        self.entry_name = entry_name
        self.snapshot_dir = snapshot_dir
        self.what_happened = what_happened or (
            f'Snapshot "{entry_name}" does not belong to run {tag}.\n'
            f"Restoring it could bring back the wrong version of a file,\n"
            f"so no file was restored."
        )
        self.how_to_fix = how_to_fix or (
            f"1. Inspect the snapshots left in {snapshot_dir}/\n"
            f"2. Copy the files ending in .{tag}.bak back by hand\n"
            f"3. Remove {snapshot_dir}/ before the next run"
        )
        super().__init__(message, details)

    def __str__(self) -> str:
        return _format_structured_error(
            title=f"GenerationMismatchError: {self.args[0]}",
            what_happened=self.what_happened,
            how_to_fix=self.how_to_fix,
        )
