"""
rof Run State & Report
~~~~~~~~~~~~~~~~~~~~~~

The states an invocation moves through and the data models that
describe one command execution and one whole run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

__all__ = ["RunState", "ExecutionResult", "RunReport", "EXIT_RESTORE_ABORTED"]

# Exit status used when restoration hard-aborts.
EXIT_RESTORE_ABORTED = 70


class RunState(StrEnum):
    """
    Lifecycle of a single rof invocation.

    - START: Nothing has happened yet.
    - SNAPSHOTTING: Copying top-level files into the snapshot directory.
    - EXECUTING: The user's command is running.
    - SUCCEEDED: The command exited 0.
    - RESTORING: The command failed; snapshots are being applied.
    - CLEANING_UP: Removing the snapshot directory.
    - EXIT: Normal termination with the command's exit code.
    - ABORTED: Restoration found another run's snapshot; cleanup skipped.
    """

    START = "START"
    SNAPSHOTTING = "SNAPSHOTTING"
    EXECUTING = "EXECUTING"
    SUCCEEDED = "SUCCEEDED"
    RESTORING = "RESTORING"
    CLEANING_UP = "CLEANING_UP"
    EXIT = "EXIT"
    ABORTED = "ABORTED"

    def is_terminal(self) -> bool:
        """Return True if no further transition can happen."""
        return self in (RunState.EXIT, RunState.ABORTED)


@dataclass
class ExecutionResult:
    """Outcome of running the user's command."""

    exit_code: int
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0 and self.error is None

    @property
    def launched(self) -> bool:
        """Return False if the shell could not be started at all."""
        return self.error is None


@dataclass
class RunReport:
    """Summary of one rof invocation."""

    tag: str
    command: str
    state: RunState = RunState.START
    exit_code: int = 0
    snapshotted: list[str] = field(default_factory=list)
    restored: list[str] = field(default_factory=list)
    history: list[RunState] = field(default_factory=lambda: [RunState.START])

    def advance(self, state: RunState) -> None:
        """Move to ``state`` and remember the transition."""
        self.state = state
        self.history.append(state)

    @property
    def restoration_attempted(self) -> bool:
        return RunState.RESTORING in self.history
