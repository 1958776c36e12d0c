"""
Runner
~~~~~~

Sequences one invocation: tag, snapshot, execute, restore on failure,
clean up.

    START → SNAPSHOTTING → EXECUTING → SUCCEEDED ─────┐
                                    └→ RESTORING ─────┤
                                           │          ↓
                                           │     CLEANING_UP → EXIT
                                           └→ ABORTED

ABORTED is reached only through :class:`GenerationMismatchError`, which
propagates to the caller with the snapshot directory left in place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from rof.config.schema import RofConfig
from rof.core.executor import CommandExecutor
from rof.core.state import RunReport, RunState
from rof.core.tag import new_run_tag
from rof.exceptions import GenerationMismatchError
from rof.rollback.cleaner import Cleaner
from rof.rollback.restorer import Restorer
from rof.rollback.snapshot_store import SnapshotStore

__all__ = ["Runner"]

logger = logging.getLogger(__name__)


class Runner:
    """
    Runs a shell command and reverts top-level files if it fails.

    Collaborators can be injected for testing; by default they are built
    from ``config`` for the given working directory.
    """

    def __init__(
        self,
        config: RofConfig | None = None,
        workdir: str | None = None,
        executor: CommandExecutor | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config or RofConfig()
        self._store = SnapshotStore(
            workdir=workdir,
            snapshot_dir=self._config.snapshot_dir,
            suffix=self._config.suffix,
            write_manifest=self._config.manifest,
        )
        self._executor = executor or CommandExecutor(shell=self._config.shell)
        self._restorer = Restorer(self._store)
        self._cleaner = Cleaner(self._store)
        self._clock = clock

    @property
    def store(self) -> SnapshotStore:
        return self._store

    def run(self, command_line: str) -> RunReport:
        """
        Run ``command_line`` under snapshot protection.

        Returns:
            The report of the finished run; ``exit_code`` is the command's.

        Raises:
            GenerationMismatchError: If restoration found a snapshot from
                another run. Cleanup has not run when this is raised.
        """
        tag = new_run_tag(
            clock=self._clock,
            fmt=self._config.tag_format,
            taken=self._store.existing_tags(),
        )
        report = RunReport(tag=tag, command=command_line)

        report.advance(RunState.SNAPSHOTTING)
        entries = self._store.create_snapshots(tag)
        report.snapshotted = [entry.original_name for entry in entries]

        report.advance(RunState.EXECUTING)
        result = self._executor.run(command_line)
        report.exit_code = result.exit_code

        if result.succeeded:
            report.advance(RunState.SUCCEEDED)
        else:
            report.advance(RunState.RESTORING)
            logger.info(
                "Command failed with result %d. Restoring files from snapshots...",
                result.exit_code,
            )
            try:
                report.restored = self._restorer.restore_snapshots(tag)
            except GenerationMismatchError:
                report.advance(RunState.ABORTED)
                raise

        report.advance(RunState.CLEANING_UP)
        self._cleaner.cleanup()

        report.advance(RunState.EXIT)
        return report
