"""Shared fixtures for rof tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from datetime import datetime

import pytest

from rof.config.defaults import CONFIG_ENV_VAR
from rof.core.state import ExecutionResult
from rof.rollback.snapshot_store import SnapshotStore


class FakeExecutor:
    """
    Stands in for the shell: runs a Python callable as "the command".

    The callable may touch files in the working directory and returns the
    exit code to report.
    """

    def __init__(self, action: Callable[[], int] | None = None, error: str | None = None):
        self._action = action or (lambda: 0)
        self._error = error
        self.commands: list[str] = []

    def run(self, command_line: str) -> ExecutionResult:
        self.commands.append(command_line)
        if self._error is not None:
            return ExecutionResult(exit_code=1, error=self._error)
        return ExecutionResult(exit_code=self._action())


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep user configuration and CLI logging state out of the tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    yield
    rof_logger = logging.getLogger("rof")
    for handler in list(rof_logger.handlers):
        rof_logger.removeHandler(handler)
    rof_logger.setLevel(logging.NOTSET)
    rof_logger.propagate = True


@pytest.fixture
def workdir(tmp_path, monkeypatch) -> str:
    """An empty working directory the test runs inside."""
    d = tmp_path / "work"
    d.mkdir()
    monkeypatch.chdir(d)
    return str(d)


@pytest.fixture
def seeded_workdir(workdir) -> str:
    """Working directory holding a.txt ("1") and b.txt ("2")."""
    with open(os.path.join(workdir, "a.txt"), "w") as f:
        f.write("1")
    with open(os.path.join(workdir, "b.txt"), "w") as f:
        f.write("2")
    return workdir


@pytest.fixture
def store(workdir) -> SnapshotStore:
    """A SnapshotStore with default settings for the working directory."""
    return SnapshotStore(workdir=workdir)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """A clock frozen at 2026-01-02 03:04:05 (tag 20260102030405)."""
    return lambda: datetime(2026, 1, 2, 3, 4, 5)


@pytest.fixture
def make_executor() -> type[FakeExecutor]:
    """Factory for executors that run a Python callable instead of a shell."""
    return FakeExecutor
