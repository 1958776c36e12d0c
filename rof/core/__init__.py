"""rof core module — run tags, command execution, and the run state machine."""

from rof.core.executor import CommandExecutor
from rof.core.runner import Runner
from rof.core.state import EXIT_RESTORE_ABORTED, ExecutionResult, RunReport, RunState
from rof.core.tag import new_run_tag

__all__ = [
    "Runner",
    "RunState",
    "RunReport",
    "ExecutionResult",
    "CommandExecutor",
    "new_run_tag",
    "EXIT_RESTORE_ABORTED",
]
