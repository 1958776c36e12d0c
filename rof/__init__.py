"""
rof — run a command, revert the working directory if it fails.

rof snapshots every top-level regular file of the current directory,
runs the given command through the shell, and, when the command exits
non-zero, copies the snapshots back over the originals:

- One generation of snapshots per run, tied together by a run tag
- Snapshots live in ``.rof_snapshots`` and are removed after every run
- The command's own exit code is passed through

Quick Start::

    $ rof sh -c "echo 3 > a.txt; exit 1"
    rof: Command failed with result 1. Restoring files from snapshots...
    rof: Restored file: a.txt

Or from Python::

    from rof import Runner

    report = Runner().run("make test")
    print(report.exit_code, report.restored)

:license: Apache-2.0
"""

from rof.config.schema import RofConfig
from rof.core.executor import CommandExecutor
from rof.core.runner import Runner
from rof.core.state import ExecutionResult, RunReport, RunState
from rof.core.tag import new_run_tag
from rof.exceptions import GenerationMismatchError, RofError
from rof.rollback.entry import SnapshotEntry

__version__ = "0.1.0"
__license__ = "Apache-2.0"

__all__ = [
    # Main class
    "Runner",
    # Enums
    "RunState",
    # Data models
    "RunReport",
    "ExecutionResult",
    "SnapshotEntry",
    "RofConfig",
    # Collaborators
    "CommandExecutor",
    "new_run_tag",
    # Errors
    "RofError",
    "GenerationMismatchError",
    # Version
    "__version__",
]
