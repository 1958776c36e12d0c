"""
Command Executor
~~~~~~~~~~~~~~~~

Runs the user's command through a shell with the terminal's standard
streams passed straight through.
"""

from __future__ import annotations

import logging
import signal
import subprocess

from rof.core.state import ExecutionResult
from rof.exceptions import CommandLaunchError

__all__ = ["CommandExecutor"]

logger = logging.getLogger(__name__)


class CommandExecutor:
    """
    Blocking shell command runner.

    stdin, stdout and stderr are inherited, so the user sees live output
    exactly as if the command ran directly. There is no timeout.
    """

    def __init__(self, shell: str = "/bin/sh") -> None:
        self._shell = shell

    @property
    def shell(self) -> str:
        return self._shell

    def run(self, command_line: str) -> ExecutionResult:
        """
        Run ``command_line`` and wait for it.

        Returns:
            The command's exit status, or exit code 1 with ``error`` set
            when the shell could not be started.
        """
        try:
            proc = self._spawn(command_line)
        except CommandLaunchError as exc:
            logger.error("Failed to run command: %s", exc)
            return ExecutionResult(exit_code=1, error=str(exc))

        while True:
            try:
                returncode = proc.wait()
                break
            except KeyboardInterrupt:
                # The terminal delivered the interrupt to the child as well.
                logger.debug("Interrupted, waiting for the command to exit")

        return ExecutionResult(exit_code=self._normalize(returncode))

    def _spawn(self, command_line: str) -> subprocess.Popen:
        try:
            return subprocess.Popen([self._shell, "-c", command_line])
        except OSError as exc:
            raise CommandLaunchError(
                f"{self._shell}: {exc.strerror or exc}",
                details={"shell": self._shell, "command": command_line},
            ) from exc

    @staticmethod
    def _normalize(returncode: int) -> int:
        """Map death-by-signal (negative return codes) to 128 + signal number."""
        if returncode < 0:
            signum = -returncode
            try:
                name = signal.Signals(signum).name
            except ValueError:
                name = str(signum)
            logger.debug("Command terminated by signal %s", name)
            return 128 + signum
        return returncode
