"""Command execution module.

This module runs external programs (tmux, pgrep) on behalf of the
multiplexer wrapper. Callers depend only on the ``CommandExecutor``
protocol so tests can swap in a recording fake.

Security:
- Arguments passed as a list, no shell=True
- stdin inherited so tmux can take over the terminal
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from sessionizer.exceptions import ProcessError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result from running an external command.

    A non-zero exit status is not an error at this level; callers inspect
    ``exit_status`` themselves (``has-session`` relies on it).
    """

    stdout: bytes
    stderr: bytes
    exit_status: int

    @property
    def success(self) -> bool:
        return self.exit_status == 0

    def stdout_text(self) -> str:
        """Decode stdout as UTF-8.

        Raises:
            ProcessError: If the output is not valid UTF-8
        """
        try:
            return self.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProcessError(f"Command output is not valid UTF-8: {e}") from e

    def get_output(self) -> str:
        """Get combined output for diagnostics."""
        stdout = self.stdout.decode("utf-8", errors="replace").strip()
        stderr = self.stderr.decode("utf-8", errors="replace").strip()
        if stdout and stderr:
            return f"{stdout}\n{stderr}"
        return stdout or stderr


@runtime_checkable
class CommandExecutor(Protocol):
    """Capability to run an external program and capture its output."""

    def execute(self, program: str, args: list[str], verbose: bool = False) -> CommandResult:
        """Run ``program`` with ``args`` and wait for it to exit.

        Must not raise on a non-zero exit status.

        Raises:
            ProcessError: If the program cannot be started
        """
        ...


class SubprocessExecutor:
    """Run commands with subprocess, blocking until they exit."""

    def execute(self, program: str, args: list[str], verbose: bool = False) -> CommandResult:
        """Execute a command and capture stdout/stderr.

        Args:
            program: Program name looked up on PATH
            args: Argument list
            verbose: Log the command line at INFO instead of DEBUG

        Returns:
            CommandResult object

        Raises:
            ProcessError: If the program cannot be started
        """
        cmd = [program, *args]
        cmd_str = shlex.join(cmd)
        if verbose:
            logger.info(f"Executing cmd: '{cmd_str}'")
        else:
            logger.debug(f"Executing cmd: '{cmd_str}'")

        try:
            result = subprocess.run(
                cmd,
                stdin=None,
                capture_output=True,
                check=False,  # Callers inspect the exit status
            )
        except OSError as e:
            raise ProcessError(f"Failed to execute '{cmd_str}': {e}") from e

        return CommandResult(
            stdout=result.stdout,
            stderr=result.stderr,
            exit_status=result.returncode,
        )


__all__ = ["CommandExecutor", "CommandResult", "SubprocessExecutor"]
