"""tmux command wrapper.

Thin layer that turns session operations into tmux invocations through an
injected ``CommandExecutor``. It never decides *which* operations to run;
that is the job of ``sessionizer.session_controller``.
"""

import logging

from sessionizer.models.session_models import SessionStats
from sessionizer.session_parser import parse_sessions
from sessionizer.tmux_executor import CommandExecutor, CommandResult, SubprocessExecutor

logger = logging.getLogger(__name__)


class Tmux:
    """Issue tmux subcommands.

    Every method blocks until tmux exits and returns the captured
    CommandResult so callers can surface its output.
    """

    PROGRAM = "tmux"

    def __init__(self, executor: CommandExecutor | None = None, verbose: bool = False):
        """Initialize tmux wrapper.

        Args:
            executor: Command executor (defaults to SubprocessExecutor)
            verbose: Log every executed command at INFO
        """
        self.executor = executor if executor is not None else SubprocessExecutor()
        self.verbose = verbose

    def _execute(self, args: list[str]) -> CommandResult:
        return self.executor.execute(self.PROGRAM, args, self.verbose)

    def is_running(self) -> bool:
        """Check whether a tmux server process exists."""
        return self.executor.execute("pgrep", ["tmux"], False).success

    def has_session(self, session_name: str) -> bool:
        """Check whether a session exists; only the exit status is used."""
        return self._execute(["has-session", "-t", session_name]).success

    def new_session(self, session_name: str, cwd: str, detached: bool) -> CommandResult:
        """Create a session starting in ``cwd``.

        A non-detached create blocks and becomes the user's terminal session.
        """
        if detached:
            return self._execute(["new-session", "-ds", session_name, "-c", cwd])
        return self._execute(["new-session", "-s", session_name, "-c", cwd])

    def new_grouped_session(self, target_session: str, session_name: str) -> CommandResult:
        """Create a detached session sharing the windows of ``target_session``."""
        return self._execute(["new-session", "-d", "-t", target_session, "-s", session_name])

    def attach(self, session_name: str) -> CommandResult:
        return self._execute(["attach", "-t", session_name])

    def switch_client(self, session_name: str) -> CommandResult:
        return self._execute(["switch-client", "-t", session_name])

    def kill_session(self, session_name: str | None = None) -> CommandResult:
        """Kill a session, or the current one when no name is given."""
        if session_name is None:
            return self._execute(["kill-session"])
        return self._execute(["kill-session", "-t", session_name])

    def list_sessions(self) -> CommandResult:
        return self._execute(["list-sessions"])

    def get_active_sessions(self) -> dict[str, SessionStats]:
        """Get live sessions keyed by name.

        tmux exits non-zero with no output when no server is running; that
        is reported as an empty mapping.

        Raises:
            ParseError: If the listing is malformed
            ProcessError: If tmux cannot be run or prints non-UTF-8 output
        """
        result = self.list_sessions()
        output = result.stdout_text()

        if not result.success and not output.strip():
            logger.debug(f"No tmux sessions: {result.get_output() or 'no server running'}")
            return {}

        return parse_sessions(output)


__all__ = ["Tmux"]
