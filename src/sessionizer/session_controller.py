"""Session controller.

Decides which tmux operations to issue to reach the chosen session, given
whether a tmux server is running and whether the caller already sits inside
a tmux session:

    server down, outside tmux  -> new-session (attached); done
    otherwise                  -> new-session -d   (only if missing)
                                  new-session -d -t (only if grouped)
                                  attach            (outside tmux)
                                  switch-client     (inside tmux)

A failing operation aborts the rest of the sequence. Nothing already done is
rolled back.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from sessionizer.exceptions import SessionizerError
from sessionizer.models.session_models import PromptItem
from sessionizer.tmux_client import Tmux
from sessionizer.tmux_executor import CommandResult

logger = logging.getLogger(__name__)


class SessionControllerError(SessionizerError):
    """Raised when a session operation cannot be carried out."""

    pass


@dataclass(frozen=True)
class ExecutionContext:
    """Caller state observed once, at invocation time."""

    multiplexer_running: bool
    inside_session: bool

    @classmethod
    def observe(cls, tmux: Tmux, environ: Mapping[str, str] | None = None) -> "ExecutionContext":
        """Check the tmux server and the ``TMUX`` environment variable."""
        env = os.environ if environ is None else environ
        return cls(multiplexer_running=tmux.is_running(), inside_session="TMUX" in env)


class SessionController:
    """Drive tmux from the chosen candidate to an attached client."""

    def __init__(self, tmux: Tmux):
        self.tmux = tmux

    def _grouped_session_name(self, session_name: str) -> str:
        """First ``<name>-<N>`` not taken by a live session."""
        taken = self.tmux.get_active_sessions()
        index = 1
        while f"{session_name}-{index}" in taken:
            index += 1
        return f"{session_name}-{index}"

    def open_session(
        self, item: PromptItem, context: ExecutionContext, grouped: bool = False
    ) -> list[CommandResult]:
        """Create, attach or switch to the session for ``item``.

        Args:
            item: Chosen candidate
            context: Observed execution context
            grouped: Attach through a grouped session sharing item's windows

        Returns:
            Results of every issued operation, in order, for diagnostics

        Raises:
            ProcessError: If tmux cannot be run; remaining steps are skipped
        """
        logger.debug(f"Selected item: {item}")
        logger.debug(f"Execution context: {context}")

        if not context.multiplexer_running and not context.inside_session:
            return [self.tmux.new_session(item.name, item.workdir.path, detached=False)]

        results: list[CommandResult] = []

        if not self.tmux.has_session(item.name):
            results.append(self.tmux.new_session(item.name, item.workdir.path, detached=True))

        target = item.name
        if grouped:
            target = self._grouped_session_name(item.name)
            results.append(self.tmux.new_grouped_session(item.name, target))

        if not context.inside_session:
            results.append(self.tmux.attach(target))
        else:
            results.append(self.tmux.switch_client(target))

        return results

    def kill_session(self, session_name: str | None, context: ExecutionContext) -> CommandResult:
        """Kill a named session, or the caller's current one.

        Raises:
            SessionControllerError: If there is no such session, or no
                current session to kill
            ProcessError: If tmux cannot be run
        """
        if session_name is None:
            if not context.inside_session:
                raise SessionControllerError("Not inside a tmux session, nothing to kill")
            return self.tmux.kill_session()

        if not self.tmux.has_session(session_name):
            raise SessionControllerError(f"No tmux session named '{session_name}'")
        return self.tmux.kill_session(session_name)


__all__ = ["ExecutionContext", "SessionController", "SessionControllerError"]
