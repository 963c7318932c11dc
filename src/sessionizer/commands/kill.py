"""Session kill command for tmux-sessionizer.

Kills the current session, a named one, or one picked interactively from
the live sessions.
"""

import logging

import click

from sessionizer import prompt
from sessionizer.commands.cli_helpers import CliState, echo_results, pass_state, run_guarded
from sessionizer.reconciler import create_prompt_items
from sessionizer.session_controller import ExecutionContext, SessionController

logger = logging.getLogger(__name__)

__all__ = ["kill_command"]


def _pick_live_session(state: CliState) -> str | None:
    """Let the user choose among live sessions only."""
    config = state.config
    items = create_prompt_items([], state.tmux.get_active_sessions(), config.default_dir, sort=True)
    if not items:
        click.echo("No tmux sessions running.")
        return None

    selected = prompt.show(items, config)
    return selected.name if selected is not None else None


@click.command(name="kill")
@click.option("--current", is_flag=True, help="Kill the session this command runs in")
@click.option("--name", "session_name", type=str, help="Name of the session to kill")
@pass_state
def kill_command(state: CliState, current: bool, session_name: str | None) -> None:
    """Kill a tmux session.

    Without options, pick the session to kill from the running ones.

    \b
    Examples:
        tmux-sessionizer kill --current
        tmux-sessionizer kill --name "Projects - api"
        tmux-sessionizer kill
    """
    if current and session_name:
        raise click.UsageError("--current and --name are mutually exclusive")

    def _run() -> None:
        tmux = state.tmux
        context = ExecutionContext.observe(tmux)

        if current:
            if not context.inside_session:
                raise click.UsageError("--current requires running inside a tmux session")
            target = None
        else:
            target = session_name or _pick_live_session(state)
            if target is None:
                return

        if state.config.dry_run:
            click.echo(f"Would kill {target or 'current session'}")
            return

        echo_results([SessionController(tmux).kill_session(target, context)])

    run_guarded(_run)
