"""CLI entry point for tmux-sessionizer.

This module provides the command-line interface:
- Fuzzy selection over configured projects and live tmux sessions
- Direct switching by session name
- Killing sessions
- Configuration display

Commands:
    tmux-sessionizer                  # Same as 'list'
    tmux-sessionizer list             # Pick a session and switch to it
    tmux-sessionizer switch NAME      # Switch directly, creating it if needed
    tmux-sessionizer kill             # Kill a session
    tmux-sessionizer config           # Show configuration
"""

import logging

import click

from sessionizer import __version__, prompt
from sessionizer.click_group import SessionizerGroup
from sessionizer.commands import config_command, kill_command
from sessionizer.commands.cli_helpers import CliState, open_session, pass_state, run_guarded
from sessionizer.models.session_models import PromptItem

logger = logging.getLogger(__name__)

GROUPED_HELP = "Attach through a grouped session that shares the windows of the target"


@click.group(
    cls=SessionizerGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Config file (default: ~/.config/tmux/sessionizer.toml)",
)
@click.option("--no-banner", is_flag=True, help="Disable the big banner in list mode")
@click.option("--dry-run", "-d", is_flag=True, help="Dry run, don't switch session")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed execution information")
@click.option("--sort", "-s", is_flag=True, help="Sort attached and busy sessions first")
@click.option("--preview", type=str, help="Preview command for candidates with a running session")
@click.option(
    "--preview-no-session",
    type=str,
    help="Preview command for candidates without a running session",
)
@click.version_option(version=__version__)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: str | None,
    no_banner: bool,
    dry_run: bool,
    verbose: bool,
    sort: bool,
    preview: str | None,
    preview_no_session: str | None,
) -> None:
    """tmux-sessionizer - manage and switch tmux sessions with a fuzzy finder.

    Candidates come from the entries in the config file and from the tmux
    sessions already running. Preview commands may use the {{name}} and
    {{workdir}} placeholders.

    \b
    CONFIGURATION:
        Config file: ~/.config/tmux/sessionizer.toml
        Generate one: tmux-sessionizer config --example

    For help on any command: tmux-sessionizer <command> --help
    """
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    state = ctx.ensure_object(CliState)
    state.config_path = config_path
    state.no_banner = no_banner
    state.dry_run = dry_run
    state.verbose = verbose
    state.sort = sort
    state.preview = preview
    state.preview_no_session = preview_no_session

    if ctx.invoked_subcommand is None:
        ctx.invoke(list_command)


@main.command(name="list")
@click.option("--grouped", is_flag=True, help=GROUPED_HELP)
@pass_state
def list_command(state: CliState, grouped: bool) -> None:
    """List all sessions from config and choose which one to switch to.

    This is the default command.
    """

    def _run() -> None:
        selected = prompt.show(state.prompt_items(), state.config)
        if selected is None:
            logger.debug("Nothing selected")
            return
        open_session(state, selected, grouped)

    run_guarded(_run)


@main.command(name="switch")
@click.argument("session_name", metavar="NAME", type=str)
@click.option("--grouped", is_flag=True, help=GROUPED_HELP)
@pass_state
def switch_command(state: CliState, session_name: str, grouped: bool) -> None:
    """Switch directly to a session.

    Creates the session if it does not exist, in the directory of the
    configured candidate with that name or else in default_dir.

    \b
    Examples:
        tmux-sessionizer switch dotfiles
        tmux-sessionizer switch "Projects - api" --grouped
    """

    def _run() -> None:
        item = next((i for i in state.prompt_items() if i.name == session_name), None)
        if item is None:
            item = PromptItem(name=session_name, workdir=state.config.default_dir)
        open_session(state, item, grouped)

    run_guarded(_run)


main.add_command(config_command)
main.add_command(kill_command)


if __name__ == "__main__":
    main()
