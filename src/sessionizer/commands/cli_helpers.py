"""Shared helpers for sessionizer commands.

Holds the state the top-level group passes to its subcommands, loads the
configuration lazily and reports errors with their cause chain.
"""

import logging
import sys
from dataclasses import dataclass, field

import click
from rich.console import Console
from rich.markup import escape

from sessionizer.config_manager import ConfigManager, SessionizerConfig
from sessionizer.exceptions import SessionizerError
from sessionizer.models.session_models import PromptItem
from sessionizer.reconciler import create_prompt_items
from sessionizer.session_controller import ExecutionContext, SessionController
from sessionizer.tmux_client import Tmux
from sessionizer.tmux_executor import CommandResult

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    """Global options collected by the top-level group."""

    config_path: str | None = None
    no_banner: bool = False
    dry_run: bool = False
    verbose: bool = False
    sort: bool = False
    preview: str | None = None
    preview_no_session: str | None = None
    _config: SessionizerConfig | None = field(default=None, repr=False)
    _tmux: Tmux | None = field(default=None, repr=False)

    @property
    def config(self) -> SessionizerConfig:
        """Load the configuration file and merge the global options into it.

        Raises:
            ConfigError: If the file is invalid
            EnvSubstError: If a path references an unset variable
        """
        if self._config is None:
            config = ConfigManager.load_config(self.config_path).apply_cli_options(
                no_banner=self.no_banner,
                verbose=self.verbose,
                sort=self.sort,
                dry_run=self.dry_run,
                preview=self.preview,
                preview_no_session=self.preview_no_session,
            )
            if config.verbose:
                logging.getLogger().setLevel(logging.DEBUG)
            logger.debug(f"Config: {config}")
            self._config = config
        return self._config

    @property
    def tmux(self) -> Tmux:
        if self._tmux is None:
            self._tmux = Tmux(verbose=self.config.verbose)
        return self._tmux

    def prompt_items(self) -> list[PromptItem]:
        """Build candidates from the configuration and the live sessions."""
        config = self.config
        return create_prompt_items(
            config.entries,
            self.tmux.get_active_sessions(),
            config.default_dir,
            global_preview=config.global_preview,
            preview_override=config.preview_override,
            sort=config.sort,
        )


pass_state = click.make_pass_decorator(CliState, ensure=True)


def report_error(console: Console, error: BaseException) -> None:
    """Print an error followed by its cause chain."""
    console.print(f"[red]Error: {escape(str(error))}[/red]", highlight=False, soft_wrap=True)
    cause = error.__cause__
    while cause is not None:
        console.print(
            f"[dim]  caused by: {escape(str(cause))}[/dim]", highlight=False, soft_wrap=True
        )
        cause = cause.__cause__


def run_guarded(func, *args, **kwargs) -> None:
    """Run a command body, turning failures into exit codes.

    SessionizerError exits 1 with the message chain on stderr,
    KeyboardInterrupt exits 130.
    """
    console = Console(stderr=True)
    try:
        func(*args, **kwargs)
    except SessionizerError as e:
        report_error(console, e)
        logger.debug("Command failed", exc_info=True)
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled[/yellow]")
        sys.exit(130)


def echo_results(results: list[CommandResult]) -> None:
    """Echo the non-empty output of each tmux operation."""
    for result in results:
        output = result.get_output()
        if output:
            click.echo(output)


def open_session(state: CliState, item: PromptItem, grouped: bool) -> None:
    """Reach the session for ``item``, or only report it in dry-run mode."""
    context = ExecutionContext.observe(state.tmux)

    if state.config.dry_run:
        logger.debug(f"Execution context: {context}")
        click.echo(f"Would attach to {item.name}")
        return

    echo_results(SessionController(state.tmux).open_session(item, context, grouped=grouped))


__all__ = [
    "CliState",
    "echo_results",
    "open_session",
    "pass_state",
    "report_error",
    "run_guarded",
]
