"""Configuration commands for tmux-sessionizer.

Commands:
    - config: Show the effective configuration
    - config --example: Print an example configuration file
"""

import logging

import click
from rich.console import Console
from rich.table import Table

from sessionizer.commands.cli_helpers import CliState, pass_state, run_guarded
from sessionizer.config_manager import ConfigManager, SessionizerConfig
from sessionizer.models.entry_models import DirectoryEntry
from sessionizer.models.session_models import PreviewCommands

logger = logging.getLogger(__name__)

__all__ = ["config_command"]


def _preview_text(preview: PreviewCommands | None) -> str:
    if preview is None:
        return "-"
    return f"running: {preview.running or '-'}\nnot running: {preview.not_running or '-'}"


def _show_config(console: Console, config: SessionizerConfig, config_path: str) -> None:
    settings = Table(title=f"Settings ({config_path})", show_header=False)
    settings.add_column("Setting", style="cyan")
    settings.add_column("Value")
    settings.add_row("default_dir", config.default_dir.path)
    settings.add_row("hide_banner", str(config.hide_banner))
    settings.add_row("verbose", str(config.verbose))
    settings.add_row("sort", str(config.sort))
    settings.add_row("preview_width", f"{config.preview_width}%")
    settings.add_row("global_preview", _preview_text(config.global_preview))
    console.print(settings)

    if not config.entries:
        console.print("[yellow]No entries configured.[/yellow]")
        return

    entries = Table(title="Entries")
    entries.add_column("Kind", style="cyan")
    entries.add_column("Label", style="bold")
    entries.add_column("Working Directory")
    entries.add_column("Excludes")
    entries.add_column("Preview")

    for entry in config.entries:
        if isinstance(entry, DirectoryEntry):
            excludes = ", ".join(sorted(entry.excludes)) if entry.excludes else "-"
            entries.add_row(
                "Directory", entry.label, entry.root.path, excludes, _preview_text(entry.preview)
            )
        else:
            entries.add_row(
                "Plain", entry.label, entry.workdir.path, "-", _preview_text(entry.preview)
            )

    console.print(entries)


@click.command(name="config")
@click.option(
    "--example", is_flag=True, help="Print an example config file with placeholder values"
)
@pass_state
def config_command(state: CliState, example: bool) -> None:
    """Show the effective configuration.

    \b
    Examples:
        tmux-sessionizer config
        tmux-sessionizer config --example > ~/.config/tmux/sessionizer.toml
    """

    def _run() -> None:
        if example:
            click.echo(ConfigManager.example_config(), nl=False)
            return

        config_path = str(ConfigManager.get_config_path(state.config_path))
        _show_config(Console(), state.config, config_path)

    run_guarded(_run)
