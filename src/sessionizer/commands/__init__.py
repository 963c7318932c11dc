"""Commands for the tmux-sessionizer CLI."""

from sessionizer.commands.config import config_command
from sessionizer.commands.kill import kill_command

__all__ = ["config_command", "kill_command"]
