"""Data models for tmux-sessionizer."""

from sessionizer.models.entry_models import ConfigEntry, DirectoryEntry, PlainEntry
from sessionizer.models.session_models import PreviewCommands, PromptItem, SessionStats

__all__ = [
    "ConfigEntry",
    "DirectoryEntry",
    "PlainEntry",
    "PreviewCommands",
    "PromptItem",
    "SessionStats",
]
