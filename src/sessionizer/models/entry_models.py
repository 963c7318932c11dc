"""Configuration entry variants.

An entry is either a directory whose immediate subdirectories each become a
candidate, or a single plain candidate. Behaviour lives in
``sessionizer.entry_expander``; these are plain data.
"""

from dataclasses import dataclass

from sessionizer.models.session_models import PreviewCommands
from sessionizer.workdir import WorkingDirectory


@dataclass(frozen=True)
class DirectoryEntry:
    """Expands to one candidate per subdirectory of ``root``."""

    label: str
    root: WorkingDirectory
    excludes: frozenset[str] | None = None
    preview: PreviewCommands | None = None


@dataclass(frozen=True)
class PlainEntry:
    """Expands to exactly one candidate."""

    label: str
    workdir: WorkingDirectory
    preview: PreviewCommands | None = None


ConfigEntry = DirectoryEntry | PlainEntry

__all__ = ["ConfigEntry", "DirectoryEntry", "PlainEntry"]
