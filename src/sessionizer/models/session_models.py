"""
Session Data Models

Shared dataclasses for session candidates to avoid circular dependencies.

Philosophy:
- Single responsibility: Session data structures only
- Immutable: candidates never change once built
- Zero dependencies: Only imports the working directory value type
"""

from dataclasses import dataclass
from typing import Any

from sessionizer.workdir import WorkingDirectory


@dataclass(frozen=True)
class SessionStats:
    """Live state of a tmux session.

    Attributes:
        window_count: Number of windows in the session
        attached: Whether a client is currently connected to it
    """

    window_count: int
    attached: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for display."""
        return {"window_count": self.window_count, "attached": self.attached}


@dataclass(frozen=True)
class PreviewCommands:
    """Preview command templates for a candidate.

    Templates may contain ``{{name}}`` and ``{{workdir}}`` placeholders.
    ``running`` is used when the candidate has a live session,
    ``not_running`` otherwise.
    """

    running: str | None = None
    not_running: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.running is None and self.not_running is None


@dataclass(frozen=True)
class PromptItem:
    """A selectable candidate handed to the fuzzy selector.

    Attributes:
        name: Selection key, unique within one ranked list
        workdir: Directory a new session starts in
        stats: Live session state, None when no session runs under this name
        preview: Resolved preview templates, None when nothing is previewed
    """

    name: str
    workdir: WorkingDirectory
    stats: SessionStats | None = None
    preview: PreviewCommands | None = None

    @property
    def is_running(self) -> bool:
        return self.stats is not None

    @property
    def is_attached(self) -> bool:
        return self.stats is not None and self.stats.attached


__all__ = ["PreviewCommands", "PromptItem", "SessionStats"]
