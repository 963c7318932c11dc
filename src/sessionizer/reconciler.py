"""Merging of configured candidates with live tmux sessions.

Candidates built from the configuration pick up the stats of the live
session with the same name. Live sessions without a matching candidate
("orphan sessions") become candidates of their own, rooted at the default
directory. Matching is exact name equality, in a single pass.

Afterwards every live session appears exactly once and every candidate
name is unique.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace

from sessionizer.entry_expander import expand_entries
from sessionizer.models.entry_models import ConfigEntry
from sessionizer.models.session_models import PreviewCommands, PromptItem, SessionStats
from sessionizer.preview import apply_preview
from sessionizer.ranker import rank
from sessionizer.workdir import WorkingDirectory

logger = logging.getLogger(__name__)


def _dedupe(candidates: Iterable[PromptItem]) -> list[PromptItem]:
    """Drop candidates whose name was already seen, keeping the first."""
    seen: set[str] = set()
    unique: list[PromptItem] = []
    for item in candidates:
        if item.name in seen:
            logger.warning(f"Duplicate candidate name '{item.name}' ignored")
            continue
        seen.add(item.name)
        unique.append(item)
    return unique


def reconcile(
    candidates: Iterable[PromptItem],
    sessions: dict[str, SessionStats],
    default_dir: WorkingDirectory,
) -> list[PromptItem]:
    """Merge configured candidates with live sessions.

    ``sessions`` is consumed: matched names are removed from it in place.

    Args:
        candidates: Expanded candidates in configuration order
        sessions: Live session mapping from the session parser
        default_dir: Working directory for orphan sessions

    Returns:
        Configured candidates (with stats attached where a session matched)
        followed by orphan-session candidates in mapping order
    """
    merged: list[PromptItem] = []

    for item in _dedupe(candidates):
        stats = sessions.get(item.name)
        merged.append(replace(item, stats=stats) if stats is not None else item)

    for item in merged:
        sessions.pop(item.name, None)

    orphans = [
        PromptItem(name=name, workdir=default_dir, stats=stats, preview=None)
        for name, stats in sessions.items()
    ]
    if orphans:
        logger.debug(f"{len(orphans)} live sessions have no config entry")

    return merged + orphans


def create_prompt_items(
    entries: Iterable[ConfigEntry],
    sessions: dict[str, SessionStats],
    default_dir: WorkingDirectory,
    global_preview: PreviewCommands | None = None,
    preview_override: PreviewCommands | None = None,
    sort: bool = False,
) -> list[PromptItem]:
    """Build the candidate list handed to the selector.

    Expands entries, resolves each candidate's preview, reconciles with the
    live sessions and optionally ranks the result.

    Raises:
        IoError: If a directory entry cannot be listed
        PathError: If a child path cannot be rendered as text
    """
    expanded = [
        apply_preview(item, global_preview, preview_override) for item in expand_entries(entries)
    ]
    items = reconcile(expanded, sessions, default_dir)
    return rank(items) if sort else items


__all__ = ["create_prompt_items", "reconcile"]
