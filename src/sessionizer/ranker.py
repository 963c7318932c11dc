"""Deterministic ordering of session candidates.

Order, each rule only breaking ties of the previous one:
1. The attached session first
2. Candidates with a live session before those without
3. More windows first
4. Name, case-insensitive ascending
"""

from collections.abc import Iterable

from sessionizer.models.session_models import PromptItem


def rank_key(item: PromptItem) -> tuple[bool, bool, int, str]:
    """Sort key implementing the candidate ordering."""
    window_count = item.stats.window_count if item.stats is not None else 0
    return (not item.is_attached, not item.is_running, -window_count, item.name.lower())


def rank(items: Iterable[PromptItem]) -> list[PromptItem]:
    """Return candidates in presentation order."""
    return sorted(items, key=rank_key)


__all__ = ["rank", "rank_key"]
