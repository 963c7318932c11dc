"""Expansion of configuration entries into session candidates.

A ``PlainEntry`` yields one candidate named after its label. A
``DirectoryEntry`` yields one candidate per immediate subdirectory of its
root, named ``"<label> - <subdirectory>"``. Children are visited in name
order; presentation order is decided later by the ranker.

One failing entry fails the whole expansion.
"""

import logging
import os
from collections.abc import Iterable, Iterator

from sessionizer.exceptions import IoError, PathError
from sessionizer.models.entry_models import ConfigEntry, DirectoryEntry, PlainEntry
from sessionizer.models.session_models import PromptItem
from sessionizer.workdir import WorkingDirectory

logger = logging.getLogger(__name__)


def _is_dir(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


def _path_text(path: str) -> str:
    """Return ``path`` if it is representable as UTF-8 text.

    Undecodable bytes in file names surface as lone surrogates in Python
    strings; such names cannot be handed to tmux as text.

    Raises:
        PathError: If the path contains undecodable bytes
    """
    try:
        path.encode("utf-8")
    except UnicodeEncodeError as e:
        raise PathError(f"Unable to convert path {path!r} to text") from e
    return path


def expand_directory(entry: DirectoryEntry) -> Iterator[PromptItem]:
    """Yield one candidate per subdirectory of ``entry.root``.

    Non-directory children and names listed in ``entry.excludes`` are
    skipped silently. Child paths are concrete filesystem paths and are used
    verbatim; a child named ``$HOME`` is not substituted.

    Raises:
        IoError: If the root cannot be listed
        PathError: If a child path cannot be rendered as text
    """
    root = entry.root.path
    excludes = entry.excludes or frozenset()

    try:
        with os.scandir(root) as it:
            children = sorted(it, key=lambda child: child.name)
    except OSError as e:
        raise IoError(f"Unable to read dir '{root}' for entry '{entry.label}': {e}") from e

    for child in children:
        if not _is_dir(child):
            continue
        if child.name in excludes:
            logger.debug(f"Excluding '{child.name}' from entry '{entry.label}'")
            continue

        dir_path = _path_text(child.path)
        yield PromptItem(
            name=f"{entry.label} - {_path_text(child.name)}",
            workdir=WorkingDirectory(dir_path),
            preview=entry.preview,
        )


def expand_plain(entry: PlainEntry) -> Iterator[PromptItem]:
    """Yield the single candidate for a plain entry."""
    yield PromptItem(name=entry.label, workdir=entry.workdir, preview=entry.preview)


def expand_entry(entry: ConfigEntry) -> list[PromptItem]:
    """Expand one configuration entry into candidates.

    Candidates carry the entry's own preview override, unresolved.

    Raises:
        IoError: If a directory entry cannot be listed
        PathError: If a child path cannot be rendered as text
    """
    if isinstance(entry, DirectoryEntry):
        items = list(expand_directory(entry))
    elif isinstance(entry, PlainEntry):
        items = list(expand_plain(entry))
    else:
        raise TypeError(f"Unknown config entry type: {type(entry).__name__}")

    logger.debug(f"Entry '{entry.label}' expanded to {len(items)} candidates")
    return items


def expand_entries(entries: Iterable[ConfigEntry]) -> list[PromptItem]:
    """Expand all entries in configuration order."""
    items: list[PromptItem] = []
    for entry in entries:
        items.extend(expand_entry(entry))
    return items


__all__ = ["expand_directory", "expand_entries", "expand_entry", "expand_plain"]
