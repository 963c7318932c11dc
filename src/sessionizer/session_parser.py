"""Parsing of ``tmux list-sessions`` output.

Example output format:
    dev: 3 windows (created Thu Oct 10 10:00:00 2024)
    prod: 1 windows (created Thu Oct 10 11:00:00 2024) (attached)

Parsing is all-or-nothing: a single malformed line fails the whole listing.
"""

import logging
import re

from sessionizer.exceptions import ParseError
from sessionizer.models.session_models import SessionStats

logger = logging.getLogger(__name__)

_WINDOW_COUNT = re.compile(r"[0-9]+")


def parse_session_line(line: str) -> tuple[str, SessionStats]:
    """Parse one session line into its name and stats.

    The name is everything before the first ``": "``, the window count is
    the first space-separated token after it. The session counts as
    attached when ``attached`` appears anywhere in the remainder.

    Raises:
        ParseError: If the separator is missing or the window count is not
            an unsigned integer
    """
    name, sep, rest = line.partition(": ")
    if not sep:
        raise ParseError(f"Malformed tmux session line (missing ': '): {line!r}")

    window_count, sep, remainder = rest.partition(" ")
    if not sep:
        raise ParseError(f"Malformed tmux session line (missing window count): {line!r}")

    if not _WINDOW_COUNT.fullmatch(window_count):
        raise ParseError(f"Invalid window count {window_count!r} in tmux session line: {line!r}")

    return name, SessionStats(window_count=int(window_count), attached="attached" in remainder)


def parse_sessions(output: str) -> dict[str, SessionStats]:
    """Parse tmux list-sessions output.

    Args:
        output: Raw output from tmux list-sessions

    Returns:
        Mapping of session name to SessionStats, in listing order

    Raises:
        ParseError: If any line is malformed
    """
    sessions: dict[str, SessionStats] = {}

    for line in output.splitlines():
        name, stats = parse_session_line(line)
        sessions[name] = stats

    logger.debug(f"Parsed {len(sessions)} tmux sessions")
    return sessions


__all__ = ["parse_session_line", "parse_sessions"]
