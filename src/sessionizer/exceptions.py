"""Custom exceptions for tmux-sessionizer.

Every failure aborts the current run and is reported by the CLI together
with its cause chain. Nothing is retried.
"""


class SessionizerError(Exception):
    """Base exception for sessionizer errors."""

    pass


class ConfigError(SessionizerError):
    """Configuration file is missing, malformed or inconsistent."""

    pass


class IoError(SessionizerError):
    """A configured directory could not be listed."""

    pass


class PathError(SessionizerError):
    """A filesystem path cannot be represented as text."""

    pass


class EnvSubstError(SessionizerError):
    """A path references an environment variable that is not set."""

    pass


class ParseError(SessionizerError):
    """tmux session listing output is malformed."""

    pass


class ProcessError(SessionizerError):
    """An external command could not be run or produced unusable output."""

    pass


__all__ = [
    "ConfigError",
    "EnvSubstError",
    "IoError",
    "ParseError",
    "PathError",
    "ProcessError",
    "SessionizerError",
]
