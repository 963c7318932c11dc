"""Working directory values with environment substitution.

Paths in the configuration may reference environment variables as whole
path segments (``$HOME/projects``) and the home directory as ``~``.
Substitution happens once, at construction; the resulting value is
immutable.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from sessionizer.exceptions import EnvSubstError


def envsubst(value: str, environ: Mapping[str, str] | None = None) -> str:
    """Substitute ``$VAR`` and ``~`` path segments.

    Only complete segments between ``/`` separators are substituted, so
    ``$HOME/src`` expands while ``foo$BAR`` and ``~user`` are kept verbatim.

    Args:
        value: Path string as written in the configuration
        environ: Environment to resolve against (defaults to os.environ)

    Returns:
        Path string with all references substituted

    Raises:
        EnvSubstError: If a referenced variable is not set
    """
    env = os.environ if environ is None else environ
    segments: list[str] = []

    for segment in value.split("/"):
        if segment.startswith("$"):
            var_name = segment[1:]
            if var_name not in env:
                raise EnvSubstError(
                    f"Failed to substitute env variable '{var_name}' in '{value}'"
                )
            segments.append(env[var_name])
        elif segment == "~":
            if "HOME" not in env:
                raise EnvSubstError(f"Failed to substitute HOME for tilde in '{value}'")
            segments.append(env["HOME"])
        else:
            segments.append(segment)

    return "/".join(segments)


@dataclass(frozen=True)
class WorkingDirectory:
    """Environment-substituted directory of a session candidate."""

    path: str

    @classmethod
    def from_str(cls, value: str, environ: Mapping[str, str] | None = None) -> "WorkingDirectory":
        """Create from a configured path string.

        Raises:
            EnvSubstError: If a referenced variable is not set
        """
        return cls(envsubst(value, environ))

    def __str__(self) -> str:
        return self.path

    def __fspath__(self) -> str:
        return self.path


__all__ = ["WorkingDirectory", "envsubst"]
