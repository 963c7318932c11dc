"""Interactive session selection through fzf.

Candidates are written to fzf as tab-separated lines:

    <display text> \t <index> \t <preview command>

Only the display text is shown and matched. The index maps the chosen line
back to its candidate, and the preview command is run by ``fzf --preview``.
Tabs and line breaks inside a field are replaced by spaces. An empty preview
command leaves the preview area empty.
"""

import logging
import shutil
import subprocess

from sessionizer.config_manager import SessionizerConfig
from sessionizer.exceptions import ProcessError
from sessionizer.models.session_models import PromptItem
from sessionizer.preview import preview_command

logger = logging.getLogger(__name__)

BANNER = "\n".join(
    [
        r" _____ __  __ _   ___  __  ___ ___ ___ ___ ___ ___  _  _ ___ ____ ___ ___ ",
        r"|_   _|  \/  | | | \ \/ / / __| __/ __/ __|_ _/ _ \| \| |_ _|_  /| __| _ \ ",
        r"  | | | |\/| | |_| |>  <  \__ \ _|\__ \__ \| | (_) | .` || | / / | _||   / ",
        r"  |_| |_|  |_|\___//_/\_\ |___/___|___/___/___\___/|_|\_|___/___||___|_|_\ ",
    ]
)

FZF_CANCEL_CODES = (1, 130)

_FIELD_SEPARATORS = str.maketrans({"\t": " ", "\n": " ", "\r": " "})


def format_item(item: PromptItem) -> str:
    """Format a candidate as one display row."""
    marker = "(*)" if item.is_attached else ""
    windows = f"{item.stats.window_count} window(s)" if item.stats is not None else ""
    return f"{marker:<3} {item.name:<40} {item.workdir.path:<60} {windows}".rstrip()


def build_header(hide_banner: bool) -> str:
    """Build the header shown above the candidate list."""
    columns = f"{'*':^3} {'Name':^40} {'Working Directory':^60} Window Count"
    if hide_banner:
        return columns
    return f"{BANNER}\n{columns}"


def _field(text: str) -> str:
    """Make ``text`` safe for one field of a tab-separated fzf line."""
    return text.translate(_FIELD_SEPARATORS)


def _fzf_line(index: int, item: PromptItem) -> str:
    """Key a line by list position; names may contain any character."""
    preview = preview_command(item) or ""
    return "\t".join([_field(format_item(item)), str(index), _field(preview)])


def build_fzf_command(items: list[PromptItem], config: SessionizerConfig) -> list[str]:
    """Build the fzf command line for ``items``."""
    cmd = [
        "fzf",
        "--delimiter",
        "\t",
        "--with-nth",
        "1",
        "--nth",
        "1",
        "--no-multi",
        "--reverse",
        "--height",
        "100%",
        "--tiebreak",
        "index",
        "--header",
        build_header(config.hide_banner),
    ]

    if any(preview_command(item) for item in items):
        cmd.extend(["--preview", "sh -c {3}", "--preview-window", f"right:{config.preview_width}%"])

    return cmd


def show(items: list[PromptItem], config: SessionizerConfig) -> PromptItem | None:
    """Let the user pick one candidate.

    Args:
        items: Ranked candidates with unique names
        config: Display settings (banner, preview width)

    Returns:
        The chosen candidate, or None if the selection was cancelled

    Raises:
        ProcessError: If fzf is missing or fails
    """
    if shutil.which("fzf") is None:
        raise ProcessError("fzf is not installed. Install it from https://github.com/junegunn/fzf")

    cmd = build_fzf_command(items, config)

    try:
        result = subprocess.run(
            cmd,
            input="\n".join(_fzf_line(i, item) for i, item in enumerate(items)),
            stdout=subprocess.PIPE,
            text=True,
            check=False,
        )
    except OSError as e:
        raise ProcessError(f"Failed to run fzf: {e}") from e

    if result.returncode in FZF_CANCEL_CODES:
        logger.debug("Selection cancelled")
        return None
    if result.returncode != 0:
        raise ProcessError(f"fzf selection failed with exit code {result.returncode}")

    chosen = result.stdout.rstrip("\n")
    fields = chosen.split("\t")
    if len(fields) < 2 or not fields[1].isdecimal() or int(fields[1]) >= len(items):
        raise ProcessError(f"Unexpected fzf output: {chosen!r}")

    return items[int(fields[1])]


__all__ = ["BANNER", "build_fzf_command", "build_header", "format_item", "show"]
