"""Configuration management module.

This module loads the sessionizer configuration from TOML and validates it
into typed entries. It also renders an example configuration file.

Configuration is read from $XDG_CONFIG_HOME/tmux/sessionizer.toml, falling
back to ~/.config/tmux/sessionizer.toml.
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit

from sessionizer.exceptions import ConfigError, EnvSubstError
from sessionizer.models.entry_models import ConfigEntry, DirectoryEntry, PlainEntry
from sessionizer.models.session_models import PreviewCommands
from sessionizer.workdir import WorkingDirectory

logger = logging.getLogger(__name__)

ENTRY_KINDS = ("Directory", "Plain")
DEFAULT_DIR = "~"
DEFAULT_PREVIEW_WIDTH = 30


def _expect(value: Any, expected: type, key: str) -> Any:
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ConfigError(
            f"Invalid value for '{key}': expected {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def _workdir(value: Any, key: str) -> WorkingDirectory:
    try:
        return WorkingDirectory.from_str(_expect(value, str, key))
    except EnvSubstError as e:
        raise EnvSubstError(f"Invalid path for '{key}': {e}") from e


def _parse_preview(data: Any, key: str) -> PreviewCommands | None:
    """Parse a ``{running, not_running}`` table."""
    if data is None:
        return None
    _expect(data, dict, key)

    running = data.get("running")
    not_running = data.get("not_running")
    if running is not None:
        _expect(running, str, f"{key}.running")
    if not_running is not None:
        _expect(not_running, str, f"{key}.not_running")

    preview = PreviewCommands(running=running, not_running=not_running)
    return None if preview.is_empty else preview


def parse_entry(data: Any, index: int) -> ConfigEntry:
    """Validate one ``[[entry]]`` table.

    Raises:
        ConfigError: If the entry is malformed, or ``excludes`` is set on a
            Plain entry
        EnvSubstError: If its workdir references an unset variable
    """
    key = f"entry[{index}]"
    _expect(data, dict, key)

    kind = data.get("kind")
    if kind not in ENTRY_KINDS:
        raise ConfigError(
            f"Invalid {key}.kind: {kind!r}. Expected one of: {', '.join(ENTRY_KINDS)}"
        )

    for required in ("label", "workdir"):
        if required not in data:
            raise ConfigError(f"Missing required field: {key}.{required}")

    label = _expect(data["label"], str, f"{key}.label")
    key = f"entry '{label}'"
    workdir = _workdir(data["workdir"], f"{key}.workdir")
    preview = _parse_preview(data.get("preview"), f"{key}.preview")

    if kind == "Plain":
        if "excludes" in data:
            raise ConfigError(f"Invalid {key}: 'excludes' is only allowed on Directory entries")
        return PlainEntry(label=label, workdir=workdir, preview=preview)

    excludes = None
    if "excludes" in data:
        names = _expect(data["excludes"], list, f"{key}.excludes")
        excludes = frozenset(_expect(name, str, f"{key}.excludes") for name in names)
    return DirectoryEntry(label=label, root=workdir, excludes=excludes, preview=preview)


@dataclass
class SessionizerConfig:
    """Sessionizer configuration data.

    File settings plus the command-line settings merged on top of them.
    """

    default_dir: WorkingDirectory
    hide_banner: bool = False
    verbose: bool = False
    sort: bool = False
    preview_width: int = DEFAULT_PREVIEW_WIDTH
    global_preview: PreviewCommands | None = None
    entries: list[ConfigEntry] = field(default_factory=list)
    dry_run: bool = False
    preview_override: PreviewCommands | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionizerConfig":
        """Create from a parsed TOML document.

        Raises:
            ConfigError: If any value is malformed
            EnvSubstError: If a path references an unset variable
        """
        preview_width = _expect(
            data.get("preview_width", DEFAULT_PREVIEW_WIDTH), int, "preview_width"
        )
        if not 1 <= preview_width <= 99:
            raise ConfigError(f"Invalid preview_width: {preview_width} (must be 1-99)")

        raw_entries = data.get("entry", data.get("entries", []))
        _expect(raw_entries, list, "entry")

        return cls(
            default_dir=_workdir(data.get("default_dir", DEFAULT_DIR), "default_dir"),
            hide_banner=_expect(data.get("hide_banner", False), bool, "hide_banner"),
            verbose=_expect(data.get("verbose", False), bool, "verbose"),
            sort=_expect(data.get("sort", False), bool, "sort"),
            preview_width=preview_width,
            global_preview=_parse_preview(data.get("global_preview"), "global_preview"),
            entries=[parse_entry(entry, i) for i, entry in enumerate(raw_entries)],
        )

    def apply_cli_options(
        self,
        no_banner: bool = False,
        verbose: bool = False,
        sort: bool = False,
        dry_run: bool = False,
        preview: str | None = None,
        preview_no_session: str | None = None,
    ) -> "SessionizerConfig":
        """Merge command-line flags into this configuration.

        Boolean flags can only switch settings on. The two preview options
        override the running/not-running templates independently.
        """
        self.hide_banner = self.hide_banner or no_banner
        self.verbose = self.verbose or verbose
        self.sort = self.sort or sort
        self.dry_run = dry_run
        override = PreviewCommands(running=preview, not_running=preview_no_session)
        self.preview_override = None if override.is_empty else override
        return self


class ConfigManager:
    """Locate, load and render sessionizer configuration files."""

    CONFIG_FILE_NAME = "sessionizer.toml"

    @classmethod
    def default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg_config) if xdg_config else Path.home() / ".config"
        return base / "tmux" / cls.CONFIG_FILE_NAME

    @classmethod
    def get_config_path(cls, custom_path: str | None = None) -> Path:
        """Get configuration file path.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            Path to config file

        Raises:
            ConfigError: If a custom path is given and does not exist
        """
        if custom_path:
            path = Path(custom_path).expanduser()
            if not path.exists():
                raise ConfigError(f"Config file not found: {path}")
            return path

        return cls.default_config_path()

    @classmethod
    def load_config(cls, custom_path: str | None = None) -> SessionizerConfig:
        """Load configuration from file.

        A missing default file yields the built-in defaults.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            SessionizerConfig object

        Raises:
            ConfigError: If the file cannot be read or is invalid
            EnvSubstError: If a path references an unset variable
        """
        config_path = cls.get_config_path(custom_path)

        if not config_path.exists():
            logger.debug(f"Config file {config_path} not found, using defaults")
            return SessionizerConfig.from_dict({})

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in config file '{config_path}': {e}") from e
        except OSError as e:
            raise ConfigError(f"Unable to read config file '{config_path}': {e}") from e

        try:
            config = SessionizerConfig.from_dict(data)
        except ConfigError as e:
            raise ConfigError(f"Invalid config file '{config_path}': {e}") from e
        except EnvSubstError as e:
            raise EnvSubstError(f"Invalid config file '{config_path}': {e}") from e

        logger.debug(f"Loaded config from: {config_path}")
        return config

    @classmethod
    def example_config(cls) -> str:
        """Render an example configuration file.

        Raises:
            ConfigError: If HOME is not set
        """
        home = os.environ.get("HOME")
        if not home:
            raise ConfigError("HOME env variable not set")

        doc = tomlkit.document()
        doc.add(tomlkit.comment("tmux-sessionizer configuration"))
        doc.add("default_dir", "/")
        doc.add("hide_banner", False)
        doc.add("verbose", False)
        doc.add("sort", True)
        doc.add("preview_width", DEFAULT_PREVIEW_WIDTH)

        global_preview = tomlkit.table()
        global_preview.add("running", "tmux capture-pane -ep -t {{name}}")
        global_preview.add("not_running", "ls {{workdir}}")
        doc.add("global_preview", global_preview)

        entries = tomlkit.aot()

        plain = tomlkit.table()
        plain.add("kind", "Plain")
        plain.add("label", "My session")
        plain.add("workdir", "/")
        entries.append(plain)

        projects = tomlkit.table()
        projects.add("kind", "Directory")
        projects.add("label", "My Projects Dir")
        projects.add("workdir", home)
        projects.add("excludes", ["node_modules"])
        preview = tomlkit.table()
        preview.add("not_running", "ls -la {{workdir}}")
        projects.add("preview", preview)
        entries.append(projects)

        doc.add("entry", entries)
        return tomlkit.dumps(doc)


__all__ = ["ConfigManager", "SessionizerConfig", "parse_entry"]
