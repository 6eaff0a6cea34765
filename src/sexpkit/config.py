"""
Configuration file support for sexpkit.

Provides hierarchical configuration loading from:
1. Project config: .sexpkit.toml or sexpkit.toml in project root
2. User config: ~/.config/sexpkit/config.toml

Project config overrides user config. Readers and writers never load files
on their own; pass ``Config.load().reader`` or ``.writer`` explicitly.
"""

import codecs
import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sexpkit.exceptions import SexpError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Config file names to search for in project directories
CONFIG_FILENAMES = [".sexpkit.toml", "sexpkit.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "sexpkit" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "reader": {"encoding", "unknown_escape"},
    "writer": {"encoding", "escape_double_quotes"},
}

UNKNOWN_ESCAPE_POLICIES = ("drop", "keep")


@dataclass
class ReaderConfig:
    """Parser options."""

    encoding: str = "utf-8"
    # "drop" discards an unrecognised backslash escape, "keep" emits the character
    unknown_escape: str = "drop"


@dataclass
class WriterConfig:
    """Printer options."""

    encoding: str = "utf-8"
    escape_double_quotes: bool = False


@dataclass
class Config:
    """Merged configuration from all sources."""

    reader: ReaderConfig = field(default_factory=ReaderConfig)
    writer: WriterConfig = field(default_factory=WriterConfig)

    # Track which file each setting came from
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            if user_data:
                _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            if project_data:
                _merge_config(config, project_data, str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")


class ConfigError(SexpError):
    """Configuration-related errors."""

    pass


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """Merge loaded config data into a Config object, validating values."""
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    if "reader" in data:
        reader_data = _section(data, "reader", source)
        _warn_unknown_keys(reader_data, KNOWN_KEYS["reader"], "reader", source)

        if "encoding" in reader_data:
            config.reader.encoding = _check_encoding(reader_data["encoding"], source)
            sources["reader.encoding"] = source
        if "unknown_escape" in reader_data:
            policy = reader_data["unknown_escape"]
            if policy not in UNKNOWN_ESCAPE_POLICIES:
                raise ConfigError(
                    f"Invalid reader.unknown_escape {policy!r} in {source}; "
                    f"expected one of {', '.join(UNKNOWN_ESCAPE_POLICIES)}"
                )
            config.reader.unknown_escape = policy
            sources["reader.unknown_escape"] = source

    if "writer" in data:
        writer_data = _section(data, "writer", source)
        _warn_unknown_keys(writer_data, KNOWN_KEYS["writer"], "writer", source)

        if "encoding" in writer_data:
            config.writer.encoding = _check_encoding(writer_data["encoding"], source)
            sources["writer.encoding"] = source
        if "escape_double_quotes" in writer_data:
            value = writer_data["escape_double_quotes"]
            if not isinstance(value, bool):
                raise ConfigError(
                    f"Invalid writer.escape_double_quotes {value!r} in {source}; expected a boolean"
                )
            config.writer.escape_double_quotes = value
            sources["writer.escape_double_quotes"] = source


def _section(data: dict[str, Any], name: str, source: str) -> dict[str, Any]:
    section = data[name]
    if not isinstance(section, dict):
        raise ConfigError(
            f"Invalid '{name}' in {source}; expected a [{name}] table, "
            f"got {type(section).__name__}"
        )
    return section


def _check_encoding(name: Any, source: str) -> str:
    try:
        codecs.lookup(name)
    except (LookupError, TypeError) as e:
        raise ConfigError(f"Unknown encoding {name!r} in {source}") from e
    return name


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# sexpkit configuration file
# Place as .sexpkit.toml in project root or ~/.config/sexpkit/config.toml for user defaults

[reader]
# Text encoding used when reading from binary streams
# encoding = "utf-8"

# Unrecognised backslash escapes inside quotes: drop or keep
# unknown_escape = "drop"

[writer]
# Text encoding used when writing to binary streams
# encoding = "utf-8"

# Escape '"' inside double-quoted atoms so the output reads back unchanged
# escape_double_quotes = false
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
