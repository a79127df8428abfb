"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_STYLESHEET


@dataclass
class SiteflonConfig:
    """Configuration for compiling siteflon documents.

    Attributes:
        preserve_newlines: Whether bare newlines are rendered as ``<br>``.
        stylesheet: Href of the stylesheet linked from the document shell.
        fragment: Whether to emit the compiled fragment without the shell.
        strict: Whether a malformed link or image is reported as an error
            instead of producing an empty document.
        max_file_size: Maximum source file size in bytes that will be compiled.

    Examples:
        SiteflonConfig(preserve_newlines=True, stylesheet="site.css")
    """

    # Compilation
    preserve_newlines: bool = False
    strict: bool = False

    # Output
    stylesheet: str = DEFAULT_STYLESHEET
    fragment: bool = False

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid."""


# Files checked in each directory, with the tables that may hold settings
CONFIG_FILES = (
    ("pyproject.toml", (("tool", "siteflon"),)),
    (".siteflon.toml", (("siteflon",), ("tool", "siteflon"))),
)

BOOLEAN_FIELDS = ("preserve_newlines", "strict", "fragment")


def load_config(search_path: Path) -> SiteflonConfig:
    """Load settings from the closest directory that defines them.

    Starting at `search_path` and moving towards the root, each directory's
    `CONFIG_FILES` are checked in order. The first siteflon table found wins,
    even when empty. Files that are unreadable or not valid TOML are ignored.

    Raises:
        ConfigError: If the table is not a mapping or names unknown settings.

    Examples:
        load_config(Path("docs"))
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for filename, table_paths in CONFIG_FILES:
            config_file = directory / filename
            table = _find_table(config_file, table_paths)
            if table is not None:
                return _config_from_table(table, config_file)
    return SiteflonConfig()


def _find_table(config_file: Path, table_paths: tuple[tuple[str, ...], ...]) -> object | None:
    try:
        document = tomllib.loads(config_file.read_text(encoding="UTF-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        node: object = document
        for key in table_path:
            node = node.get(key) if isinstance(node, dict) else None
        if node is not None:
            return node
    return None


def _config_from_table(table: object, config_file: Path) -> SiteflonConfig:
    if not isinstance(table, dict):
        raise ConfigError(f"siteflon settings in {config_file} must be a table")

    known = {field.name for field in fields(SiteflonConfig)}
    settings = {key.replace("-", "_"): value for key, value in table.items()}
    unknown = sorted(set(settings) - known)
    if unknown:
        raise ConfigError(f"Unknown siteflon settings in {config_file}: {', '.join(unknown)}")
    return SiteflonConfig(**settings)


def validate_config(config: SiteflonConfig) -> None:
    """Check that every field of `config` has a usable value.

    Raises:
        ConfigError: If a flag is not a boolean, the stylesheet is not a
            non-empty string, or the size limit is not a positive integer.
    """
    for name in BOOLEAN_FIELDS:
        if not isinstance(getattr(config, name), bool):
            raise ConfigError(f"`{name}` must be a boolean")

    if not isinstance(config.stylesheet, str) or not config.stylesheet:
        raise ConfigError("`stylesheet` must be a non-empty string")

    size = config.max_file_size
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def build_config(search_path: Path, **overrides: object) -> SiteflonConfig:
    """Load configuration for `search_path` and apply command-line overrides.

    Overrides set to None leave the loaded value in place.

    Raises:
        ConfigError: If loading fails or the result is invalid.

    Examples:
        config = build_config(Path.cwd(), preserve_newlines=True, stylesheet=None)
    """
    changes = {name: value for name, value in overrides.items() if value is not None}
    config = replace(load_config(search_path), **changes)
    validate_config(config)
    return config
