"""marklink configuration and settings.

This module provides the configuration model and I/O functions for
marker scanning and link placement.

Configuration is stored in ~/.config/marklink/config.toml. Every field
falls back to its default independently, so a single malformed value
never discards the rest of the file.
"""

import logging
import os
import tomllib
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, field_validator

from marklink.core.paths import get_config_path

logger = logging.getLogger(__name__)

DEFAULT_MARKER_FOLDERS: tuple[str, ...] = (".vscode",)

DEFAULT_EXCLUDE_FOLDERS: tuple[str, ...] = (
    ".git",
    "node_modules",
    "venv",
    ".venv",
    "dist",
    "build",
    "out",
    "target",
    ".idea",
    ".tox",
)


class DestinationRootMode(str, Enum):
    """How the destination root for a new link is chosen.

    Attributes:
        PICK_WHEN_MULTIPLE: Ask the operator when more than one root is open.
        FIRST_ROOT: Always use the first root.
    """

    PICK_WHEN_MULTIPLE = "pick_when_multiple"
    FIRST_ROOT = "first_root"


# camelCase spellings used by editor settings files
_MODE_ALIASES: dict[str, DestinationRootMode] = {
    "pickWhenMultiple": DestinationRootMode.PICK_WHEN_MULTIPLE,
    "firstRoot": DestinationRootMode.FIRST_ROOT,
}


def sanitize_folder_names(value: object, fallback: Iterable[str]) -> list[str]:
    """Normalize a configured list of folder names.

    Non-string items and blank names are dropped, names are trimmed and
    de-duplicated in first-seen order. Anything that is not a list, or a
    list with nothing usable left, yields the fallback.

    Args:
        value: Raw configured value.
        fallback: Default names.

    Returns:
        List of unique, non-empty folder names.
    """
    if not isinstance(value, (list, tuple, set, frozenset)):
        return list(fallback)

    unique: dict[str, None] = {}
    for item in value:
        if not isinstance(item, str):
            continue
        name = item.strip()
        if name:
            unique[name] = None

    return list(unique) if unique else list(fallback)


class LinkerConfig(BaseModel):
    """Configuration for marker scanning and link placement.

    Attributes:
        marker_folder_names: Folder names that mark a linkable project.
        exclude_dir_names: Directory names never descended into.
        follow_symlinks: Descend into symbolic links to directories.
        destination_root_mode: How the destination root is chosen.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    marker_folder_names: Annotated[
        list[str],
        Field(description="Folder names that mark a linkable project"),
    ] = list(DEFAULT_MARKER_FOLDERS)
    exclude_dir_names: Annotated[
        list[str],
        Field(description="Directory names whose subtrees are skipped"),
    ] = list(DEFAULT_EXCLUDE_FOLDERS)
    follow_symlinks: Annotated[
        bool,
        Field(description="Follow symbolic links to directories while scanning"),
    ] = False
    destination_root_mode: Annotated[
        DestinationRootMode,
        Field(description="How the destination workspace root is chosen"),
    ] = DestinationRootMode.PICK_WHEN_MULTIPLE

    @field_validator("marker_folder_names", mode="before")
    @classmethod
    def _normalize_markers(cls, v: object) -> list[str]:
        return sanitize_folder_names(v, DEFAULT_MARKER_FOLDERS)

    @field_validator("exclude_dir_names", mode="before")
    @classmethod
    def _normalize_excludes(cls, v: object) -> list[str]:
        return sanitize_folder_names(v, DEFAULT_EXCLUDE_FOLDERS)

    @field_validator("follow_symlinks", mode="before")
    @classmethod
    def _coerce_follow(cls, v: object) -> bool:
        if isinstance(v, bool):
            return v
        if v is not None:
            logger.warning("follow_symlinks must be true or false, got %r; using false", v)
        return False

    @field_validator("destination_root_mode", mode="before")
    @classmethod
    def _normalize_mode(cls, v: object) -> DestinationRootMode:
        if isinstance(v, str) and v in _MODE_ALIASES:
            return _MODE_ALIASES[v]
        try:
            return DestinationRootMode(v)
        except ValueError:
            if v is not None:
                logger.warning("Unknown destination_root_mode %r, using default", v)
            return DestinationRootMode.PICK_WHEN_MULTIPLE


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def normalize_config(raw: dict[str, Any] | None = None) -> LinkerConfig:
    """Build a configuration from raw values, defaulting field by field.

    Args:
        raw: Raw key/value mapping, e.g. parsed TOML. None means defaults.

    Returns:
        Normalized LinkerConfig.
    """
    data = dict(raw or {})
    unknown = set(data) - set(LinkerConfig.model_fields)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
    return LinkerConfig.model_validate(data)


def load_config(path: Path | None = None) -> LinkerConfig:
    """Load configuration from a TOML file.

    A missing file is not an error; defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Normalized LinkerConfig.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return normalize_config()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    return normalize_config(data)


def save_config(config: LinkerConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The LinkerConfig to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(mode="json"), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
