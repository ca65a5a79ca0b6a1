"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from marklink.core.config import ConfigError, LinkerConfig, load_config
from marklink.core.store import JsonStateStore
from marklink.linking.models import WorkspaceRoot
from marklink.linking.registry import ManagedLinkRegistry
from marklink.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options for listing commands."""

    TABLE = "table"
    JSON = "json"


# Repeatable workspace root option shared by link and scan
RootsOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--root",
        "-r",
        help="Workspace root to use (repeatable). Defaults to the current directory.",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
]


def resolve_roots(paths: list[Path] | None) -> list[WorkspaceRoot]:
    """Build workspace roots from CLI paths.

    Duplicate paths (after resolution) are collapsed, keeping the first.

    Args:
        paths: Paths given on the command line, or None for the current directory.

    Returns:
        Ordered list of unique workspace roots.
    """
    roots: list[WorkspaceRoot] = []
    seen: set[Path] = set()
    for path in paths or [Path.cwd()]:
        root = WorkspaceRoot.from_path(path)
        if root.path in seen:
            continue
        seen.add(root.path)
        roots.append(root)
    return roots


def get_config(ctx: typer.Context) -> LinkerConfig:
    """Load the configuration selected by the global --config option.

    Raises:
        typer.Exit: If the config file cannot be parsed or read.
    """
    obj = ctx.find_root().obj or {}
    try:
        return load_config(obj.get("config_path"))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def open_registry() -> ManagedLinkRegistry:
    """Open the managed link registry backed by the default state file."""
    return ManagedLinkRegistry(JsonStateStore())


def is_quiet(ctx: typer.Context) -> bool:
    """Check if the global --quiet option is set."""
    obj = ctx.find_root().obj or {}
    return bool(obj.get("quiet", False))
