"""Config commands for inspecting and initializing settings."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from marklink.cli.types import get_config
from marklink.core.config import ConfigError, LinkerConfig, save_config
from marklink.core.paths import ensure_config_dir, get_config_path
from marklink.utils.formatting import console, create_table, print_error, print_success

app = typer.Typer(
    help="Show or initialize the marklink configuration.",
    no_args_is_help=True,
)


def _config_path(ctx: typer.Context) -> Path:
    obj = ctx.find_root().obj or {}
    return obj.get("config_path") or get_config_path()


@app.command()
def show(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Show the effective configuration."""
    config = get_config(ctx)

    if json_output:
        console.print_json(json.dumps(config.model_dump(mode="json")))
        return

    table = create_table(f"Configuration ({escape(str(_config_path(ctx)))})")
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("marker_folder_names", escape(", ".join(config.marker_folder_names)))
    table.add_row("exclude_dir_names", escape(", ".join(config.exclude_dir_names)))
    table.add_row("follow_symlinks", str(config.follow_symlinks).lower())
    table.add_row("destination_root_mode", config.destination_root_mode.value)

    console.print(table)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write the default configuration file."""
    path = _config_path(ctx)
    if path.exists() and not force:
        print_error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        if path == get_config_path():
            ensure_config_dir()
        saved = save_config(LinkerConfig(), path)
    except (ConfigError, RuntimeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote default configuration to {saved}")
