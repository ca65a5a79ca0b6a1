"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from marklink import __version__
from marklink.cli.commands import config, link, links, scan, unlink
from marklink.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="marklink",
    help="Link project marker folders into workspace roots.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"marklink version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route marklink log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    package_logger = logging.getLogger("marklink")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=err_console, show_path=verbose, rich_tracebacks=True)
        )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config.toml (default: ~/.config/marklink/config.toml).",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """marklink - link project marker folders into workspace roots.

    Finds folders such as .vscode inside sub-projects, links the one you
    pick into a workspace root, and remembers the links it created so they
    can be removed safely later.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path


# Register commands
app.add_typer(scan.app, name="scan")
app.add_typer(link.app, name="link")
app.add_typer(unlink.app, name="unlink")
app.add_typer(links.app, name="links")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
