"""Link command for the scan-and-link flow.

Scans the workspace roots for marker folders, asks which one to link,
and creates a directory link to it in the destination root.
"""

import logging
from typing import Annotated

import typer

from marklink.cli.types import RootsOption, get_config, is_quiet, open_registry, resolve_roots
from marklink.cli.ui import TerminalUi
from marklink.core.config import DestinationRootMode
from marklink.core.flows import run_scan_and_link

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="link",
    help="Scan for marker folders and link one into a workspace root.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def link(
    ctx: typer.Context,
    roots: RootsOption = None,
    first_root: Annotated[
        bool,
        typer.Option(
            "--first-root",
            help="Always create the link in the first root, without asking.",
        ),
    ] = False,
) -> None:
    """Link one marker folder into a workspace root.

    Examples:
        marklink link                      # Scan the current directory
        marklink link -r ~/work -r ~/oss   # Scan two roots, pick destination
        marklink link --first-root         # Never ask for the destination
    """
    if ctx.invoked_subcommand is not None:
        return

    config = get_config(ctx)
    if first_root:
        config = config.model_copy(update={"destination_root_mode": DestinationRootMode.FIRST_ROOT})

    ui = TerminalUi(quiet=is_quiet(ctx))

    try:
        summary = run_scan_and_link(resolve_roots(roots), config, open_registry(), ui)
    except typer.Abort:
        raise
    except Exception as e:
        logger.debug("scan-and-link failed", exc_info=True)
        ui.error(f"marklink failed: {e}")
        raise typer.Exit(code=1) from e

    if summary.failed:
        raise typer.Exit(code=1)
