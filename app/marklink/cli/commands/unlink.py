"""Unlink command for removing managed links.

Offers the links marklink created and removes the chosen ones. Links
that were deleted or replaced by hand are never touched.
"""

import logging

import typer

from marklink.cli.types import is_quiet, open_registry
from marklink.cli.ui import TerminalUi
from marklink.core.flows import run_unlink_managed

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="unlink",
    help="Remove directory links created by marklink.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def unlink(ctx: typer.Context) -> None:
    """Remove selected managed links, or all of them."""
    if ctx.invoked_subcommand is not None:
        return

    ui = TerminalUi(quiet=is_quiet(ctx))

    try:
        summary = run_unlink_managed(open_registry(), ui)
    except typer.Abort:
        raise
    except Exception as e:
        logger.debug("unlink-managed failed", exc_info=True)
        ui.error(f"marklink failed: {e}")
        raise typer.Exit(code=1) from e

    if summary.failed:
        raise typer.Exit(code=1)
