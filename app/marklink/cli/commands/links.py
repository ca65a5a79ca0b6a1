"""Links command for viewing managed links.

Reconciles the registry against the filesystem first, so the listing
only shows links that still exist.
"""

import json
from typing import Annotated

import typer
from rich.markup import escape

from marklink.cli.types import OutputFormat, is_quiet, open_registry
from marklink.utils.formatting import console, create_table, print_info

app = typer.Typer(
    name="links",
    help="List directory links managed by marklink.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def links(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show managed links, pruning ones removed by hand."""
    if ctx.invoked_subcommand is not None:
        return

    result = open_registry().reconcile()

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([r.to_dict() for r in result.active]))
        return

    if result.removed_count and not is_quiet(ctx):
        print_info(f"Forgot {result.removed_count} link(s) that no longer exist.")

    if not result.active:
        print_info("No managed links.")
        return

    table = create_table("Managed Links")
    table.add_column("Link", style="link", overflow="fold")
    table.add_column("Target", style="target", overflow="fold")
    table.add_column("Created", style="muted", no_wrap=True)

    for record in result.active:
        table.add_row(
            escape(record.link_path),
            escape(record.target_path),
            escape(record.created_at[:19]),
        )

    console.print(table)
