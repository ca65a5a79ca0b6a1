"""Scan command for previewing marker folders.

Lists the candidates the link command would offer, without creating
anything.
"""

import json
from typing import Annotated

import typer
from rich.markup import escape

from marklink.cli.types import OutputFormat, RootsOption, get_config, resolve_roots
from marklink.linking.models import ScanCandidate
from marklink.linking.scanner import scan_for_markers
from marklink.utils.formatting import console, create_table, print_info

app = typer.Typer(
    name="scan",
    help="List marker folders found in the workspace roots.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan(
    ctx: typer.Context,
    roots: RootsOption = None,
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
    """List marker folders that could be linked."""
    if ctx.invoked_subcommand is not None:
        return

    config = get_config(ctx)
    candidates = scan_for_markers(resolve_roots(roots), config)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([c.to_dict() for c in candidates]))
        return

    if not candidates:
        print_info("No candidate folders found.")
        return

    _print_table(candidates)
    console.print(f"\n[dim]Found {len(candidates)} candidate folder(s)[/dim]")


def _print_table(candidates: list[ScanCandidate]) -> None:
    """Display candidates as a Rich table."""
    table = create_table("Marker Folders")
    table.add_column("Project", style="link", no_wrap=True)
    table.add_column("Root")
    table.add_column("Marker", style="muted")
    table.add_column("Path", style="target", overflow="fold")

    for c in candidates:
        table.add_row(
            escape(c.parent_directory_path.name),
            escape(c.root_name),
            escape(c.relative_marker_path),
            escape(str(c.marker_path)),
        )

    console.print(table)
