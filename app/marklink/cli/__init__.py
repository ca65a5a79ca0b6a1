"""CLI package for marklink.

This package contains the Typer application and all subcommands.
"""

from marklink.cli.main import app

__all__ = ["app"]
