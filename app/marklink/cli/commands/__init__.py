"""CLI commands for marklink.

This package contains all subcommand implementations.
"""

from marklink.cli.commands import config, link, links, scan, unlink

__all__ = ["config", "link", "links", "scan", "unlink"]
