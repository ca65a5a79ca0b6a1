"""Utility modules for marklink.

This module exports commonly used utility functions.
"""

from marklink.utils.formatting import (
    console,
    create_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from marklink.utils.shell import CommandResult, run_command

__all__ = [
    "CommandResult",
    "console",
    "create_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
