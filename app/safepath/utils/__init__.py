"""Utility modules for safepath.

This module exports commonly used console helpers.
"""

from safepath.utils.formatting import (
    console,
    create_sanitize_table,
    err_console,
    format_sanitize_row,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_sanitize_table",
    "err_console",
    "format_sanitize_row",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
