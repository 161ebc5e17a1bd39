"""CLI commands for safepath.

This package contains all subcommand implementations.
"""

from safepath.cli.commands import files, profile, sanitize, validate

__all__ = ["files", "profile", "sanitize", "validate"]
