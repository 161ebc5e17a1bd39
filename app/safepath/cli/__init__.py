"""CLI package for safepath.

This package contains the Typer application and all subcommands.
"""

from safepath.cli.main import app

__all__ = ["app"]
