"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from safepath.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_sanitize_table(title: str = "Sanitized Paths") -> Table:
    """Create a pre-configured table for original/sanitized path pairs.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for sanitization output.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    # Status column: icon only, no header text
    table.add_column("", width=2, justify="center")
    table.add_column("Original", style="path.original", overflow="fold")
    table.add_column("Sanitized", style="path.sanitized", overflow="fold")
    return table


def format_sanitize_row(original: str, sanitized: str, success: bool) -> tuple[str, str, str]:
    """Format an original/sanitized pair as a table row.

    Unchanged paths get a muted dot, rewritten paths a highlighted arrow and
    rejected inputs an error cross.

    Returns:
        Tuple of (icon, original, sanitized) with Rich markup.
    """
    if not success:
        icon = "[error]✗[/]"
    elif original == sanitized:
        icon = "[muted]·[/]"
    else:
        icon = "[changed]→[/]"
    return (icon, escape(original), escape(sanitized) if sanitized else "[muted](empty)[/]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
