"""Sanitizer profile commands.

Creates and displays TOML sanitizer profiles.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from safepath.core.paths import get_sanitizer_profile_path
from safepath.sanitizer import (
    ProfileError,
    load_sanitizer_profile,
    sanitizer_for,
    save_sanitizer_profile,
)
from safepath.utils.formatting import console, print_error, print_info, print_success
from safepath.validation import OSType, current_os_type

app = typer.Typer(
    help="Create and inspect sanitizer profiles.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def init(
    os_type: Annotated[
        OSType | None,
        typer.Option(
            "--os",
            help="Preset to start from (default: the running OS).",
            case_sensitive=False,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path for the profile.",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing profile.",
        ),
    ] = False,
) -> None:
    """Write an OS preset as an editable profile.

    Examples:
        safepath profile init
        safepath profile init --os windows --output win.toml
    """
    output_path = output or get_sanitizer_profile_path()

    if output_path.exists() and not force:
        print_error(f"Profile already exists: {escape(str(output_path))}")
        print_info("Use --force to overwrite or specify a different path with --output.")
        raise typer.Exit(code=1)

    sanitizer = sanitizer_for(os_type or current_os_type())
    try:
        saved_path = save_sanitizer_profile(sanitizer, output_path)
    except ProfileError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(f"Profile written: {escape(str(saved_path))}")


@app.command()
def show(
    path: Annotated[
        Path | None,
        typer.Option(
            "--path",
            "-p",
            help="Profile to show (default: the user profile).",
        ),
    ] = None,
) -> None:
    """Show the settings of a sanitizer profile."""
    profile_path = path or get_sanitizer_profile_path()

    try:
        sanitizer = load_sanitizer_profile(profile_path)
    except ProfileError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    table = Table(
        title=f"Profile: {escape(str(profile_path))}",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="muted")
    table.add_column("Value", overflow="fold")

    for name, value in sanitizer.model_dump(mode="json").items():
        if isinstance(value, list):
            rendered = ", ".join(repr(v) for v in value) or "-"
        elif isinstance(value, dict):
            rendered = ", ".join(f"{k!r} -> {v!r}" for k, v in value.items()) or "-"
        else:
            rendered = repr(value) if isinstance(value, str) else str(value)
        table.add_row(name, escape(rendered))

    console.print(table)
