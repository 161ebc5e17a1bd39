"""Sanitize command implementation.

Rewrites raw paths into paths that are legal for a target OS.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from safepath.cli.types import OutputFormat
from safepath.sanitizer import (
    PathSanitizer,
    ProfileError,
    RootMode,
    load_sanitizer_profile,
    sanitizer_for,
)
from safepath.utils.formatting import (
    console,
    create_sanitize_table,
    format_sanitize_row,
    print_error,
)
from safepath.validation import OSType, current_os_type


def _build_sanitizer(
    os_type: OSType | None,
    profile: Path | None,
    root_mode: RootMode | None,
    keep_redundant: bool,
    force_root: bool,
    qualify: bool,
) -> PathSanitizer:
    """Create the sanitizer for this invocation.

    A profile takes precedence over the OS preset; flags override either.

    Raises:
        ProfileError: If the profile cannot be loaded.
    """
    if profile is not None:
        sanitizer = load_sanitizer_profile(profile)
    else:
        sanitizer = sanitizer_for(os_type or current_os_type())

    if root_mode is not None:
        sanitizer.root_mode = root_mode
    if keep_redundant:
        sanitizer.remove_redundant_separators = False
    if force_root:
        sanitizer.force_root_separator = True
    if qualify:
        sanitizer.fully_qualify = True
        if os_type is not None:
            sanitizer.qualify_os = os_type
    return sanitizer


def sanitize_paths(
    paths: Annotated[
        list[str],
        typer.Argument(help="Paths to sanitize."),
    ],
    os_type: Annotated[
        OSType | None,
        typer.Option(
            "--os",
            help="Target OS grammar (default: the running OS).",
            case_sensitive=False,
        ),
    ] = None,
    profile: Annotated[
        Path | None,
        typer.Option(
            "--profile",
            "-p",
            help="Sanitizer profile (TOML) to use instead of the OS preset.",
        ),
    ] = None,
    root_mode: Annotated[
        RootMode | None,
        typer.Option(
            "--root-mode",
            "-r",
            help="Root handling policy.",
            case_sensitive=False,
        ),
    ] = None,
    keep_redundant: Annotated[
        bool,
        typer.Option(
            "--keep-redundant",
            help="Keep redundant separators as placeholders.",
        ),
    ] = False,
    force_root: Annotated[
        bool,
        typer.Option(
            "--force-root",
            help="Add a separator root when the path has none.",
        ),
    ] = False,
    qualify: Annotated[
        bool,
        typer.Option(
            "--qualify",
            help="Resolve valid results to absolute paths.",
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Sanitize one or more paths.

    Exits with code 1 if any path is empty.

    Examples:
        safepath sanitize 'C:\\Users\\me\\notes?.txt'
        safepath sanitize --os linux 'a//b/c.. '
        safepath sanitize --root-mode remove_all_roots /etc/hosts
        safepath sanitize --profile my.toml --format json a b c
    """
    try:
        sanitizer = _build_sanitizer(
            os_type, profile, root_mode, keep_redundant, force_root, qualify
        )
    except ProfileError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    results = [(path, sanitizer.sanitize(path)) for path in paths]

    if output_format == OutputFormat.JSON:
        data = [
            {"original": original, "sanitized": result.path, "success": result.success}
            for original, result in results
        ]
        console.print_json(json.dumps(data))
    else:
        table = create_sanitize_table()
        for original, result in results:
            table.add_row(*format_sanitize_row(original, result.path, result.success))
        console.print(table)

    if not all(result.success for _, result in results):
        raise typer.Exit(code=1)
