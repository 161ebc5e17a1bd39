"""Validate command implementation.

Checks a path against an OS filesystem grammar without changing it.
"""

from enum import Enum
from typing import Annotated

import typer
from rich.markup import escape

from safepath.utils.formatting import print_error, print_success
from safepath.validation import (
    OSType,
    current_os_type,
    is_valid_directory,
    is_valid_file_path,
    is_valid_filename,
)


class PathKind(str, Enum):
    """What the validated string is supposed to be."""

    FILE = "file"
    DIRECTORY = "directory"
    FILENAME = "filename"


def validate_path(
    path: Annotated[
        str,
        typer.Argument(help="Path to validate."),
    ],
    os_type: Annotated[
        OSType | None,
        typer.Option(
            "--os",
            help="Target OS grammar (default: the running OS).",
            case_sensitive=False,
        ),
    ] = None,
    kind: Annotated[
        PathKind,
        typer.Option(
            "--kind",
            "-k",
            help="Validate as a file path, directory or bare filename.",
            case_sensitive=False,
        ),
    ] = PathKind.FILE,
    root_required: Annotated[
        bool,
        typer.Option(
            "--root-required",
            help="Require an absolute path (ignored for filenames).",
        ),
    ] = False,
) -> None:
    """Check whether a path is legal for an OS.

    Exits with code 1 if the path is invalid.

    Examples:
        safepath validate /var/log/app.log --os linux --root-required
        safepath validate 'C:\\Temp' --os windows --kind directory
        safepath validate 'CON.txt' --kind filename
    """
    target_os = os_type or current_os_type()

    match kind:
        case PathKind.FILENAME:
            valid = is_valid_filename(path, target_os)
        case PathKind.DIRECTORY:
            valid = is_valid_directory(path, target_os, root_required=root_required)
        case _:
            valid = is_valid_file_path(path, target_os, root_required=root_required)

    if not valid:
        print_error(f"Not a valid {kind.value} for {target_os.value}: {escape(path)}")
        raise typer.Exit(code=1)

    print_success(f"Valid {kind.value} for {target_os.value}: {escape(path)}")
