"""Safe file commands.

Appends to and moves files with a backup that is restored on failure.
"""

from pathlib import Path
from typing import Annotated

import typer

from safepath.cli.types import report_safe_result, safe_io_config
from safepath.fileio import safe_append_string, safe_move


def append_text(
    file: Annotated[
        Path,
        typer.Argument(help="File to append to (created if missing)."),
    ],
    text: Annotated[
        str,
        typer.Argument(help="Text to append."),
    ],
    no_newline: Annotated[
        bool,
        typer.Option(
            "--no-newline",
            "-n",
            help="Do not add a line separator after the text.",
        ),
    ] = False,
    keep_backup: Annotated[
        bool,
        typer.Option(
            "--keep-backup",
            help="Keep the backup copy in the state directory.",
        ),
    ] = False,
) -> None:
    """Append a line of text to a file.

    The file is backed up first and restored if the write fails.

    Examples:
        safepath append notes.txt "remember the milk"
        safepath append --no-newline data.csv "1,2,3"
    """
    result = safe_append_string(
        file, text, newline=not no_newline, config=safe_io_config(keep_backup)
    )
    report_safe_result(result, f"Appended to {file}")
    if not result:
        raise typer.Exit(code=1)


def move_path(
    src: Annotated[
        Path,
        typer.Argument(help="File to move."),
    ],
    dst: Annotated[
        Path,
        typer.Argument(help="Destination path."),
    ],
    overwrite: Annotated[
        bool,
        typer.Option(
            "--overwrite",
            "-o",
            help="Replace an existing destination.",
        ),
    ] = False,
    keep_backup: Annotated[
        bool,
        typer.Option(
            "--keep-backup",
            help="Keep the backup of an overwritten destination.",
        ),
    ] = False,
) -> None:
    """Move a file, restoring an overwritten destination on failure.

    Examples:
        safepath move draft.txt final.txt
        safepath move --overwrite new.cfg app.cfg
    """
    result = safe_move(src, dst, overwrite, config=safe_io_config(keep_backup))
    report_safe_result(result, f"Moved {src} -> {dst}")
    if not result:
        raise typer.Exit(code=1)
