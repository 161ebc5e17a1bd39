"""Shared types and helpers for CLI commands."""

from enum import Enum

from rich.markup import escape

from safepath.core.paths import ensure_backup_dir
from safepath.fileio import SafeActionResult, SafeIOConfig
from safepath.utils.formatting import print_error, print_info, print_success, print_warning


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def safe_io_config(keep_backup: bool) -> SafeIOConfig | None:
    """Build per-call settings for a CLI file operation.

    Kept backups go to the state directory instead of the system temp dir.

    Returns:
        None to use the process-wide default, or a config retaining backups.
    """
    if not keep_backup:
        return None
    return SafeIOConfig(delete_temp_copies=False, backup_dir=ensure_backup_dir())


def report_safe_result(result: SafeActionResult, done: str) -> None:
    """Print the outcome of a safe file operation.

    Args:
        result: Result returned by the safe operation.
        done: Message printed on success.
    """
    if result.success:
        print_success(escape(done))
    elif result.unrecoverable:
        print_error(escape(f"Rollback failed, {result.path} may be corrupt: {result.error}"))
    else:
        print_error(escape(f"{result.error} ({result.outcome.value})"))

    if result.backup_path:
        message = escape(f"Backup kept at {result.backup_path}")
        if result.unrecoverable:
            print_warning(message)
        else:
            print_info(message)
