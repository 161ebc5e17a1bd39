"""File mutation primitives and their backup-protected safe variants."""

from safepath.fileio.primitives import (
    DEFAULT_ENCODING,
    append_bytes,
    append_bytes_async,
    append_string,
    append_string_async,
    append_strings,
    append_strings_async,
    copy_file,
    copy_file_async,
    create_temp_file,
    delete_file,
    move_file,
    move_file_async,
    read_bytes,
)
from safepath.fileio.safe import (
    BackupGuard,
    BackupUnavailableError,
    SafeActionResult,
    SafeOutcome,
    run_with_backup,
    run_with_backup_async,
    safe_append_bytes,
    safe_append_bytes_async,
    safe_append_string,
    safe_append_string_async,
    safe_append_strings,
    safe_append_strings_async,
    safe_copy,
    safe_copy_async,
    safe_move,
    safe_move_async,
)
from safepath.fileio.settings import (
    SafeIOConfig,
    get_default_config,
    set_default_config,
    set_delete_temp_copies,
)

__all__ = [
    "DEFAULT_ENCODING",
    "BackupGuard",
    "BackupUnavailableError",
    "SafeActionResult",
    "SafeIOConfig",
    "SafeOutcome",
    "append_bytes",
    "append_bytes_async",
    "append_string",
    "append_string_async",
    "append_strings",
    "append_strings_async",
    "copy_file",
    "copy_file_async",
    "create_temp_file",
    "delete_file",
    "get_default_config",
    "move_file",
    "move_file_async",
    "read_bytes",
    "run_with_backup",
    "run_with_backup_async",
    "safe_append_bytes",
    "safe_append_bytes_async",
    "safe_append_string",
    "safe_append_string_async",
    "safe_append_strings",
    "safe_append_strings_async",
    "safe_copy",
    "safe_copy_async",
    "safe_move",
    "safe_move_async",
    "set_default_config",
    "set_delete_temp_copies",
]
