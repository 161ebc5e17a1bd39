"""Safe file mutations with backup and rollback.

Every safe operation follows the same protocol:

1. Check preconditions (source exists, overwrite allowed, text encodes).
2. Copy the current target into a fresh temporary file. A target that
   does not exist yet is recorded as "no prior target". If the backup
   cannot be made, stop without touching the target.
3. Run the mutation on the real target.
4. On success, delete the backup. On failure (exception or, for async
   operations, cancellation), copy the backup back over the target, or
   remove the target if there was none, then delete the backup.

Deleting backups can be turned off through ``SafeIOConfig`` to keep them for
manual recovery. A failed restore always keeps the backup.

This is best-effort protection against runtime failures, not a transaction:
a process crash between steps 3 and 4 leaves the target mutated, and a crash
between steps 2 and 3 leaves an orphaned backup. Two safe operations on the
same path are not coordinated with each other.
"""

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from types import TracebackType

from safepath.fileio.primitives import (
    DEFAULT_ENCODING,
    StrPath,
    append_raw,
    append_raw_async,
    copy_raw,
    copy_raw_async,
    create_temp_file,
    delete_file,
    encode_messages,
    finish_blocking,
    move_raw,
    move_raw_async,
    run_blocking,
)
from safepath.fileio.settings import SafeIOConfig, resolve_config

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Operation cancelled"


class SafeOutcome(str, Enum):
    """How a safe operation ended."""

    SUCCESS = "success"
    PRECONDITION_FAILED = "precondition_failed"
    BACKUP_UNAVAILABLE = "backup_unavailable"
    MUTATION_FAILED = "mutation_failed"
    ROLLBACK_FAILED = "rollback_failed"


@dataclass(frozen=True, slots=True)
class SafeActionResult:
    """Result of a single safe operation.

    Attributes:
        path: The target that was (or would have been) mutated.
        outcome: How the operation ended.
        error: Error message if the operation failed, None otherwise.
        backup_path: Backup copy left on disk, None if it was deleted or
            never created.
    """

    path: str
    outcome: SafeOutcome
    error: str | None = None
    backup_path: str | None = None

    @property
    def success(self) -> bool:
        """True only if the mutation completed."""
        return self.outcome == SafeOutcome.SUCCESS

    @property
    def unrecoverable(self) -> bool:
        """True if the target may be in neither its original nor its intended state."""
        return self.outcome == SafeOutcome.ROLLBACK_FAILED

    def __bool__(self) -> bool:
        return self.success


class BackupUnavailableError(OSError):
    """Raised when a backup of the target cannot be made."""


def _describe(error: BaseException) -> str:
    return str(error) or type(error).__name__


class BackupGuard:
    """Backup of one target for the duration of a safe operation.

    Entering the guard backs up the target. ``restore()`` puts the backup
    back after a failed mutation. Leaving the guard deletes the backup
    unless it must be retained, and restores first if the block raised.

    Works with both ``with`` and ``async with``.

    Attributes:
        target: Path being protected.
        config: Retention settings for this call.
        backup_path: Temporary copy of the target, None if there was no
            prior target.
        retained_path: Backup left on disk after release, if any.
    """

    def __init__(self, target: StrPath, config: SafeIOConfig | None = None) -> None:
        self.target = os.fspath(target)
        self.config = resolve_config(config)
        self.backup_path: str | None = None
        self.retained_path: str | None = None
        self._restored = False
        self._restore_failed = False

    @property
    def had_prior_target(self) -> bool:
        return self.backup_path is not None

    @property
    def restore_failed(self) -> bool:
        return self._restore_failed

    def acquire(self) -> None:
        """Copy the target into a new temporary file.

        Raises:
            BackupUnavailableError: If the temporary file or the copy fails.
        """
        if not os.path.exists(self.target):
            return

        backup_dir = self.config.backup_dir
        if backup_dir is not None:
            try:
                backup_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                msg = f"Cannot create backup directory {backup_dir}: {e}"
                raise BackupUnavailableError(msg) from e

        temp_path = create_temp_file(backup_dir)
        if temp_path is None:
            msg = f"Cannot create a temporary file to back up {self.target}"
            raise BackupUnavailableError(msg)

        try:
            copy_raw(self.target, temp_path, overwrite=True)
        except OSError as e:
            delete_file(temp_path)
            raise BackupUnavailableError(f"Cannot back up {self.target}: {e}") from e

        self.backup_path = temp_path

    def restore(self) -> bool:
        """Put the target back into its pre-mutation state.

        With no prior target, anything created at the target path is removed.

        Returns:
            True if the target was restored.
        """
        self._restored = True
        try:
            if self.backup_path is not None:
                copy_raw(self.backup_path, self.target, overwrite=True)
            elif os.path.lexists(self.target):
                os.remove(self.target)
        except OSError as e:
            self._restore_failed = True
            logger.critical(
                "Rollback of %s failed, target may be corrupt (backup: %s): %s",
                self.target,
                self.backup_path or "none",
                e,
            )
            return False
        return True

    def release(self) -> None:
        """Delete the backup unless retention applies."""
        if self.backup_path is None:
            return

        if self._restore_failed or not self.config.delete_temp_copies:
            logger.info("Backup of %s retained at %s", self.target, self.backup_path)
            self.retained_path = self.backup_path
            return

        if not delete_file(self.backup_path):
            logger.warning("Could not delete backup %s", self.backup_path)
            self.retained_path = self.backup_path

    def result(self, error: str | None) -> SafeActionResult:
        """Build the result for this guard's call once it has been released."""
        if error is None:
            return SafeActionResult(
                path=self.target, outcome=SafeOutcome.SUCCESS, backup_path=self.retained_path
            )

        if self._restore_failed:
            outcome = SafeOutcome.ROLLBACK_FAILED
        else:
            logger.warning("Operation on %s failed and was rolled back: %s", self.target, error)
            outcome = SafeOutcome.MUTATION_FAILED

        return SafeActionResult(
            path=self.target, outcome=outcome, error=error, backup_path=self.retained_path
        )

    def __enter__(self) -> "BackupGuard":
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None and not self._restored:
            self.restore()
        self.release()

    async def __aenter__(self) -> "BackupGuard":
        try:
            await run_blocking(self.acquire)
        except asyncio.CancelledError:
            self.release()
            raise
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None and not self._restored:
            await finish_blocking(self.restore)
        await finish_blocking(self.release)

    async def restore_async(self) -> bool:
        """Async ``restore``; runs to completion even if cancelled meanwhile."""
        return await finish_blocking(self.restore)


# =============================================================================
# Combinators
# =============================================================================


def _result_without_backup(path: str, outcome: SafeOutcome, error: str) -> SafeActionResult:
    level = logging.DEBUG if outcome == SafeOutcome.PRECONDITION_FAILED else logging.WARNING
    logger.log(level, "Safe operation on %s not attempted: %s", path, error)
    return SafeActionResult(path=path, outcome=outcome, error=error)


def run_with_backup(
    target: StrPath,
    mutate: Callable[[], object],
    *,
    config: SafeIOConfig | None = None,
) -> SafeActionResult:
    """Run ``mutate`` against ``target`` under a backup guard.

    ``mutate`` fails by raising or by returning False. Any exception is
    caught, the target is rolled back, and the failure is reported in the
    result.

    Args:
        target: File the mutation writes to.
        mutate: Zero-argument callable performing the mutation.
        config: Per-call settings. None uses the process-wide default.

    Returns:
        SafeActionResult describing the outcome.
    """
    guard = BackupGuard(target, config)
    error: str | None = None
    try:
        with guard:
            try:
                if mutate() is False:
                    error = f"Operation on {guard.target} reported failure"
            except Exception as e:
                error = _describe(e)
            if error is not None:
                guard.restore()
    except BackupUnavailableError as e:
        return _result_without_backup(guard.target, SafeOutcome.BACKUP_UNAVAILABLE, str(e))
    return guard.result(error)


async def run_with_backup_async(
    target: StrPath,
    mutate: Callable[[], Awaitable[object]],
    *,
    config: SafeIOConfig | None = None,
) -> SafeActionResult:
    """Async ``run_with_backup``.

    Cancelling the calling task while the mutation runs counts as a
    mutation failure: the target is rolled back and the result reports
    ``MUTATION_FAILED``. The cancellation is not re-raised.
    """
    guard = BackupGuard(target, config)
    error: str | None = None
    try:
        async with guard:
            try:
                if await mutate() is False:
                    error = f"Operation on {guard.target} reported failure"
            except asyncio.CancelledError:
                error = CANCELLED_MESSAGE
            except Exception as e:
                error = _describe(e)
            if error is not None:
                await guard.restore_async()
    except BackupUnavailableError as e:
        return _result_without_backup(guard.target, SafeOutcome.BACKUP_UNAVAILABLE, str(e))
    except asyncio.CancelledError:
        return _result_without_backup(guard.target, SafeOutcome.MUTATION_FAILED, CANCELLED_MESSAGE)
    return guard.result(error)


# =============================================================================
# Preconditions
# =============================================================================


def _check_append(path: str, create_if_missing: bool) -> str | None:
    if not create_if_missing and not os.path.exists(path):
        return f"File does not exist: {path}"
    if os.path.isdir(path):
        return f"Target is a directory: {path}"
    return None


def _check_transfer(src: str, dst: str, overwrite: bool) -> str | None:
    if not os.path.isfile(src):
        return f"Source does not exist: {src}"
    if os.path.exists(dst):
        if not overwrite:
            return f"Destination already exists: {dst}"
        if os.path.isdir(dst):
            return f"Destination is a directory: {dst}"
        if os.path.samefile(src, dst):
            return f"Source and destination are the same file: {src}"
    return None


# =============================================================================
# Append
# =============================================================================


def safe_append_bytes(
    path: StrPath,
    data: bytes,
    create_if_missing: bool = False,
    *,
    config: SafeIOConfig | None = None,
) -> SafeActionResult:
    """Append bytes to a file, rolling back on failure.

    Args:
        path: Target file.
        data: Bytes to append.
        create_if_missing: Create the file if it doesn't exist. On failure a
            file created this way is removed again.
        config: Per-call settings. None uses the process-wide default.

    Returns:
        SafeActionResult describing the outcome.
    """
    target = os.fspath(path)
    if problem := _check_append(target, create_if_missing):
        return _result_without_backup(target, SafeOutcome.PRECONDITION_FAILED, problem)
    return run_with_backup(
        target, lambda: append_raw(target, data, create_if_missing=True), config=config
    )


def safe_append_string(
    path: StrPath,
    text: str,
    newline: bool = True,
    encoding: str = DEFAULT_ENCODING,
    *,
    config: SafeIOConfig | None = None,
) -> SafeActionResult:
    """Append text to a file, creating it if necessary, rolling back on failure.

    Args:
        path: Target file.
        text: Message to append.
        newline: Follow the message with the platform line separator.
        encoding: Text encoding; strict UTF-8 without BOM by default.
        config: Per-call settings. None uses the process-wide default.

    Returns:
        SafeActionResult describing the outcome. Text that cannot be encoded
        is a precondition failure and never touches the file.
    """
    return safe_append_strings(path, [text], newline, encoding, config=config)


def safe_append_strings(
    path: StrPath,
    messages: Iterable[str],
    newline: bool = True,
    encoding: str = DEFAULT_ENCODING,
    *,
    config: SafeIOConfig | None = None,
) -> SafeActionResult:
    """Append several messages to a file as one guarded mutation."""
    target = os.fspath(path)
    try:
        data = encode_messages(messages, newline=newline, encoding=encoding)
    except (UnicodeError, LookupError) as e:
        error = f"Cannot encode text for {target}: {e}"
        return _result_without_backup(target, SafeOutcome.PRECONDITION_FAILED, error)
    return safe_append_bytes(target, data, create_if_missing=True, config=config)


async def safe_append_bytes_async(
    path: StrPath,
    data: bytes,
    create_if_missing: bool = False,
    *,
    config: SafeIOConfig | None = None,
) -> SafeActionResult:
    """Async ``safe_append_bytes``. Cancellation rolls back and reports failure."""
    target = os.fspath(path)
    if problem := _check_append(target, create_if_missing):
        return _result_without_backup(target, SafeOutcome.PRECONDITION_FAILED, problem)
    return await run_with_backup_async(
        target, lambda: append_raw_async(target, data, create_if_missing=True), config=config
    )


async def safe_append_string_async(
    path: StrPath,
    text: str,
    newline: bool = True,
    encoding: str = DEFAULT_ENCODING,
    *,
    config: SafeIOConfig | None = None,
) -> SafeActionResult:
    """Async ``safe_append_string``."""
    return await safe_append_strings_async(path, [text], newline, encoding, config=config)


async def safe_append_strings_async(
    path: StrPath,
    messages: Iterable[str],
    newline: bool = True,
    encoding: str = DEFAULT_ENCODING,
    *,
    config: SafeIOConfig | None = None,
) -> SafeActionResult:
    """Async ``safe_append_strings``."""
    target = os.fspath(path)
    try:
        data = encode_messages(messages, newline=newline, encoding=encoding)
    except (UnicodeError, LookupError) as e:
        error = f"Cannot encode text for {target}: {e}"
        return _result_without_backup(target, SafeOutcome.PRECONDITION_FAILED, error)
    return await safe_append_bytes_async(target, data, create_if_missing=True, config=config)


# =============================================================================
# Move and copy
# =============================================================================


def safe_move(
    src: StrPath,
    dst: StrPath,
    overwrite: bool = False,
    *,
    config: SafeIOConfig | None = None,
) -> SafeActionResult:
    """Move a file, protecting an overwritten destination with a backup.

    If the destination did not exist before, a partially created
    destination is removed on failure.

    Args:
        src: File to move.
        dst: Destination path.
        overwrite: Replace an existing destination.
        config: Per-call settings. None uses the process-wide default.

    Returns:
        SafeActionResult for the destination.
    """
    source, target = os.fspath(src), os.fspath(dst)
    if problem := _check_transfer(source, target, overwrite):
        return _result_without_backup(target, SafeOutcome.PRECONDITION_FAILED, problem)
    return run_with_backup(
        target, lambda: move_raw(source, target, overwrite=True), config=config
    )


def safe_copy(
    src: StrPath,
    dst: StrPath,
    overwrite: bool = False,
    *,
    config: SafeIOConfig | None = None,
) -> SafeActionResult:
    """Copy a file, protecting an overwritten destination with a backup."""
    source, target = os.fspath(src), os.fspath(dst)
    if problem := _check_transfer(source, target, overwrite):
        return _result_without_backup(target, SafeOutcome.PRECONDITION_FAILED, problem)
    return run_with_backup(
        target, lambda: copy_raw(source, target, overwrite=True), config=config
    )


async def safe_move_async(
    src: StrPath,
    dst: StrPath,
    overwrite: bool = False,
    *,
    config: SafeIOConfig | None = None,
) -> SafeActionResult:
    """Async ``safe_move``, implemented as copy-then-delete.

    The source is only deleted once the copy is complete; if that delete
    fails the destination is rolled back and the source stays in place.
    """
    source, target = os.fspath(src), os.fspath(dst)
    if problem := _check_transfer(source, target, overwrite):
        return _result_without_backup(target, SafeOutcome.PRECONDITION_FAILED, problem)
    return await run_with_backup_async(
        target, lambda: move_raw_async(source, target, overwrite=True), config=config
    )


async def safe_copy_async(
    src: StrPath,
    dst: StrPath,
    overwrite: bool = False,
    *,
    config: SafeIOConfig | None = None,
) -> SafeActionResult:
    """Async ``safe_copy``."""
    source, target = os.fspath(src), os.fspath(dst)
    if problem := _check_transfer(source, target, overwrite):
        return _result_without_backup(target, SafeOutcome.PRECONDITION_FAILED, problem)
    return await run_with_backup_async(
        target, lambda: copy_raw_async(source, target, overwrite=True), config=config
    )
