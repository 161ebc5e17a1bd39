"""Plain (non-safe) file primitives.

The public functions never raise for filesystem errors: ``OSError`` is
logged at debug level and turned into a ``False`` (or ``None``) return.
Callers must check the flag.

The ``*_raw`` variants raise instead. The safe wrappers in
``safepath.fileio.safe`` use them so the failure reason reaches the result.

Async variants move data in chunks, one worker-thread call per chunk. A
cancellation waits for the in-flight call (an open or a chunk) to land
before ``asyncio.CancelledError`` propagates, so nothing touches the file
after the caller has been told the operation stopped. A file opened that
late is closed again.
"""

import asyncio
import logging
import os
import shutil
import tempfile
from collections.abc import Awaitable, Callable, Iterable
from pathlib import Path
from typing import BinaryIO, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

StrPath = str | os.PathLike[str]

# Strict UTF-8 without a byte order mark
DEFAULT_ENCODING = "utf-8"

COPY_BUFFER_SIZE = 81920

TEMP_PREFIX = "safepath-"
TEMP_SUFFIX = ".bak"


# =============================================================================
# Encoding
# =============================================================================


def encode_text(text: str, *, newline: bool = True, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Encode one message for appending.

    Raises:
        UnicodeEncodeError: If ``text`` cannot be represented in ``encoding``.
        LookupError: If ``encoding`` is unknown.
    """
    if newline:
        text += os.linesep
    return text.encode(encoding, errors="strict")


def encode_messages(
    messages: Iterable[str], *, newline: bool = True, encoding: str = DEFAULT_ENCODING
) -> bytes:
    """Encode several messages, each optionally followed by a newline."""
    return b"".join(encode_text(m, newline=newline, encoding=encoding) for m in messages)


# =============================================================================
# Raising variants
# =============================================================================


def copy_raw(src: StrPath, dst: StrPath, overwrite: bool = False) -> None:
    """Copy file contents from ``src`` to ``dst``.

    An existing destination is truncated in place, not replaced.

    Raises:
        FileExistsError: If ``dst`` exists and ``overwrite`` is False.
        OSError: On any other filesystem failure.
    """
    if not overwrite and os.path.exists(dst):
        raise FileExistsError(f"Destination already exists: {dst}")
    shutil.copyfile(src, dst)


def move_raw(src: StrPath, dst: StrPath, overwrite: bool = False) -> None:
    """Move ``src`` to ``dst``.

    Raises:
        FileNotFoundError: If ``src`` does not exist.
        FileExistsError: If ``dst`` exists and ``overwrite`` is False.
        OSError: On any other filesystem failure.
    """
    if not os.path.exists(src):
        raise FileNotFoundError(f"Source does not exist: {src}")
    if os.path.exists(dst):
        if not overwrite:
            raise FileExistsError(f"Destination already exists: {dst}")
        if os.path.isdir(dst):
            raise IsADirectoryError(f"Destination is a directory: {dst}")
    shutil.move(os.fspath(src), os.fspath(dst))


def append_raw(path: StrPath, data: bytes, create_if_missing: bool = False) -> None:
    """Append ``data`` to the file at ``path``.

    Raises:
        FileNotFoundError: If the file is missing and ``create_if_missing`` is False.
        OSError: On any other filesystem failure.
    """
    if not create_if_missing and not os.path.exists(path):
        raise FileNotFoundError(f"File does not exist: {path}")
    with open(path, "ab") as f:
        f.write(data)


# =============================================================================
# Boolean variants
# =============================================================================


def _attempt(action: str, func: Callable[..., object], *args: object) -> bool:
    try:
        func(*args)
    except OSError as e:
        logger.debug("%s failed: %s", action, e)
        return False
    return True


def copy_file(src: StrPath, dst: StrPath, overwrite: bool = False) -> bool:
    """Copy a file. Returns True on success."""
    return _attempt(f"Copy {src} -> {dst}", copy_raw, src, dst, overwrite)


def move_file(src: StrPath, dst: StrPath, overwrite: bool = False) -> bool:
    """Move a file. Returns True on success."""
    return _attempt(f"Move {src} -> {dst}", move_raw, src, dst, overwrite)


def append_bytes(path: StrPath, data: bytes, create_if_missing: bool = False) -> bool:
    """Append bytes to a file. Returns True on success."""
    return _attempt(f"Append to {path}", append_raw, path, data, create_if_missing)


def append_string(
    path: StrPath, text: str, newline: bool = True, encoding: str = DEFAULT_ENCODING
) -> bool:
    """Append text to a file, creating it if necessary.

    Args:
        path: Target file.
        text: Message to append.
        newline: Follow the message with the platform line separator.
        encoding: Text encoding (strict, no BOM).

    Returns:
        True on success, False if the text cannot be encoded or written.
    """
    return append_strings(path, [text], newline=newline, encoding=encoding)


def append_strings(
    path: StrPath,
    messages: Iterable[str],
    newline: bool = True,
    encoding: str = DEFAULT_ENCODING,
) -> bool:
    """Append several messages to a file, creating it if necessary."""
    try:
        data = encode_messages(messages, newline=newline, encoding=encoding)
    except (UnicodeError, LookupError) as e:
        logger.debug("Cannot encode text for %s: %s", path, e)
        return False
    return append_bytes(path, data, create_if_missing=True)


def create_temp_file(directory: StrPath | None = None) -> str | None:
    """Create an empty, uniquely named temporary file.

    Args:
        directory: Where to create it. None uses the system temp directory.

    Returns:
        Path of the new file, or None if it could not be created.
    """
    try:
        fd, name = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX, dir=directory)
    except OSError as e:
        logger.debug("Could not create temporary file in %s: %s", directory, e)
        return None
    os.close(fd)
    return name


def delete_file(path: StrPath) -> bool:
    """Delete a file. A missing file counts as deleted."""
    return _attempt(f"Delete {path}", Path(path).unlink, True)


def read_bytes(path: StrPath) -> bytes | None:
    """Read a whole file. Returns None on failure."""
    try:
        return Path(path).read_bytes()
    except OSError as e:
        logger.debug("Read %s failed: %s", path, e)
        return None


# =============================================================================
# Async variants
# =============================================================================


async def run_blocking(
    func: Callable[..., T], *args: object, on_late_result: Callable[[T], object] | None = None
) -> T:
    """Run ``func`` in a worker thread.

    If the awaiting task is cancelled, wait for the call to finish before
    re-raising ``asyncio.CancelledError``. ``on_late_result`` receives the
    value of a call that completed after the cancellation, so resources it
    returned can be released.
    """
    task = asyncio.ensure_future(asyncio.to_thread(func, *args))
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        await asyncio.wait({task})
        if on_late_result is not None and not task.cancelled() and task.exception() is None:
            on_late_result(task.result())
        raise


async def finish_blocking(func: Callable[..., T], *args: object) -> T:
    """Run ``func`` in a worker thread and absorb a cancellation meanwhile.

    The call always completes and its result is returned.
    """
    task = asyncio.ensure_future(asyncio.to_thread(func, *args))
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        await asyncio.wait({task})
        return task.result()


async def _open_async(path: StrPath, mode: str) -> BinaryIO:
    return await run_blocking(open, path, mode, on_late_result=_close)


def _close(f: BinaryIO) -> None:
    f.close()


async def _write_chunks(path: StrPath, mode: str, data: bytes) -> None:
    f = await _open_async(path, mode)
    try:
        view = memoryview(data)
        for start in range(0, len(view), COPY_BUFFER_SIZE):
            await run_blocking(f.write, view[start : start + COPY_BUFFER_SIZE])
    finally:
        f.close()


async def append_raw_async(path: StrPath, data: bytes, create_if_missing: bool = False) -> None:
    """Async ``append_raw``.

    Raises:
        asyncio.CancelledError: If cancelled; chunks already written stay written.
    """
    if not create_if_missing and not os.path.exists(path):
        raise FileNotFoundError(f"File does not exist: {path}")
    await _write_chunks(path, "ab", data)


async def copy_raw_async(src: StrPath, dst: StrPath, overwrite: bool = False) -> None:
    """Async ``copy_raw``, streaming ``src`` into ``dst`` chunk by chunk."""
    if not overwrite and os.path.exists(dst):
        raise FileExistsError(f"Destination already exists: {dst}")
    source = await _open_async(src, "rb")
    try:
        target = await _open_async(dst, "wb")
        try:
            while chunk := await run_blocking(source.read, COPY_BUFFER_SIZE):
                await run_blocking(target.write, chunk)
        finally:
            target.close()
    finally:
        source.close()


async def move_raw_async(src: StrPath, dst: StrPath, overwrite: bool = False) -> None:
    """Async move implemented as copy-then-delete.

    A cancellation during the copy propagates with the source untouched.
    Once the copy is complete the move is committed: the source delete
    runs to completion and a cancellation arriving meanwhile is absorbed.
    """
    if not os.path.exists(src):
        raise FileNotFoundError(f"Source does not exist: {src}")
    await copy_raw_async(src, dst, overwrite)
    await finish_blocking(os.remove, src)


async def _attempt_async(
    action: str, func: Callable[..., Awaitable[None]], *args: object
) -> bool:
    try:
        await func(*args)
    except OSError as e:
        logger.debug("%s failed: %s", action, e)
        return False
    return True


async def copy_file_async(src: StrPath, dst: StrPath, overwrite: bool = False) -> bool:
    """Async ``copy_file``. Cancellation propagates."""
    return await _attempt_async(f"Copy {src} -> {dst}", copy_raw_async, src, dst, overwrite)


async def move_file_async(src: StrPath, dst: StrPath, overwrite: bool = False) -> bool:
    """Async ``move_file`` (copy-then-delete).

    Cancellation propagates until the copy is complete; after that the move
    finishes and returns normally.
    """
    return await _attempt_async(f"Move {src} -> {dst}", move_raw_async, src, dst, overwrite)


async def append_bytes_async(path: StrPath, data: bytes, create_if_missing: bool = False) -> bool:
    """Async ``append_bytes``. Cancellation propagates."""
    return await _attempt_async(
        f"Append to {path}", append_raw_async, path, data, create_if_missing
    )


async def append_string_async(
    path: StrPath, text: str, newline: bool = True, encoding: str = DEFAULT_ENCODING
) -> bool:
    """Async ``append_string``. Cancellation propagates."""
    return await append_strings_async(path, [text], newline=newline, encoding=encoding)


async def append_strings_async(
    path: StrPath,
    messages: Iterable[str],
    newline: bool = True,
    encoding: str = DEFAULT_ENCODING,
) -> bool:
    """Async ``append_strings``. Cancellation propagates."""
    try:
        data = encode_messages(messages, newline=newline, encoding=encoding)
    except (UnicodeError, LookupError) as e:
        logger.debug("Cannot encode text for %s: %s", path, e)
        return False
    return await append_bytes_async(path, data, create_if_missing=True)


async def delete_file_async(path: StrPath) -> bool:
    """Async ``delete_file``."""
    return await run_blocking(delete_file, path)
