"""Path reassembly.

Joins the root and the sanitized segments back into one path with the
fixed separator, dropping segments that sanitization emptied, and
optionally qualifies the result against the current working directory.
"""

import logging
import os
from collections.abc import Sequence

from safepath.sanitizer.segmenter import is_placeholder
from safepath.validation import OSType, is_valid_directory, is_valid_file_path

logger = logging.getLogger(__name__)


def assemble(
    root: str,
    segments: Sequence[str],
    start_index: int,
    *,
    fixed_separator: str,
    remove_redundant: bool,
) -> str:
    """Join ``root`` and ``segments[start_index:]`` into a path.

    Blank segments contribute nothing, not even a separator. A placeholder
    segment (kept when redundant separators are not removed) stands for a
    separator and is only emitted if the path does not already end with one,
    so placeholders never duplicate separators. No separator is added after
    the last segment.

    Args:
        root: Root string to start with ("" for relative paths).
        segments: Sanitized segments.
        start_index: First segment to include.
        fixed_separator: Separator placed between segments.
        remove_redundant: Whether placeholder segments can occur.

    Returns:
        The reassembled path.
    """
    result = root
    wrote_content = False

    for segment in segments[start_index:]:
        if is_placeholder(segment, fixed_separator, remove_redundant=remove_redundant):
            if not result.endswith(fixed_separator):
                result += fixed_separator
            continue

        if not segment or segment.isspace():
            continue

        if wrote_content and not result.endswith(fixed_separator):
            result += fixed_separator
        result += segment
        wrote_content = True

    return result


def qualify(path: str, os_type: OSType = OSType.NON_STANDARD) -> str:
    """Resolve ``path`` against the current working directory when it is legal.

    Qualification is best-effort: if the path is neither a valid file path
    nor a valid directory for ``os_type`` it is returned unchanged.

    Args:
        path: Sanitized path.
        os_type: Grammar used to decide whether qualification is safe.

    Returns:
        The absolute path, or ``path`` unchanged.
    """
    if not path:
        return path

    if not (is_valid_file_path(path, os_type) or is_valid_directory(path, os_type)):
        logger.debug("Skipping qualification of %r: not a valid path", path)
        return path

    try:
        return os.path.abspath(path)
    except (OSError, ValueError) as e:
        logger.debug("Could not qualify %r: %s", path, e)
        return path
