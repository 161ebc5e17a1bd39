"""Path segmentation.

Unifies every recognised separator spelling into the fixed separator and
splits the path into its segments. When redundant separators are kept,
each empty segment is replaced by a literal separator placeholder so its
position survives the later stages.
"""

from collections.abc import Iterable


def unify_separators(path: str, fixed_separator: str, possible_separators: Iterable[str]) -> str:
    """Rewrite every alternate separator in ``path`` to ``fixed_separator``.

    Args:
        path: Raw path string.
        fixed_separator: Separator all alternates are normalised to.
        possible_separators: Alternate separator spellings.

    Returns:
        The path with a single separator convention.
    """
    for separator in possible_separators:
        if separator and separator != fixed_separator:
            path = path.replace(separator, fixed_separator)
    return path


def split_segments(path: str, fixed_separator: str, *, remove_redundant: bool) -> list[str]:
    """Split an already unified path into segments.

    An empty ``fixed_separator`` means separators were deleted during
    unification, so the whole path is a single segment.

    Args:
        path: Path whose separators are already unified.
        fixed_separator: Separator to split on.
        remove_redundant: Drop empty segments instead of keeping placeholders.

    Returns:
        Ordered list of segments. Empty when ``remove_redundant`` is set and
        the path consists only of separators.
    """
    if not fixed_separator:
        return [path] if path or not remove_redundant else []

    parts = path.split(fixed_separator)

    if remove_redundant:
        return [part for part in parts if part]

    return [part if part else fixed_separator for part in parts]


def is_placeholder(segment: str, fixed_separator: str, *, remove_redundant: bool) -> bool:
    """Check if ``segment`` is a separator placeholder kept from an empty segment."""
    return not remove_redundant and bool(fixed_separator) and segment == fixed_separator
