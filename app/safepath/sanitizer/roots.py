"""Root classification for segmented paths.

Decides whether a path is anchored (by a leading separator or a lettered
drive such as ``C:``), what root string the reassembled path starts with,
and the first segment index that takes part in content sanitization.

Policies:
- ALLOW_ALL_ROOTS: keep separator roots and lettered roots ("C:" -> "C:/").
- SEPARATOR_ONLY: keep separator roots, drop a lettered drive together with
  the segment that carries it.
- REMOVE_ALL_ROOTS: strip lettered prefixes and leading placeholders, and
  always report that no root was found.
"""

from safepath.sanitizer.models import RootInfo, RootMode
from safepath.sanitizer.segmenter import is_placeholder
from safepath.validation import LETTER_ROOT_LENGTH, LETTERED_ROOT_PATTERN


def lettered_root(segment: str) -> str | None:
    """Return the lettered drive prefix of ``segment`` ("C:"), or None.

    Segments shorter than a lettered prefix are never treated as roots.
    """
    if len(segment) < LETTER_ROOT_LENGTH:
        return None
    prefix = segment[:LETTER_ROOT_LENGTH]
    if LETTERED_ROOT_PATTERN.match(prefix):
        return prefix
    return None


def classify_root(
    segments: list[str],
    path: str,
    *,
    mode: RootMode,
    fixed_separator: str,
    remove_redundant: bool,
    force_root_separator: bool = False,
) -> RootInfo:
    """Classify the root of a segmented path.

    ``segments`` may be modified in place: a lettered prefix that is kept
    as the root is cut from the segment that carried it.

    Args:
        segments: Segments produced by the segmenter. Must not be empty.
        path: The unified path before splitting, used to detect a leading
            separator that redundancy removal has hidden.
        mode: Root policy to apply.
        fixed_separator: The separator paths are normalised to.
        remove_redundant: Whether empty segments were dropped while splitting.
        force_root_separator: Synthesize a separator root when none was found.

    Returns:
        RootInfo with the root to prepend and the first sanitizable index.
    """
    match mode:
        case RootMode.SEPARATOR_ONLY:
            info = _separator_root_only(segments, path, fixed_separator, remove_redundant)
        case RootMode.REMOVE_ALL_ROOTS:
            info = _remove_all_roots(segments, fixed_separator, remove_redundant)
        case _:
            info = _allow_all_roots(segments, path, fixed_separator, remove_redundant)

    if not info.has_root and force_root_separator:
        return RootInfo(has_root=True, root=fixed_separator, start_index=info.start_index)

    return info


def _separator_root(fixed_separator: str, remove_redundant: bool) -> str:
    # A kept placeholder segment already emits the separator itself.
    return fixed_separator if remove_redundant else ""


def _starts_with_separator(path: str, fixed_separator: str) -> bool:
    return bool(fixed_separator) and path.startswith(fixed_separator)


def _allow_all_roots(
    segments: list[str], path: str, fixed_separator: str, remove_redundant: bool
) -> RootInfo:
    if _starts_with_separator(path, fixed_separator):
        return RootInfo(has_root=True, root=_separator_root(fixed_separator, remove_redundant))

    first = segments[0]
    prefix = lettered_root(first)
    if prefix is None:
        return RootInfo(has_root=False)

    segments[0] = first[LETTER_ROOT_LENGTH:]
    return RootInfo(has_root=True, root=prefix + fixed_separator)


def _separator_root_only(
    segments: list[str], path: str, fixed_separator: str, remove_redundant: bool
) -> RootInfo:
    first = segments[0]
    if _starts_with_separator(path, fixed_separator) or is_placeholder(
        first, fixed_separator, remove_redundant=remove_redundant
    ):
        return RootInfo(has_root=True, root=_separator_root(fixed_separator, remove_redundant))

    prefix = lettered_root(first)
    if prefix is None:
        return RootInfo(has_root=False)

    # The drive and its whole segment are discarded. If nothing but
    # separators follows a bare drive, that separator becomes the root.
    remainder = path[LETTER_ROOT_LENGTH:]
    if (
        len(first) == LETTER_ROOT_LENGTH
        and remainder
        and fixed_separator
        and not remainder.replace(fixed_separator, "")
    ):
        return RootInfo(
            has_root=True,
            root=_separator_root(fixed_separator, remove_redundant),
            start_index=1,
        )

    return RootInfo(has_root=False, start_index=1)


def _remove_all_roots(
    segments: list[str], fixed_separator: str, remove_redundant: bool
) -> RootInfo:
    start_index = len(segments)

    for index, segment in enumerate(segments):
        if is_placeholder(segment, fixed_separator, remove_redundant=remove_redundant):
            continue

        prefix = lettered_root(segment)
        if prefix is None:
            start_index = index
            break

        rest = segment[LETTER_ROOT_LENGTH:]
        if rest:
            segments[index] = rest
            start_index = index
            break

    # Always "no root", even when one was stripped.
    return RootInfo(has_root=False, start_index=start_index)
