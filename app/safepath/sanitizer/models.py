"""Data models for path sanitization.

This module defines the policy enums that drive the sanitizer pipeline
and the small immutable records passed between its stages.
"""

from dataclasses import dataclass
from enum import Enum


class RootMode(str, Enum):
    """How the sanitizer treats the root of a path.

    Attributes:
        ALLOW_ALL_ROOTS: Keep both lettered drive roots ("C:/") and separator roots.
        SEPARATOR_ONLY: Keep separator roots, discard lettered drive roots.
        REMOVE_ALL_ROOTS: Strip every root; the result is always relative.
    """

    ALLOW_ALL_ROOTS = "allow_all_roots"
    SEPARATOR_ONLY = "separator_only"
    REMOVE_ALL_ROOTS = "remove_all_roots"


class ReplacementMode(str, Enum):
    """Which content passes run on each segment, and in what order.

    Attributes:
        QUICK_ONLY: Only strip matches of the quick replacement pattern.
        EXACT_ONLY: Only apply the ordered exact replacements.
        QUICK_THEN_EXACT: Quick pass first, then the exact pass.
        EXACT_THEN_QUICK: Exact pass first, then the quick pass.
    """

    QUICK_ONLY = "quick_only"
    EXACT_ONLY = "exact_only"
    QUICK_THEN_EXACT = "quick_then_exact"
    EXACT_THEN_QUICK = "exact_then_quick"

    @property
    def runs_quick(self) -> bool:
        """Check if this mode includes the quick pass."""
        return self != ReplacementMode.EXACT_ONLY

    @property
    def runs_exact(self) -> bool:
        """Check if this mode includes the exact pass."""
        return self != ReplacementMode.QUICK_ONLY


@dataclass(frozen=True, slots=True)
class RootInfo:
    """Outcome of root classification.

    Attributes:
        has_root: Whether the caller should prepend ``root``.
        root: Root string to prepend (may be empty even if has_root is True).
        start_index: First segment index that takes part in sanitization.
    """

    has_root: bool
    root: str = ""
    start_index: int = 0


@dataclass(frozen=True, slots=True)
class SanitizeResult:
    """Result of sanitizing a single path.

    Attributes:
        success: False only when the input path was None or empty.
        path: The sanitized path. May be empty even on success.
    """

    success: bool
    path: str = ""

    def __bool__(self) -> bool:
        return self.success

    def __iter__(self):
        # Allows ``ok, path = sanitizer.sanitize(raw)``
        yield self.success
        yield self.path
