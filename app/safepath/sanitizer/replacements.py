"""Segment content replacement passes.

Two passes are available:
- Quick: every token is a regex fragment; all tokens are joined into one
  alternation and each match is removed in a single pass.
- Exact: ordered literal ``old -> new`` substitutions, applied one pair at a
  time. This is the slower path.

After the passes, every segment is trimmed of surrounding whitespace and
trailing periods, which many filesystems silently discard.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

REGEX_PIPE = "|"
TRIMMABLE_CHAR = "."


@dataclass(frozen=True, slots=True)
class QuickReplacementMatcher:
    """Immutable compiled form of a set of quick replacement tokens.

    Attributes:
        tokens: Tokens the pattern was built from, in order.
        pattern: Compiled alternation, or None when there are no tokens.
    """

    tokens: tuple[str, ...] = ()
    pattern: re.Pattern[str] | None = field(default=None, compare=False)

    @classmethod
    def build(cls, tokens: Iterable[str]) -> "QuickReplacementMatcher":
        """Compile ``tokens`` into a single alternation.

        Args:
            tokens: Regex fragments. Each must be a valid pattern on its own.

        Returns:
            A new matcher.

        Raises:
            re.error: If the joined alternation is not a valid pattern.
        """
        frozen = tuple(tokens)
        if not frozen:
            return cls()
        return cls(tokens=frozen, pattern=re.compile(build_quick_pattern(frozen)))

    @property
    def source(self) -> str:
        """The alternation source text ("" when empty)."""
        return self.pattern.pattern if self.pattern is not None else ""

    def apply(self, segment: str) -> str:
        """Remove every match of the pattern from ``segment``."""
        if self.pattern is None:
            return segment
        return self.pattern.sub("", segment)


def build_quick_pattern(tokens: Iterable[str]) -> str:
    """Join quick replacement tokens into one alternation source string."""
    return REGEX_PIPE.join(tokens)


def apply_exact(segment: str, replacements: Mapping[str, str]) -> str:
    """Apply ordered literal replacements to ``segment``.

    Args:
        segment: Segment text.
        replacements: ``old -> new`` pairs, applied in insertion order.

    Returns:
        The segment with every pair applied.
    """
    for old, new in replacements.items():
        if old:
            segment = segment.replace(old, new)
    return segment


def trim_segment(segment: str) -> str:
    """Strip surrounding whitespace, then trailing periods.

    Repeats until stable so that mixes such as ``"name.. "`` or
    ``"name. ."`` end up as ``"name"``.
    """
    previous = None
    while segment != previous:
        previous = segment
        segment = segment.strip().rstrip(TRIMMABLE_CHAR)
    return segment
