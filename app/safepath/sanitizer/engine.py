"""Path sanitizer engine.

``PathSanitizer`` holds one sanitization policy and runs the pipeline:

1. Unify every possible separator into the fixed separator and split.
2. Classify the root according to ``root_mode``.
3. Run the content passes selected by ``replacement_mode`` on every
   sanitizable segment, then trim whitespace and trailing periods.
4. Reassemble and optionally fully qualify the result.

A sanitizer is a configuration value, not a singleton. Keep templates
around and ``clone()`` them; ``sanitize`` never mutates the instance, so
one instance may serve concurrent callers as long as nobody changes its
replacements at the same time.
"""

import logging
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from safepath.sanitizer.assembler import assemble, qualify
from safepath.sanitizer.models import ReplacementMode, RootMode, SanitizeResult
from safepath.sanitizer.replacements import QuickReplacementMatcher, apply_exact, trim_segment
from safepath.sanitizer.roots import classify_root
from safepath.sanitizer.segmenter import is_placeholder, split_segments, unify_separators
from safepath.validation import OSType

logger = logging.getLogger(__name__)


def _unique(values: list[str | None]) -> list[str]:
    return list(dict.fromkeys(value for value in values if value is not None))


class PathSanitizer(BaseModel):
    """Configurable sanitizer for file paths, directories and filenames.

    Attributes:
        fixed_separator: Separator every possible separator is normalised to.
            Empty means separators are deleted.
        possible_separators: Alternate separator spellings (e.g. "\\").
        root_mode: Root handling policy.
        replacement_mode: Which content passes run, and in what order.
        remove_redundant_separators: Collapse empty segments instead of
            keeping them as separator placeholders.
        force_root_separator: Add a separator root when none was found.
        fully_qualify: Resolve legal results against the working directory.
        qualify_os: Grammar used to decide whether a result is legal enough
            to qualify.
        auto_rebuild_quick_replacements: Recompile the quick pattern on every
            add or remove.
        quick_replacements: Regex fragments whose matches are removed.
        exact_replacements: Literal ``old -> new`` pairs, in insertion order.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    fixed_separator: Annotated[
        str,
        Field(description="Separator all recognised separators are normalised to"),
    ] = "/"
    possible_separators: Annotated[
        list[str],
        Field(description="Alternate separator spellings"),
    ] = []
    root_mode: RootMode = RootMode.ALLOW_ALL_ROOTS
    replacement_mode: ReplacementMode = ReplacementMode.QUICK_ONLY
    remove_redundant_separators: bool = True
    force_root_separator: bool = False
    fully_qualify: bool = False
    qualify_os: OSType = OSType.NON_STANDARD
    auto_rebuild_quick_replacements: bool = False
    quick_replacements: Annotated[
        list[str],
        Field(description="Regex fragments stripped by the quick pass"),
    ] = []
    exact_replacements: Annotated[
        dict[str, str],
        Field(description="Literal replacements applied by the exact pass"),
    ] = {}

    _matcher: QuickReplacementMatcher = PrivateAttr(default_factory=QuickReplacementMatcher)

    @field_validator("fixed_separator", mode="before")
    @classmethod
    def _coerce_separator(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("possible_separators", "quick_replacements", mode="before")
    @classmethod
    def _deduplicate(cls, v: object) -> object:
        if isinstance(v, (list, tuple)):
            return _unique(list(v))
        return v

    def model_post_init(self, __context: object) -> None:
        """Compile the quick replacements supplied at construction."""
        self._matcher = QuickReplacementMatcher.build(self.quick_replacements)

    # -------------------------------------------------------------------------
    # Sanitization
    # -------------------------------------------------------------------------

    def sanitize(self, path: str | None) -> SanitizeResult:
        """Sanitize a file path, directory or filename.

        Path length is not sanitized.

        Args:
            path: Raw path string.

        Returns:
            SanitizeResult. ``success`` is False only for a None or empty
            path; every other input yields some path, possibly empty.
        """
        if not path:
            return SanitizeResult(success=False, path="")

        if self.replacement_mode.runs_quick and self.is_pattern_stale:
            logger.debug(
                "Quick replacement pattern is stale; call rebuild_quick_replacement_pattern()"
            )

        separator = self.fixed_separator
        remove_redundant = self.remove_redundant_separators

        unified = unify_separators(path, separator, self.possible_separators)
        segments = split_segments(unified, separator, remove_redundant=remove_redundant)

        # Only separators remained and redundancy removal dropped them all.
        if not segments:
            return SanitizeResult(success=True, path="")

        root_info = classify_root(
            segments,
            unified,
            mode=self.root_mode,
            fixed_separator=separator,
            remove_redundant=remove_redundant,
            force_root_separator=self.force_root_separator,
        )

        self._sanitize_segments(segments, root_info.start_index)

        sanitized = assemble(
            root_info.root if root_info.has_root else "",
            segments,
            root_info.start_index,
            fixed_separator=separator,
            remove_redundant=remove_redundant,
        )

        if self.fully_qualify:
            sanitized = qualify(sanitized, self.qualify_os)

        return SanitizeResult(success=True, path=sanitized)

    def sanitize_or_empty(self, path: str | None) -> str:
        """Sanitize ``path`` and return only the resulting string."""
        return self.sanitize(path).path

    def _sanitize_segments(self, segments: list[str], start_index: int) -> None:
        for index in range(start_index, len(segments)):
            segment = segments[index]
            if is_placeholder(
                segment, self.fixed_separator, remove_redundant=self.remove_redundant_separators
            ):
                continue
            segments[index] = trim_segment(self._replace(segment))

    def _replace(self, segment: str) -> str:
        match self.replacement_mode:
            case ReplacementMode.EXACT_ONLY:
                return apply_exact(segment, self.exact_replacements)
            case ReplacementMode.QUICK_THEN_EXACT:
                return apply_exact(self._matcher.apply(segment), self.exact_replacements)
            case ReplacementMode.EXACT_THEN_QUICK:
                return self._matcher.apply(apply_exact(segment, self.exact_replacements))
            case _:
                return self._matcher.apply(segment)

    # -------------------------------------------------------------------------
    # Replacement management
    # -------------------------------------------------------------------------

    @property
    def quick_replacement_pattern(self) -> str:
        """Source of the compiled quick alternation ("" when empty)."""
        return self._matcher.source

    @property
    def is_pattern_stale(self) -> bool:
        """Check if quick replacements changed since the last rebuild."""
        return self._matcher.tokens != tuple(self.quick_replacements)

    def add_quick_replacements(self, *tokens: str | None) -> None:
        """Add regex fragments to the quick replacements.

        None and duplicate tokens are ignored. Tokens are regex fragments, so a
        literal "/" or "?" must be escaped (r"\\/", r"\\?").

        Args:
            *tokens: Fragments to add.
        """
        if not tokens:
            return

        self.quick_replacements = [*self.quick_replacements, *tokens]

        if self.auto_rebuild_quick_replacements:
            self.rebuild_quick_replacement_pattern()

    def remove_quick_replacements(self, *tokens: str | None) -> None:
        """Remove regex fragments from the quick replacements.

        Args:
            *tokens: Fragments to remove. Unknown tokens are ignored.
        """
        if not tokens:
            return

        removed = set(tokens)
        self.quick_replacements = [t for t in self.quick_replacements if t not in removed]

        if self.auto_rebuild_quick_replacements:
            self.rebuild_quick_replacement_pattern()

    def rebuild_quick_replacement_pattern(self) -> QuickReplacementMatcher:
        """Recompile the quick pattern from the current quick replacements.

        Must be called after changing replacements when
        ``auto_rebuild_quick_replacements`` is False.

        Returns:
            The freshly compiled matcher.

        Raises:
            re.error: If a token makes the alternation invalid.
        """
        self._matcher = QuickReplacementMatcher.build(self.quick_replacements)
        return self._matcher

    def add_exact_replacement(self, old: str, new: str) -> None:
        """Add or update a literal replacement.

        An existing key keeps its position in the replacement order.
        """
        self.exact_replacements = {**self.exact_replacements, old: new}

    def remove_exact_replacement(self, old: str) -> bool:
        """Remove a literal replacement.

        Returns:
            True if the replacement existed.
        """
        if old not in self.exact_replacements:
            return False
        self.exact_replacements = {k: v for k, v in self.exact_replacements.items() if k != old}
        return True

    def add_possible_separators(self, *separators: str) -> None:
        """Register alternate separator spellings."""
        self.possible_separators = [*self.possible_separators, *separators]

    def clone(self) -> "PathSanitizer":
        """Return an independent deep copy, compiled pattern included."""
        return self.model_copy(deep=True)
