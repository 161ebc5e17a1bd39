"""Unit tests for path segmentation."""

from safepath.sanitizer.segmenter import is_placeholder, split_segments, unify_separators


class TestUnifySeparators:
    """Tests for unify_separators function."""

    def test_rewrites_alternate_separators(self) -> None:
        """Every possible separator becomes the fixed separator."""
        assert unify_separators("C:\\a\\b/c", "/", ["\\"]) == "C:/a/b/c"

    def test_multiple_alternates(self) -> None:
        """Several alternate spellings are all unified."""
        assert unify_separators("a\\b|c", "/", ["\\", "|"]) == "a/b/c"

    def test_empty_fixed_separator_deletes(self) -> None:
        """An empty fixed separator removes the alternates."""
        assert unify_separators("a/b\\c", "", ["/", "\\"]) == "abc"

    def test_ignores_empty_and_identical_separators(self) -> None:
        """Empty or identical alternates leave the path untouched."""
        assert unify_separators("a/b", "/", ["", "/"]) == "a/b"


class TestSplitSegments:
    """Tests for split_segments function."""

    def test_remove_redundant_drops_empty_segments(self) -> None:
        """Consecutive, leading and trailing separators collapse away."""
        assert split_segments("/a//b/", "/", remove_redundant=True) == ["a", "b"]

    def test_all_separators_yield_no_segments(self) -> None:
        """A path of only separators yields zero segments under removal."""
        assert split_segments("///", "/", remove_redundant=True) == []

    def test_keep_redundant_uses_placeholders(self) -> None:
        """Empty segments become separator placeholders."""
        assert split_segments("/a//b", "/", remove_redundant=False) == ["/", "a", "/", "b"]

    def test_no_separator_is_single_segment(self) -> None:
        """A plain filename is one segment."""
        assert split_segments("file.txt", "/", remove_redundant=True) == ["file.txt"]

    def test_empty_fixed_separator_is_single_segment(self) -> None:
        """An empty separator never splits."""
        assert split_segments("abc", "", remove_redundant=True) == ["abc"]
        assert split_segments("", "", remove_redundant=True) == []


class TestIsPlaceholder:
    """Tests for is_placeholder function."""

    def test_placeholder_only_when_keeping_redundant(self) -> None:
        """The separator counts as placeholder only if redundancy is kept."""
        assert is_placeholder("/", "/", remove_redundant=False) is True
        assert is_placeholder("/", "/", remove_redundant=True) is False

    def test_content_is_not_placeholder(self) -> None:
        """Regular segments are never placeholders."""
        assert is_placeholder("a", "/", remove_redundant=False) is False

    def test_empty_separator_has_no_placeholder(self) -> None:
        """With an empty separator nothing is a placeholder."""
        assert is_placeholder("", "", remove_redundant=False) is False
