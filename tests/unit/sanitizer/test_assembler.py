"""Unit tests for path reassembly and qualification."""

import os
from pathlib import Path

import pytest
from safepath.sanitizer.assembler import assemble, qualify
from safepath.validation import OSType


class TestAssemble:
    """Tests for assemble function."""

    def test_joins_with_root(self) -> None:
        """Root is prepended and segments joined by the separator."""
        result = assemble("C:/", ["a", "b"], 0, fixed_separator="/", remove_redundant=True)

        assert result == "C:/a/b"

    def test_blank_segments_emit_nothing(self) -> None:
        """Emptied segments add no separator."""
        result = assemble("", ["a", "", "  ", "b"], 0, fixed_separator="/", remove_redundant=True)

        assert result == "a/b"

    def test_no_trailing_separator(self) -> None:
        """A blank last segment does not leave a trailing separator."""
        result = assemble("", ["a", ""], 0, fixed_separator="/", remove_redundant=True)

        assert result == "a"

    def test_respects_start_index(self) -> None:
        """Segments before start_index are not emitted."""
        result = assemble("", ["C:", "a", "b"], 1, fixed_separator="/", remove_redundant=True)

        assert result == "a/b"

    def test_placeholder_never_duplicates_separator(self) -> None:
        """A placeholder between segments yields exactly one separator."""
        result = assemble("", ["a", "/", "b"], 0, fixed_separator="/", remove_redundant=False)

        assert result == "a/b"

    def test_leading_and_trailing_placeholders_kept(self) -> None:
        """Edge placeholders keep the path rooted and trailing."""
        result = assemble("", ["/", "a", "/"], 0, fixed_separator="/", remove_redundant=False)

        assert result == "/a/"


class TestQualify:
    """Tests for qualify function."""

    def test_valid_path_made_absolute(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A legal relative path is resolved against the working directory."""
        monkeypatch.chdir(tmp_path)

        assert qualify("a/b.txt") == os.path.join(os.getcwd(), "a", "b.txt")

    def test_invalid_path_unchanged(self) -> None:
        """A path failing validation is returned as-is."""
        assert qualify("a/b?", OSType.NON_STANDARD) == "a/b?"

    def test_empty_path_unchanged(self) -> None:
        """Empty input stays empty."""
        assert qualify("") == ""
