"""Unit tests for the PathSanitizer engine.

Covers the full pipeline, replacement management, pattern staleness,
cloning and the documented edge cases.
"""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError
from safepath.sanitizer import (
    PathSanitizer,
    ReplacementMode,
    RootMode,
    SanitizeResult,
    universal_sanitizer,
)


class TestSanitizeContract:
    """Tests for the sanitize() return contract."""

    def test_none_fails(self) -> None:
        """None input fails with an empty path."""
        assert PathSanitizer().sanitize(None) == SanitizeResult(success=False, path="")

    def test_empty_fails(self) -> None:
        """Empty input fails with an empty path."""
        result = PathSanitizer().sanitize("")

        assert not result
        assert result.path == ""

    def test_only_separators_succeeds_empty(self) -> None:
        """A path of only separators is a valid, empty result."""
        result = PathSanitizer().sanitize("///")

        assert result.success is True
        assert result.path == ""

    def test_result_unpacks(self) -> None:
        """Results unpack into (success, path)."""
        ok, path = PathSanitizer().sanitize("a/b")

        assert ok is True
        assert path == "a/b"

    def test_sanitize_or_empty(self) -> None:
        """sanitize_or_empty returns only the string."""
        sanitizer = PathSanitizer()

        assert sanitizer.sanitize_or_empty("a//b") == "a/b"
        assert sanitizer.sanitize_or_empty(None) == ""


class TestSeparators:
    """Tests for separator unification and redundancy."""

    def test_alternate_separators_unified(self) -> None:
        """No alternate separator survives sanitization."""
        sanitizer = PathSanitizer(possible_separators=["\\"])

        result = sanitizer.sanitize("a\\b\\c")

        assert result.path == "a/b/c"
        assert "\\" not in result.path

    def test_redundant_removed(self) -> None:
        """'a//b' collapses to 'a/b'."""
        assert PathSanitizer().sanitize("a//b").path == "a/b"

    def test_redundant_kept_without_duplication(self) -> None:
        """With placeholders kept, 'a//b' still has exactly one separator."""
        sanitizer = PathSanitizer(remove_redundant_separators=False)

        assert sanitizer.sanitize("a//b").path == "a/b"

    def test_kept_placeholders_preserve_edges(self) -> None:
        """Leading and trailing separators survive when placeholders are kept."""
        sanitizer = PathSanitizer(remove_redundant_separators=False)

        assert sanitizer.sanitize("/a/b/").path == "/a/b/"

    def test_empty_fixed_separator_deletes_separators(self) -> None:
        """An empty fixed separator joins everything into one name."""
        sanitizer = PathSanitizer(fixed_separator=None, possible_separators=["/", "\\"])

        assert sanitizer.fixed_separator == ""
        assert sanitizer.sanitize("a/b\\c").path == "abc"


class TestRootModes:
    """Tests for the three root policies end to end."""

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            (RootMode.ALLOW_ALL_ROOTS, "C:/a/b"),
            (RootMode.SEPARATOR_ONLY, "a/b"),
            (RootMode.REMOVE_ALL_ROOTS, "a/b"),
        ],
    )
    def test_lettered_root(self, mode: RootMode, expected: str) -> None:
        """'C:/a/b' under each root policy."""
        assert PathSanitizer(root_mode=mode).sanitize("C:/a/b").path == expected

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            (RootMode.ALLOW_ALL_ROOTS, "/a/b"),
            (RootMode.SEPARATOR_ONLY, "/a/b"),
            (RootMode.REMOVE_ALL_ROOTS, "a/b"),
        ],
    )
    def test_separator_root(self, mode: RootMode, expected: str) -> None:
        """'/a/b' under each root policy."""
        assert PathSanitizer(root_mode=mode).sanitize("/a/b").path == expected

    def test_force_root_separator(self) -> None:
        """A relative path gains a separator root when forced."""
        sanitizer = PathSanitizer(force_root_separator=True)

        assert sanitizer.sanitize("a/b").path == "/a/b"

    def test_drive_content_not_quick_sanitized(self) -> None:
        """The colon of a kept drive root survives a quick pass removing colons."""
        sanitizer = PathSanitizer(quick_replacements=[":"])

        assert sanitizer.sanitize("C:/a:b").path == "C:/ab"


class TestReplacementModes:
    """Tests for quick/exact pass selection and ordering."""

    def test_quick_only(self) -> None:
        """Quick token 'x' on 'ax b' yields 'a b'."""
        sanitizer = PathSanitizer(quick_replacements=["x"])

        assert sanitizer.sanitize("ax b").path == "a b"

    def test_exact_only(self) -> None:
        """Exact pairs apply without the quick pass."""
        sanitizer = PathSanitizer(
            replacement_mode=ReplacementMode.EXACT_ONLY,
            quick_replacements=["a"],
            exact_replacements={" ": "_"},
        )

        assert sanitizer.sanitize("a b").path == "a_b"

    def test_exact_then_quick(self) -> None:
        """'ab' with exact ab->cd then quick 'c' yields 'd'."""
        sanitizer = PathSanitizer(
            replacement_mode=ReplacementMode.EXACT_THEN_QUICK,
            quick_replacements=["c"],
            exact_replacements={"ab": "cd"},
        )

        assert sanitizer.sanitize("ab").path == "d"

    def test_quick_then_exact(self) -> None:
        """'ab' with quick 'c' then exact ab->cd yields 'cd'."""
        sanitizer = PathSanitizer(
            replacement_mode=ReplacementMode.QUICK_THEN_EXACT,
            quick_replacements=["c"],
            exact_replacements={"ab": "cd"},
        )

        assert sanitizer.sanitize("ab").path == "cd"

    def test_trailing_trim(self) -> None:
        """Trailing periods and spaces are always trimmed."""
        assert PathSanitizer().sanitize("dir/name.. ").path == "dir/name"

    def test_segment_emptied_by_replacement_is_dropped(self) -> None:
        """A segment sanitized to nothing leaves no separator behind."""
        sanitizer = PathSanitizer(quick_replacements=[r"\?"])

        assert sanitizer.sanitize("a/???/b").path == "a/b"


class TestReplacementManagement:
    """Tests for adding, removing and rebuilding replacements."""

    def test_add_ignores_none_and_duplicates(self) -> None:
        """None and duplicate tokens are dropped."""
        sanitizer = PathSanitizer()

        sanitizer.add_quick_replacements("x", None, "x", "y")

        assert sanitizer.quick_replacements == ["x", "y"]

    def test_stale_pattern_used_until_rebuild(self) -> None:
        """Without auto rebuild, new tokens apply only after rebuilding."""
        sanitizer = PathSanitizer()
        sanitizer.add_quick_replacements("x")

        assert sanitizer.is_pattern_stale is True
        assert sanitizer.sanitize("axb").path == "axb"

        sanitizer.rebuild_quick_replacement_pattern()

        assert sanitizer.is_pattern_stale is False
        assert sanitizer.sanitize("axb").path == "ab"

    def test_auto_rebuild(self) -> None:
        """With auto rebuild, changes apply immediately."""
        sanitizer = PathSanitizer(auto_rebuild_quick_replacements=True)

        sanitizer.add_quick_replacements("x")
        assert sanitizer.sanitize("axb").path == "ab"

        sanitizer.remove_quick_replacements("x")
        assert sanitizer.sanitize("axb").path == "axb"
        assert sanitizer.quick_replacement_pattern == ""

    def test_construction_compiles_pattern(self) -> None:
        """Tokens passed to the constructor are compiled right away."""
        sanitizer = PathSanitizer(quick_replacements=["a", "b"])

        assert sanitizer.quick_replacement_pattern == "a|b"
        assert sanitizer.is_pattern_stale is False

    def test_exact_replacement_management(self) -> None:
        """Exact pairs can be added, updated and removed."""
        sanitizer = PathSanitizer(replacement_mode=ReplacementMode.EXACT_ONLY)

        sanitizer.add_exact_replacement(" ", "_")
        sanitizer.add_exact_replacement("-", "+")
        sanitizer.add_exact_replacement(" ", ".")

        assert list(sanitizer.exact_replacements.items()) == [(" ", "."), ("-", "+")]
        assert sanitizer.remove_exact_replacement("-") is True
        assert sanitizer.remove_exact_replacement("-") is False

    def test_add_possible_separators(self) -> None:
        """Registered separators are unified."""
        sanitizer = PathSanitizer()
        sanitizer.add_possible_separators("\\", "\\")

        assert sanitizer.possible_separators == ["\\"]
        assert sanitizer.sanitize("a\\b").path == "a/b"


class TestConfiguration:
    """Tests for model validation and cloning."""

    def test_unknown_field_rejected(self) -> None:
        """Extra fields are forbidden."""
        with pytest.raises(ValidationError):
            PathSanitizer(unknown=True)  # type: ignore[call-arg]

    def test_invalid_enum_rejected(self) -> None:
        """Invalid policy values fail at construction."""
        with pytest.raises(ValidationError):
            PathSanitizer(root_mode="sometimes")  # type: ignore[arg-type]

    def test_enum_values_accepted(self) -> None:
        """Policies can be given by value."""
        sanitizer = PathSanitizer(root_mode="separator_only")  # type: ignore[arg-type]

        assert sanitizer.root_mode is RootMode.SEPARATOR_ONLY

    def test_clone_is_independent(self) -> None:
        """Changing a clone leaves the original untouched."""
        original = PathSanitizer(quick_replacements=["x"], exact_replacements={"a": "b"})
        clone = original.clone()

        clone.add_quick_replacements("y")
        clone.rebuild_quick_replacement_pattern()
        clone.add_exact_replacement("c", "d")
        clone.add_possible_separators("\\")

        assert original.quick_replacements == ["x"]
        assert original.quick_replacement_pattern == "x"
        assert original.exact_replacements == {"a": "b"}
        assert original.possible_separators == []

    def test_clone_keeps_compiled_pattern(self) -> None:
        """A clone sanitizes like its template."""
        template = universal_sanitizer()

        assert template.clone().sanitize("a?b").path == template.sanitize("a?b").path == "ab"


class TestQualification:
    """Tests for fully_qualify."""

    def test_valid_result_qualified(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A legal sanitized path becomes absolute."""
        monkeypatch.chdir(tmp_path)
        sanitizer = PathSanitizer(fully_qualify=True)

        assert sanitizer.sanitize("a//b.txt").path == os.path.join(os.getcwd(), "a", "b.txt")

    def test_invalid_result_left_relative(self) -> None:
        """Qualification is skipped silently when validation fails."""
        sanitizer = PathSanitizer(fully_qualify=True)

        assert sanitizer.sanitize("a/b?").path == "a/b?"


class TestIdempotence:
    """Sanitizing a sanitized path changes nothing."""

    @pytest.mark.parametrize(
        "raw",
        [
            "C:\\Users\\me\\notes?.txt",
            "a//b/c.. ",
            " spaced / name. ",
            "/var/log/app\x00.log",
            "dir/CON/file|name",
        ],
    )
    def test_universal_is_idempotent(self, raw: str) -> None:
        """The universal preset is idempotent."""
        sanitizer = universal_sanitizer()
        once = sanitizer.sanitize(raw).path

        assert sanitizer.sanitize(once).path == once

    @pytest.mark.parametrize("root_mode", list(RootMode))
    @pytest.mark.parametrize("replacement_mode", list(ReplacementMode))
    @pytest.mark.parametrize("remove_redundant", [True, False])
    @pytest.mark.parametrize(
        "raw",
        [
            "dir\\sub?/file#x.txt",
            "/var//log/app.log. ",
            "C:\\Users\\me",
            "C:data/x?.log",
            "a//b/",
            "//srv/share",
            " spaced / name. ",
        ],
    )
    def test_every_mode_combination_is_idempotent(
        self,
        raw: str,
        remove_redundant: bool,
        replacement_mode: ReplacementMode,
        root_mode: RootMode,
    ) -> None:
        """Every root and replacement policy leaves its own output unchanged."""
        sanitizer = PathSanitizer(
            possible_separators=["\\"],
            root_mode=root_mode,
            replacement_mode=replacement_mode,
            remove_redundant_separators=remove_redundant,
            quick_replacements=[r"\?", "x"],
            exact_replacements={"#": "-"},
        )
        once = sanitizer.sanitize(raw).path

        assert sanitizer.sanitize(once).path == once

    @pytest.mark.parametrize(
        ("root_mode", "raw"),
        [
            (RootMode.ALLOW_ALL_ROOTS, "/x"),
            (RootMode.SEPARATOR_ONLY, "/x"),
            (RootMode.SEPARATOR_ONLY, "C:/"),
        ],
    )
    def test_bare_separator_root_collapses_on_second_pass(
        self, root_mode: RootMode, raw: str
    ) -> None:
        """A result that is only a separator root sanitizes to "" next time.

        A path made only of separators is empty once redundant separators
        are removed, so the bare root does not survive a second pass.
        """
        sanitizer = PathSanitizer(root_mode=root_mode, quick_replacements=["x"])

        once = sanitizer.sanitize(raw)
        twice = sanitizer.sanitize(once.path)

        assert once.path == "/"
        assert twice.success
        assert twice.path == ""
