"""
Tests for xdeps.versioning.comparable module.

Tests dotted version parsing and ordering including:
- Numeric and literal components
- Trailing zero handling (display and equality)
- Total ordering and hashing
- Parse errors
- Packed integer conversion
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
import itertools

import pytest

from xdeps.exceptions import (
    InvalidVersionFormat,
    NonNumericComponent,
    VersionError,
    XDepsError,
)
from xdeps.versioning import ComparableVersion, compare_versions


def v(text: str) -> ComparableVersion:
    return ComparableVersion.parse(text)


class TestParsing:
    """Tests for version parsing."""

    def test_numeric_components(self):
        """Test that numeric segments become ints (leading zeros dropped)."""
        assert v("1.02.23").components == (1, 2, 23)

    def test_literal_components_are_lowercased(self):
        """Test that literal segments are kept lowercase."""
        assert v("2.0.RC1").components == (2, 0, "rc1")
        assert v("1.Beta-2").components == (1, "beta-2")

    def test_surrounding_whitespace_is_stripped(self):
        """Test that the stored text has no surrounding whitespace."""
        assert v("  1.2.0 ").value == "1.2.0"

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "1..2", "1.2.", ".1", "1.-2", "1.2!", "1.2 3"],
    )
    def test_invalid_versions_raise(self, text):
        """Test that malformed versions raise InvalidVersionFormat."""
        with pytest.raises(InvalidVersionFormat):
            v(text)

    def test_error_carries_text(self):
        """Test that the offending text is attached to the error."""
        with pytest.raises(InvalidVersionFormat) as exc_info:
            v("1..2")
        assert exc_info.value.text == "1..2"
        assert "position 1" in str(exc_info.value)

    def test_non_string_raises(self):
        """Test that a non-string value is rejected."""
        with pytest.raises(InvalidVersionFormat):
            ComparableVersion(12)  # type: ignore[arg-type]

    def test_error_hierarchy(self):
        """Test that version errors can be caught as XDepsError."""
        assert issubclass(InvalidVersionFormat, VersionError)
        assert issubclass(InvalidVersionFormat, XDepsError)

    def test_versions_are_immutable(self):
        """Test that a parsed version cannot be modified."""
        version = v("1.2")
        with pytest.raises(FrozenInstanceError):
            version.value = "2.0"  # type: ignore[misc]


class TestOrdering:
    """Tests for version comparison."""

    def test_numeric_comparison(self):
        """Test that numbers compare numerically, not lexicographically."""
        assert v("1.10") > v("1.9")
        assert v("2.0") > v("1.99.99")
        assert v("1.2.23") > v("1.2.9")

    def test_trailing_zeros_are_insignificant(self):
        """Test that 1.2, 1.2.0 and 1.2.0.0 are equal."""
        assert v("1.2") == v("1.2.0")
        assert v("1.2.0") == v("1.2.0.0")
        assert compare_versions("1.2", "1.2.0") == 0

    def test_literal_after_release_is_greater(self):
        """Test that an extra literal component sorts above the release."""
        assert v("1.2") < v("1.2.a")
        assert v("1.2.0") < v("1.2.a")

    def test_numeric_outranks_literal(self):
        """Test that a numeric component is greater than a literal one."""
        assert v("1.a") < v("1.0.1")
        assert compare_versions("1.a", "1.0.1") == -1

    def test_literals_compare_case_insensitively(self):
        """Test that literal components ignore case."""
        assert v("1.2.RC1") == v("1.2.rc1")
        assert v("1.2.alpha") < v("1.2.beta")

    def test_compare_returns_sign(self):
        """Test compare() return values and acceptance of text."""
        assert v("1.2").compare(v("1.3")) == -1
        assert v("1.3").compare("1.2") == 1
        assert v("1.2").compare("1.2.0") == 0

    def test_sorting_is_total(self):
        """Test that a mixed list sorts consistently."""
        versions = [v(t) for t in ["1.10", "1.2.a", "1.2", "0.9", "1.a", "1.2.0.1"]]
        ordered = [str(x) for x in sorted(versions)]
        assert ordered == ["0.9", "1.a", "1.2", "1.2.a", "1.2.0.1", "1.10"]

    def test_transitivity_with_trailing_zero(self):
        """Test a < b and b == c implies a < c across trailing zeros."""
        a, b, c = v("1.1.9"), v("1.2"), v("1.2.0")
        assert a < b and b == c and a < c
        assert c < v("1.2.a")

    def test_comparison_with_other_types(self):
        """Test that versions are not equal to plain strings."""
        assert v("1.2") != "1.2"
        with pytest.raises(TypeError):
            _ = v("1.2") < "1.3"  # type: ignore[operator]


class TestHashing:
    """Tests for hashing consistent with equality."""

    def test_equal_versions_share_hash(self):
        """Test that equal versions collapse in a set."""
        assert hash(v("1.2")) == hash(v("1.2.0"))
        assert len({v("1.2"), v("1.2.0"), v("1.2.0.0")}) == 1

    def test_distinct_versions_in_dict(self):
        """Test versions as dict keys."""
        table = {v("1.2"): "a", v("1.3"): "b"}
        assert table[v("1.2.0")] == "a"


class TestDisplay:
    """Tests for display formatting."""

    def test_display_strips_trailing_zeros(self):
        """Test canonical display form."""
        assert v("1.0.0.0").to_display_string() == "1"
        assert v("1.2.23.0").to_display_string() == "1.2.23"
        assert str(v("2.0.rc1")) == "2.0.rc1"

    def test_display_keeps_one_component(self):
        """Test that an all-zero version still displays as 0."""
        assert v("0").to_display_string() == "0"
        assert v("0.0.0").to_display_string() == "0"

    def test_to_strings_pads_and_truncates(self):
        """Test to_strings(n) with fewer and more components."""
        assert v("1.2").to_strings(4) == ["1", "2", "0", "0"]
        assert v("1.2.3.4").to_strings(2) == ["1", "2"]
        assert v("1.2.23.0").to_strings() == ["1", "2", "23"]


class TestNumericAccessors:
    """Tests for major/minor/build and packed integers."""

    def test_accessors(self):
        """Test that missing components read as zero."""
        version = v("3")
        assert (version.major, version.minor, version.build) == (3, 0, 0)
        assert v("1.2.23.7").build == 23

    def test_literal_accessor_raises(self):
        """Test that reading a literal as a number raises NonNumericComponent."""
        with pytest.raises(NonNumericComponent) as exc_info:
            _ = v("1.2.rc").build

        assert exc_info.value.index == 2
        assert exc_info.value.text == "1.2.rc"
        assert isinstance(exc_info.value, VersionError)
        assert not isinstance(exc_info.value, InvalidVersionFormat)

    def test_to_int_with_literal_raises(self):
        """Test that packing a version with a literal component fails."""
        with pytest.raises(NonNumericComponent):
            v("1.rc.3").to_int()

    def test_from_parts(self):
        """Test building a version from numbers."""
        assert ComparableVersion.from_parts(1, 2, 23) == v("1.2.23")

    def test_to_int_layout(self):
        """Test the packed bit layout."""
        assert v("1.2.3").to_int() == (1 << 44) | (2 << 24) | 3

    def test_int_round_trip(self):
        """Test that from_int() undoes to_int()."""
        version = v("12.345.67890")
        assert ComparableVersion.from_int(version.to_int()) == version


class TestOrderingProperties:
    """Consistency checks over every pair and triple of a mixed sample."""

    SAMPLE = [
        "0.9",
        "1",
        "1.0",
        "1.0.0",
        "1.0.1",
        "1.a",
        "1.2",
        "1.2.0",
        "1.2.a",
        "1.2.b",
        "1.9",
        "1.10",
        "2.0.rc1",
    ]

    @pytest.fixture
    def versions(self) -> list[ComparableVersion]:
        return [v(text) for text in self.SAMPLE]

    def test_compare_is_antisymmetric(self, versions):
        """Test that swapping the operands flips the sign."""
        for a, b in itertools.product(versions, repeat=2):
            assert a.compare(b) == -b.compare(a)

    def test_compare_agrees_with_operators(self, versions):
        """Test that compare(), ==, < and > describe the same relation."""
        for a, b in itertools.product(versions, repeat=2):
            result = a.compare(b)
            assert (result == 0) == (a == b)
            assert (result < 0) == (a < b)
            assert (result > 0) == (a > b)

    def test_equal_versions_hash_equal(self, versions):
        """Test that equal versions have equal hashes."""
        for a, b in itertools.product(versions, repeat=2):
            if a == b:
                assert hash(a) == hash(b)

    def test_less_equal_is_transitive(self, versions):
        """Test transitivity of <= over every triple."""
        for a, b, c in itertools.product(versions, repeat=3):
            if a <= b and b <= c:
                assert a <= c

    def test_string_compare_matches_parsed(self):
        """Test that compare_versions() matches comparing parsed values."""
        for a, b in itertools.product(self.SAMPLE, repeat=2):
            assert compare_versions(a, b) == v(a).compare(v(b))
