# SPDX-License-Identifier: MIT
"""Unit tests for single version parsing, formatting and ordering."""

import dataclasses

import pytest

from versionkit import SingleVersion


class TestParseSingleVersion:
    """Tests for SingleVersion.parse in strict mode."""

    def test_basic_version(self):
        """Test parsing MAJOR.MINOR.REVISION."""
        v = SingleVersion.parse("1.2.3")
        assert v.major == 1
        assert v.minor == 2
        assert v.revision == 3
        assert v.build_number is None
        assert v.prerelease == ()
        assert v.build == ()
        assert str(v) == "1.2.3"

    def test_major_minor_only(self):
        """Test parsing a two component version."""
        v = SingleVersion.parse("1.0")
        assert v.minor == 0
        assert v.revision is None
        assert str(v) == "1.0"

    def test_build_number(self):
        """Test parsing the fourth numeric component."""
        v = SingleVersion.parse("1.2.3.4")
        assert v.revision == 3
        assert v.build_number == 4

    def test_prerelease_and_build(self):
        """Test parsing pre-release and build tokens."""
        v = SingleVersion.parse("1.2-alpha+build1")
        assert v.major == 1
        assert v.minor == 2
        assert v.revision is None
        assert v.prerelease == ("alpha",)
        assert v.build == ("build1",)
        assert str(v) == "1.2-alpha+build1"

    def test_multiple_tokens_are_split(self):
        """Test that contiguous token runs are split on their separator."""
        v = SingleVersion.parse("1.0.1-R12A-ABCD+ASDF+RX2A")
        assert v.prerelease == ("R12A", "ABCD")
        assert v.build == ("ASDF", "RX2A")
        assert str(v) == "1.0.1-R12A-ABCD+ASDF+RX2A"

    def test_underscore_tokens(self):
        """Test that tokens may contain underscores."""
        v = SingleVersion.parse("2.0-pre_release")
        assert v.prerelease == ("pre_release",)

    @pytest.mark.parametrize("text", ["v1.2", "V1.2", "version 1.2", "Version 1.2"])
    def test_prefix_is_dropped(self, text):
        """Test that the optional v / version prefix is accepted in any case."""
        v = SingleVersion.parse(text)
        assert v == SingleVersion(1, 2)
        assert str(v) == "1.2"

    def test_leading_zeros_are_numeric(self):
        """Test that numeric components are decoded as integers."""
        v = SingleVersion.parse("01.002")
        assert v.major == 1
        assert v.minor == 2

    def test_minor_required(self):
        """Test that strict mode rejects a version without minor."""
        assert SingleVersion.parse("9") is None


class TestParseLenient:
    """Tests for SingleVersion.parse with the minor value optional."""

    def test_major_only(self):
        """Test that a lone major value parses with minor absent."""
        v = SingleVersion.parse("9", require_minor=False)
        assert v.major == 9
        assert v.minor is None
        assert str(v) == "9"

    def test_major_with_tokens(self):
        """Test a lone major value followed by tokens."""
        v = SingleVersion.parse("9-beta+7", require_minor=False)
        assert v.minor is None
        assert v.prerelease == ("beta",)
        assert v.build == ("7",)

    def test_full_version(self):
        """Test that lenient mode still accepts full versions."""
        assert SingleVersion.parse("1.2.3.4", require_minor=False) == SingleVersion(1, 2, 3, 4)


class TestInvalidSingleVersions:
    """Tests for strings that do not match the grammar."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            " 1.2",
            "1.2 ",
            "1.2.3.4.5",
            "a.b",
            "1..2",
            "1.2-",
            "1.2+",
            "1.2-alpha-",
            "1.2-al.pha",
            "1.2-ålpha",
            "-1.0",
            "1.0 + 2.0",
        ],
    )
    def test_returns_none(self, text):
        """Test that invalid text gives None instead of raising."""
        assert SingleVersion.parse(text) is None

    def test_non_string_input(self):
        """Test that non-string input gives None."""
        assert SingleVersion.parse(123) is None  # type: ignore
        assert SingleVersion.parse(None) is None  # type: ignore


class TestConstruction:
    """Tests for building versions from fields."""

    def test_build_number_sets_revision(self):
        """Test that a build number without revision sets revision to 0."""
        v = SingleVersion(1, 2, build_number=5)
        assert v.revision == 0
        assert str(v) == "1.2.0.5"

    def test_lists_become_tuples(self):
        """Test that token lists are stored as tuples."""
        v = SingleVersion(1, 0, prerelease=["a", "b"], build=["c"])
        assert v.prerelease == ("a", "b")
        assert v.build == ("c",)
        assert str(v) == "1.0-a-b+c"

    def test_negative_value(self):
        """Test that negative numbers are rejected."""
        with pytest.raises(ValueError):
            SingleVersion(1, -1)

    def test_non_int_value(self):
        """Test that non-integer numbers are rejected."""
        with pytest.raises(TypeError):
            SingleVersion("1", 0)  # type: ignore
        with pytest.raises(TypeError):
            SingleVersion(True, 0)  # type: ignore

    def test_invalid_token(self):
        """Test that tokens must be alphanumeric."""
        with pytest.raises(ValueError):
            SingleVersion(1, 0, prerelease=("a-b",))
        with pytest.raises(ValueError):
            SingleVersion(1, 0, build=("",))

    def test_string_tokens_rejected(self):
        """Test that a bare string is not accepted as a token sequence."""
        with pytest.raises(TypeError):
            SingleVersion(1, 0, prerelease="alpha")  # type: ignore

    def test_revision_requires_minor(self):
        """Test that revision cannot be set without minor."""
        with pytest.raises(ValueError):
            SingleVersion(1, None, 2)

    def test_frozen(self):
        """Test that SingleVersion is immutable."""
        v = SingleVersion(1, 0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            v.major = 2  # type: ignore

    def test_hashable(self):
        """Test that versions can be used in sets."""
        assert len({SingleVersion(1, 0), SingleVersion(1, 0), SingleVersion(1, 1)}) == 2


class TestFormatting:
    """Tests for the canonical string form."""

    def test_explicit_zero_revision_is_kept(self):
        """Test that an explicit revision of 0 is rendered."""
        assert str(SingleVersion.parse("2.0.0-rc1")) == "2.0.0-rc1"

    def test_explicit_zero_build_number_is_kept(self):
        """Test that an explicit build number of 0 is rendered."""
        assert str(SingleVersion(1, 2, 3, 0)) == "1.2.3.0"

    def test_description_matches_str(self):
        """Test that description and str agree."""
        v = SingleVersion(3, 1, 4, prerelease=("rc1",))
        assert v.description == str(v) == "3.1.4-rc1"

    def test_base_version(self):
        """Test base_version drops tokens."""
        assert SingleVersion.parse("1.2.3-alpha+b").base_version == "1.2.3"

    def test_is_prerelease(self):
        """Test is_prerelease reflects pre-release tokens."""
        assert SingleVersion.parse("1.0-beta").is_prerelease is True
        assert SingleVersion.parse("1.0+beta").is_prerelease is False


class TestOrdering:
    """Tests for component-wise ordering."""

    def test_major(self):
        """Test that major decides first."""
        assert SingleVersion(1, 9) < SingleVersion(2, 0)

    def test_minor_before_revision(self):
        """Test 1.0.9 < 1.9.0."""
        assert SingleVersion(major=1, minor=0, revision=9) < SingleVersion(
            major=1, minor=9, revision=0
        )

    def test_absent_minor_sorts_low(self):
        """Test that an absent minor sorts before minor 0."""
        assert SingleVersion(1) < SingleVersion(1, 0)
        assert SingleVersion(1, 0) > SingleVersion(1)

    def test_absent_revision_sorts_low(self):
        """Test that an absent revision sorts before revision 0."""
        assert SingleVersion(1, 0) < SingleVersion(1, 0, 0)

    def test_absent_build_number_sorts_low(self):
        """Test that an absent build number sorts before build number 0."""
        assert SingleVersion(1, 0, 0) < SingleVersion(1, 0, 0, 0)

    def test_build_number(self):
        """Test build number ordering."""
        assert SingleVersion(1, 0, 0, 2) < SingleVersion(1, 0, 0, 10)

    def test_prerelease_concatenated(self):
        """Test that pre-release tokens compare as one joined string."""
        # "az" < "b"
        assert SingleVersion(1, 0, prerelease=("a", "z")) < SingleVersion(1, 0, prerelease=("b",))
        # "rc10" < "rc2" as strings
        assert SingleVersion.parse("1.0-rc10") < SingleVersion.parse("1.0-rc2")

    def test_no_prerelease_sorts_first(self):
        """Test that an empty pre-release sorts before any pre-release."""
        assert SingleVersion.parse("1.0") < SingleVersion.parse("1.0-alpha")

    def test_build_compared_last(self):
        """Test that build tokens only decide when everything else is equal."""
        assert SingleVersion.parse("1.0-a+z") < SingleVersion.parse("1.0-b+a")
        assert SingleVersion.parse("1.0+a") < SingleVersion.parse("1.0+b")

    def test_equal_joined_tokens_still_ordered(self):
        """Test that ("ab",) and ("a", "b") are neither equal nor unordered."""
        one = SingleVersion(1, 0, prerelease=("ab",))
        two = SingleVersion(1, 0, prerelease=("a", "b"))
        assert one != two
        assert (one < two) != (two < one)

    def test_compare(self):
        """Test the three-way compare method."""
        assert SingleVersion(1, 0).compare(SingleVersion(2, 0)) == -1
        assert SingleVersion(2, 0).compare(SingleVersion(1, 0)) == 1
        assert SingleVersion(1, 0).compare(SingleVersion(1, 0)) == 0

    def test_sorting(self):
        """Test sorting a list of versions."""
        versions = [SingleVersion.parse(t, require_minor=False) for t in ["2", "1.0", "1", "1.0.1"]]
        assert [str(v) for v in sorted(versions)] == ["1", "1.0", "1.0.1", "2"]

    def test_compare_with_other_type(self):
        """Test that ordering against unrelated types is unsupported."""
        with pytest.raises(TypeError):
            SingleVersion(1, 0) < "1.0"  # noqa: B015


class TestLooseEquality:
    """Tests for loosely_equals, where absent values count as 0."""

    def test_absent_minor_matches_zero(self):
        """Test 9 ~= 9.0.0."""
        assert SingleVersion(9).loosely_equals(SingleVersion(9, 0, 0))

    def test_strict_equality_differs(self):
        """Test that strict equality does not treat absence as 0."""
        assert SingleVersion(9) != SingleVersion(9, 0)

    def test_different_numbers(self):
        """Test that different values are not loosely equal."""
        assert not SingleVersion(9).loosely_equals(SingleVersion(9, 1))

    def test_tokens_must_match(self):
        """Test that tokens are compared exactly."""
        assert not SingleVersion(9, prerelease=("a",)).loosely_equals(SingleVersion(9, 0))
