"""Unit tests for version comparison."""

import pytest

from sdk_guard.core.version import VersionOrder, compare, compare_versions, extract_tag, is_at_least


class TestCompareVersions:
    """Tests for compare_versions."""

    @pytest.mark.parametrize("value", ["1.2.0", "8.5.0", "", "https://host/repo.git#5.4.1", "abc"])
    def test_equal_to_itself(self, value):
        """Test that every value compares equal to itself."""
        assert compare_versions(value, value) == 0

    def test_numeric_not_lexicographic(self):
        """Test that components compare as numbers."""
        assert compare_versions("1.2.0", "1.10.0") == -1
        assert compare_versions("1.10.0", "1.2.0") == 1

    @pytest.mark.parametrize(
        "a,b",
        [
            ("8.4.0", "8.5.0"),
            ("1.2", "1.2.1"),
            ("12.9.0", "12.10.1"),
            ("repo.git#5.4.0", "repo.git#5.4.1"),
        ],
    )
    def test_antisymmetric(self, a, b):
        """Test that swapping arguments inverts the result."""
        assert compare_versions(a, b) == -compare_versions(b, a)
        assert compare_versions(a, b) == -1

    def test_zero_padding(self):
        """Test that missing components count as zero."""
        assert compare_versions("1.2", "1.2.0") == 0

    def test_empty_sorts_first(self):
        """Test that an empty value is older than any version."""
        assert compare_versions("", "1.0.0") == -1
        assert compare_versions("1.0.0", None) == 1

    def test_tags_compared(self):
        """Test that tagged install URLs compare their tags only."""
        old = "https://github.com/adjust/unity_sdk.git?path=Assets/Adjust#5.4.0"
        new = "https://github.com/adjust/unity_sdk.git?path=Assets/Adjust#5.4.1"
        assert compare_versions(old, new) == -1
        assert compare_versions("https://a.example/x.git#2.0.0", "https://b.example/y.git#2.0.0") == 0

    def test_non_numeric_components(self):
        """Test that non-numeric components count as zero."""
        assert compare_versions("1.0.0-preview", "1.0.0") == 0
        assert compare_versions("1.x", "1.0") == 0


class TestHelpers:
    """Tests for version helpers."""

    def test_extract_tag(self):
        """Test extracting the tag from an install URL."""
        assert extract_tag("https://host/repo.git#18.0.0") == "18.0.0"
        assert extract_tag("8.5.0") == "8.5.0"

    def test_compare_returns_order(self):
        """Test the VersionOrder wrapper."""
        assert compare("1.0.0", "2.0.0") is VersionOrder.LESS
        assert compare("2.0.0", "2.0.0") is VersionOrder.EQUAL
        assert compare("2.1.0", "2.0.0") is VersionOrder.GREATER

    def test_is_at_least(self):
        """Test that newer and equal versions satisfy a minimum."""
        assert is_at_least("8.6.0", "8.5.0")
        assert is_at_least("8.5.0", "8.5.0")
        assert not is_at_least("8.4.0", "8.5.0")
