"""Unit tests for the version compatibility policy."""

import pytest
from packaging.specifiers import InvalidSpecifier

from proxy_server_api.negotiation.versions import (
    SERVER_REST_API_SUPPORTED,
    parse_version_range,
    version_satisfies,
)


class TestVersionSatisfies:
    @pytest.mark.parametrize(
        ("version", "expected"),
        [("0.1.20", True), ("0.1.18", True), ("0.1.10", False), ("1.0.0", True)],
    )
    def test_minimum_version_range(self, version, expected):
        assert version_satisfies(version, ">=0.1.18") is expected

    def test_caret_range_bounds_major(self):
        assert version_satisfies("1.13.0", "^1.13.0")
        assert version_satisfies("1.99.3", "^1.13.0")
        assert not version_satisfies("1.12.9", "^1.13.0")
        assert not version_satisfies("2.0.0", "^1.13.0")

    def test_caret_range_on_zero_major_bounds_minor(self):
        assert version_satisfies("0.1.25", "^0.1.18")
        assert not version_satisfies("0.2.0", "^0.1.18")

    def test_tilde_range_bounds_minor(self):
        assert version_satisfies("1.2.9", "~1.2.3")
        assert not version_satisfies("1.3.0", "~1.2.3")

    def test_space_separated_comparators(self):
        assert version_satisfies("1.5.0", ">=1.0.0 <2.0.0")
        assert not version_satisfies("2.1.0", ">=1.0.0 <2.0.0")

    def test_alternatives(self):
        assert version_satisfies("0.9.0", "<0.5.0 || >=0.8.0")
        assert not version_satisfies("0.6.0", "<0.5.0 || >=0.8.0")

    def test_bare_version_is_exact_match(self):
        assert version_satisfies("1.4.0", "1.4.0")
        assert not version_satisfies("1.4.1", "1.4.0")

    def test_leading_v_is_ignored(self):
        assert version_satisfies("v1.20.0", SERVER_REST_API_SUPPORTED)

    def test_unparseable_version_never_satisfies(self):
        assert version_satisfies("not-a-version", ">=0.0.0") is False

    def test_invalid_range_raises(self):
        with pytest.raises(InvalidSpecifier):
            version_satisfies("1.0.0", ">>>1")

    def test_empty_range_raises(self):
        with pytest.raises(InvalidSpecifier):
            parse_version_range("   ")


class TestParseVersionRange:
    def test_pep440_range_passes_through(self):
        (spec,) = parse_version_range(">=1.0,<2")
        assert spec.contains("1.5")
        assert not spec.contains("2.0")

    def test_spaces_after_operators_are_tolerated(self):
        (spec,) = parse_version_range(">= 1.2.0")
        assert spec.contains("1.2.0")

    def test_alternatives_become_separate_sets(self):
        assert len(parse_version_range("^1.0.0 || ^2.0.0")) == 2


class TestPartialVersions:
    @pytest.mark.parametrize(
        ("version", "version_range", "expected"),
        [
            ("1.5.0", "~1", True),
            ("2.0.0", "~1", False),
            ("1.2.9", "~1.2", True),
            ("1.3.0", "~1.2", False),
            ("0.0.5", "^0.0", True),
            ("0.1.0", "^0.0", False),
            ("0.9.0", "^0", True),
            ("1.0.0", "^0", False),
            ("1.9.0", "^1.2", True),
            ("2.0.0", "^1.2", False),
            ("0.2.7", "^0.2", True),
            ("0.3.0", "^0.2", False),
            ("0.0.3", "^0.0.3", True),
            ("0.0.4", "^0.0.3", False),
        ],
    )
    def test_omitted_components_are_wildcards(self, version, version_range, expected):
        assert version_satisfies(version, version_range) is expected

    def test_suffix_on_partial_version_is_rejected(self):
        with pytest.raises(InvalidSpecifier):
            parse_version_range("^1.2-beta")


class TestXRanges:
    @pytest.mark.parametrize(
        ("version", "version_range", "expected"),
        [
            ("1.4.2", "1.x", True),
            ("2.0.0", "1.x", False),
            ("1.2.7", "1.2.*", True),
            ("1.3.0", "1.2.X", False),
            ("1.9.0", "1", True),
            ("1.2.5", "1.2", True),
            ("1.3.0", "1.2", False),
            ("7.1.0", "*", True),
            ("0.0.1", "x", True),
        ],
    )
    def test_x_ranges(self, version, version_range, expected):
        assert version_satisfies(version, version_range) is expected

    def test_x_range_combines_with_comparators(self):
        assert version_satisfies("1.5.0", "1.x >=1.4.0")
        assert not version_satisfies("1.3.0", "1.x >=1.4.0")


class TestHyphenRanges:
    def test_full_bounds_are_inclusive(self):
        assert version_satisfies("1.13.0", "1.13.0 - 2.0.0")
        assert version_satisfies("2.0.0", "1.13.0 - 2.0.0")
        assert not version_satisfies("2.0.1", "1.13.0 - 2.0.0")
        assert not version_satisfies("1.12.9", "1.13.0 - 2.0.0")

    def test_partial_upper_bound_covers_omitted_components(self):
        assert version_satisfies("2.3.9", "1.2 - 2.3")
        assert not version_satisfies("2.4.0", "1.2 - 2.3")
        assert version_satisfies("1.2.0", "1.2 - 2.3")
        assert not version_satisfies("1.1.9", "1.2 - 2.3")

    def test_hyphen_range_in_alternatives(self):
        assert version_satisfies("3.1.0", "1.0.0 - 1.5.0 || >=3.0.0")
        assert not version_satisfies("2.0.0", "1.0.0 - 1.5.0 || >=3.0.0")
