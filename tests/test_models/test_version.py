"""Unit tests for relver.models.version.

Test Coverage:
- Dotted numeric parsing with qualifiers and build numbers
- Graceful degradation of malformed versions (parsing never raises)
- Snapshot detection (case-sensitive suffix)
- Released label truncation
- Ordering: release > build number > qualifier
"""

from __future__ import annotations

import pytest

from relver.models.version import ParsedVersion, parse_version


@pytest.mark.unit
class TestParseVersion:
    """Tests for parse_version field decomposition."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1", (1, 0, 0, 0, None)),
            ("1.2", (1, 2, 0, 0, None)),
            ("1.2.3", (1, 2, 3, 0, None)),
            ("1.2.3-beta-1", (1, 2, 3, 0, "beta-1")),
            ("1.0-rc1", (1, 0, 0, 0, "rc1")),
            ("1.0-1", (1, 0, 0, 1, None)),
            ("2.0.0-SNAPSHOT", (2, 0, 0, 0, "SNAPSHOT")),
            ("1.0-01", (1, 0, 0, 0, "01")),
            ("1.2.3.Final", (1, 2, 3, 0, "Final")),
            ("0", (0, 0, 0, 0, None)),
            ("0.9", (0, 9, 0, 0, None)),
        ],
    )
    def test_fields(self, raw: str, expected: tuple) -> None:
        """Test well-formed versions decompose into their numeric fields."""
        v = parse_version(raw)

        assert (v.major, v.minor, v.incremental, v.build_number, v.qualifier) == expected
        assert v.raw == raw

    def test_build_number_flag(self) -> None:
        """Test has_build_number is set only for a numeric suffix."""
        assert parse_version("1.0-1").has_build_number is True
        assert parse_version("1.0-0").has_build_number is True
        assert parse_version("1.0-rc1").has_build_number is False
        assert parse_version("1.0").has_build_number is False

    @pytest.mark.parametrize(
        "raw",
        ["1.a.3", "01.2", "1..2", ".1", "1.", "1.2.3.4", "1.x"],
    )
    def test_malformed_falls_back_to_qualifier(self, raw: str) -> None:
        """Test malformed versions degrade to zero fields and raw qualifier."""
        v = parse_version(raw)

        assert (v.major, v.minor, v.incremental, v.build_number) == (0, 0, 0, 0)
        assert v.qualifier == raw
        assert v.has_build_number is False

    def test_non_numeric_single_token(self) -> None:
        """Test a token without dots that is not a number becomes the qualifier."""
        v = parse_version("RELEASE")

        assert v.major == 0
        assert v.qualifier == "RELEASE"

    def test_non_numeric_major_drops_build_number(self) -> None:
        """Test a numeric suffix is discarded when the major is not numeric."""
        v = parse_version("beta-2")

        assert v.qualifier == "beta-2"
        assert v.build_number == 0
        assert v.has_build_number is False

    def test_huge_number_is_not_numeric(self) -> None:
        """Test numbers beyond 32-bit range are treated as text."""
        v = parse_version("1.0-99999999999")

        assert v.has_build_number is False
        assert v.qualifier == "99999999999"

    @pytest.mark.parametrize("raw", ["", "-", "--", "...", "-SNAPSHOT", "ü.1"])
    def test_never_raises(self, raw: str) -> None:
        """Test parsing is total, even for degenerate input."""
        assert isinstance(parse_version(raw), ParsedVersion)


@pytest.mark.unit
class TestDerivedFields:
    """Tests for is_snapshot and released_label."""

    def test_snapshot_suffix(self) -> None:
        assert parse_version("1.0-SNAPSHOT").is_snapshot is True

    def test_snapshot_is_case_sensitive(self) -> None:
        assert parse_version("1.0-snapshot").is_snapshot is False

    def test_snapshot_requires_dash(self) -> None:
        assert parse_version("1.0SNAPSHOT").is_snapshot is False

    def test_release_is_not_snapshot(self) -> None:
        assert parse_version("1.0").is_snapshot is False

    @pytest.mark.parametrize(
        "raw, label",
        [
            ("1.2.3-beta-1", "1.2.3"),
            ("1.2.3", "1.2.3"),
            ("1.0-SNAPSHOT", "1.0"),
            ("-weird", ""),
        ],
    )
    def test_released_label(self, raw: str, label: str) -> None:
        """Test the label is the raw string cut at the first dash."""
        v = parse_version(raw)

        assert v.released_label == label
        assert v.raw.startswith(v.released_label)
        assert "-" not in v.released_label

    def test_str_is_raw(self) -> None:
        assert str(parse_version("1.0-rc1")) == "1.0-rc1"


@pytest.mark.unit
class TestOrdering:
    """Tests for the release ordering."""

    def test_release_beats_qualifier(self) -> None:
        assert parse_version("1.0") > parse_version("1.0-rc1")

    def test_build_number_beats_qualifier(self) -> None:
        assert parse_version("1.0-1") > parse_version("1.0-rc1")

    def test_release_beats_build_number(self) -> None:
        assert parse_version("1.0") > parse_version("1.0-1")

    def test_major_dominates(self) -> None:
        assert parse_version("2.0.0") > parse_version("1.9.9")

    def test_numeric_not_lexicographic(self) -> None:
        assert parse_version("1.10") > parse_version("1.9")

    def test_build_numbers_compare_numerically(self) -> None:
        assert parse_version("1.0-10") > parse_version("1.0-9")

    def test_qualifiers_compare_lexicographically(self) -> None:
        assert parse_version("1.0-rc1") > parse_version("1.0-beta")
        assert parse_version("1.0-beta") > parse_version("1.0-alpha")

    def test_missing_components_equal_zero(self) -> None:
        """Test "1.0" and "1.0.0" rank equal while keeping their raw text."""
        a = parse_version("1.0")
        b = parse_version("1.0.0")

        assert a == b
        assert hash(a) == hash(b)
        assert a.raw != b.raw

    def test_sorting(self) -> None:
        raws = ["1.0-rc1", "2.0", "1.0", "1.0-1", "0.9", "1.1-alpha"]

        ordered = [v.raw for v in sorted(parse_version(r) for r in raws)]

        assert ordered == ["0.9", "1.0-rc1", "1.0-1", "1.0", "1.1-alpha", "2.0"]

    def test_compare_with_other_type(self) -> None:
        """Test comparison with a non-version is rejected."""
        assert parse_version("1.0") != "1.0"
        with pytest.raises(TypeError):
            parse_version("1.0") < "1.0"  # noqa: B015
