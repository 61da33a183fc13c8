from __future__ import annotations

import pytest

from relver.core.properties import PropertyCollector, version_properties
from relver.models.version import parse_version


@pytest.mark.unit
class TestVersionProperties:
    """Tests for the six published properties."""

    def test_full_version(self) -> None:
        props = dict(version_properties(parse_version("1.2.3-beta-1"), "releasedVersion"))

        assert props == {
            "releasedVersion.version": "1.2.3",
            "releasedVersion.majorVersion": "1",
            "releasedVersion.minorVersion": "2",
            "releasedVersion.incrementalVersion": "3",
            "releasedVersion.buildNumber": "0",
            "releasedVersion.qualifier": "beta-1",
        }

    def test_absent_qualifier_is_empty_string(self) -> None:
        props = dict(version_properties(parse_version("1.0.1"), "rv"))

        assert props["rv.qualifier"] == ""
        assert props["rv.version"] == "1.0.1"

    def test_build_number(self) -> None:
        props = dict(version_properties(parse_version("2.0-7"), "rv"))

        assert props["rv.version"] == "2.0"
        assert props["rv.buildNumber"] == "7"
        assert props["rv.qualifier"] == ""

    def test_order_and_prefix(self) -> None:
        keys = [key for key, _ in version_properties(parse_version("1"), "my.prefix")]

        assert keys == [
            "my.prefix.version",
            "my.prefix.majorVersion",
            "my.prefix.minorVersion",
            "my.prefix.incrementalVersion",
            "my.prefix.buildNumber",
            "my.prefix.qualifier",
        ]

    def test_values_are_strings(self) -> None:
        for _, value in version_properties(parse_version("4.5.6-3"), "rv"):
            assert isinstance(value, str)


@pytest.mark.unit
class TestPropertyCollector:
    """Tests for the in-memory property sink."""

    def test_empty(self) -> None:
        collector = PropertyCollector()

        assert len(collector) == 0
        assert collector.as_dict() == {}
        assert collector.to_properties() == ""

    def test_define_keeps_order(self) -> None:
        collector = PropertyCollector()
        collector.define("b", "1")
        collector.define("a", "2")

        assert list(collector) == [("b", "1"), ("a", "2")]

    def test_redefine_replaces_value_in_place(self) -> None:
        collector = PropertyCollector()
        collector.define("a", "1")
        collector.define("b", "2")
        collector.define("a", "3")

        assert list(collector) == [("a", "3"), ("b", "2")]

    def test_as_dict_is_a_copy(self) -> None:
        collector = PropertyCollector()
        collector.define("a", "1")

        collector.as_dict()["a"] = "changed"

        assert collector.as_dict() == {"a": "1"}

    def test_to_properties(self) -> None:
        collector = PropertyCollector()
        collector.define("rv.version", "1.0")
        collector.define("rv.qualifier", "")

        assert collector.to_properties() == "rv.version=1.0\nrv.qualifier=\n"

    def test_to_properties_escapes(self) -> None:
        collector = PropertyCollector()
        collector.define("a key", "x=y:z")
        collector.define("path", "C:\\tmp")

        assert collector.to_properties() == "a\\ key=x\\=y\\:z\npath=C\\:\\\\tmp\n"
