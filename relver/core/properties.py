"""Property publication for relver.

A resolved version is published as six named string properties, all
sharing a prefix (``releasedVersion`` by default)::

    releasedVersion.version=1.0.1
    releasedVersion.majorVersion=1
    releasedVersion.minorVersion=0
    releasedVersion.incrementalVersion=1
    releasedVersion.buildNumber=0
    releasedVersion.qualifier=

:class:`PropertySink` is the publication seam; :class:`PropertyCollector`
is the in-memory sink used by the CLI.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Protocol, Tuple

from relver.constants import PROPERTY_NAMES
from relver.models.version import ParsedVersion
from relver.utils.logger import get_logger

logger = get_logger("properties")

__all__ = ["PropertySink", "PropertyCollector", "version_properties"]


class PropertySink(Protocol):
    """Receives host-visible properties."""

    def define(self, key: str, value: str) -> None:
        ...


def version_properties(
    version: ParsedVersion,
    prefix: str,
) -> List[Tuple[str, str]]:
    """Return the ``(key, value)`` pairs published for ``version``.

    ``version`` is the released label, not the raw string; an absent
    qualifier is published as an empty string.

    Example::

        >>> dict(version_properties(parse_version("2.1-rc1"), "rv"))["rv.version"]
        '2.1'
    """
    values = (
        version.released_label,
        str(version.major),
        str(version.minor),
        str(version.incremental),
        str(version.build_number),
        version.qualifier or "",
    )
    return [(f"{prefix}.{name}", value) for name, value in zip(PROPERTY_NAMES, values)]


class PropertyCollector:
    """Ordered in-memory :class:`PropertySink`.

    Redefining a key replaces its value but keeps its original position.
    """

    def __init__(self) -> None:
        self._properties: Dict[str, str] = {}

    def define(self, key: str, value: str) -> None:
        logger.debug("Define property %s = %s", key, value)
        self._properties[key] = value

    def as_dict(self) -> Dict[str, str]:
        return dict(self._properties)

    def to_properties(self) -> str:
        """Render as a Java ``.properties`` document."""
        lines = [
            f"{_escape(key, is_key=True)}={_escape(value)}"
            for key, value in self._properties.items()
        ]
        return "\n".join(lines) + "\n" if lines else ""

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._properties.items())

    def __len__(self) -> int:
        return len(self._properties)


def _escape(text: str, *, is_key: bool = False) -> str:
    """Escape ``text`` for a ``.properties`` line."""
    out: List[str] = []
    for index, char in enumerate(text):
        if char == "\\":
            out.append("\\\\")
        elif char in "=:#!" or (char == " " and (is_key or index == 0)):
            out.append("\\" + char)
        elif char == "\n":
            out.append("\\n")
        elif char == "\t":
            out.append("\\t")
        elif char == "\r":
            out.append("\\r")
        else:
            out.append(char)
    return "".join(out)
