"""
Version data model for relver.

This module defines :class:`ParsedVersion`, the structured form of a raw
version string as published by a Maven-style repository, and
:func:`parse_version`, which builds one. Parsing is total: malformed
strings degrade to a zero version whose qualifier is the raw string.

Accepted syntax::

    <major>[.<minor>[.<incremental>]][-<qualifier-or-buildnumber>]

Examples:
    >>> v = parse_version("1.2.3-beta-1")
    >>> (v.major, v.minor, v.incremental, v.qualifier)
    (1, 2, 3, 'beta-1')
    >>> v.released_label
    '1.2.3'
    >>> parse_version("1.0") > parse_version("1.0-rc1")
    True
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Optional, Tuple

from relver.constants import MAX_VERSION_INT, SNAPSHOT_SUFFIX

# Suffix ranks used for ordering: a plain release beats a build number,
# which beats any textual qualifier.
_RANK_QUALIFIER = 0
_RANK_BUILD_NUMBER = 1
_RANK_RELEASE = 2


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class ParsedVersion:
    """
    Structured decomposition of a raw version string.

    Equality, hashing and ordering all use the numeric fields and suffix,
    not ``raw``, so ``"1.0"`` and ``"1.0.0"`` compare equal.

    Attributes:
        raw: Version string exactly as published.
        major: Major version number.
        minor: Minor version number.
        incremental: Incremental (patch) version number.
        build_number: Numeric suffix after the first ``-``.
        qualifier: Textual suffix, or ``None``.
        has_build_number: Whether ``build_number`` was read from the string.
    """

    raw: str
    major: int = 0
    minor: int = 0
    incremental: int = 0
    build_number: int = 0
    qualifier: Optional[str] = None
    has_build_number: bool = field(default=False, repr=False)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def is_snapshot(self) -> bool:
        """True if the raw string ends with ``-SNAPSHOT`` (case-sensitive)."""
        return self.raw.endswith(SNAPSHOT_SUFFIX)

    @property
    def released_label(self) -> str:
        """The raw string with everything from the first ``-`` removed."""
        return self.raw.split("-", 1)[0]

    @property
    def sort_key(self) -> Tuple[int, int, int, int, str, int]:
        """Tuple implementing the release ordering."""
        if self.qualifier is not None:
            rank = _RANK_QUALIFIER
        elif self.has_build_number:
            rank = _RANK_BUILD_NUMBER
        else:
            rank = _RANK_RELEASE

        return (
            self.major,
            self.minor,
            self.incremental,
            rank,
            self.qualifier or "",
            self.build_number,
        )

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedVersion):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ParsedVersion):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self) -> int:
        return hash(self.sort_key)

    def __str__(self) -> str:
        return self.raw


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_version(raw: str) -> ParsedVersion:
    """Parse a raw version string. Never raises.

    Args:
        raw: Version string as published by a repository.

    Returns:
        The structured :class:`ParsedVersion`.
    """
    part1, sep, part2 = raw.partition("-")

    build_number: Optional[int] = None
    qualifier: Optional[str] = None

    if sep:
        if len(part2) == 1 or not part2.startswith("0"):
            build_number = _try_parse_int(part2)
            if build_number is None:
                qualifier = part2
        else:
            qualifier = part2

    major: Optional[int] = None
    minor: Optional[int] = None
    incremental: Optional[int] = None

    if "." not in part1 and not part1.startswith("0"):
        major = _try_parse_int(part1)
        if major is None:
            # Entirely non-numeric, e.g. "RELEASE" or "beta-2"
            qualifier = raw
            build_number = None
    else:
        fallback = False
        tokens = [token for token in part1.split(".") if token]
        try:
            if tokens:
                major = _integer_token(tokens[0])
            if len(tokens) > 1:
                minor = _integer_token(tokens[1])
            if len(tokens) > 2:
                incremental = _integer_token(tokens[2])
            if len(tokens) > 3:
                qualifier = tokens[3]
                fallback = qualifier.isdigit()
        except ValueError:
            fallback = True

        if ".." in part1 or part1.startswith(".") or part1.endswith("."):
            fallback = True

        if fallback:
            return ParsedVersion(raw=raw, qualifier=raw)

    return ParsedVersion(
        raw=raw,
        major=major or 0,
        minor=minor or 0,
        incremental=incremental or 0,
        build_number=build_number or 0,
        qualifier=qualifier,
        has_build_number=build_number is not None,
    )


def _integer_token(token: str) -> int:
    """Read one dotted component; leading zeros are rejected."""
    if len(token) > 1 and token.startswith("0"):
        raise ValueError(f"Leading zero in version component: {token!r}")
    value = _try_parse_int(token)
    if value is None:
        raise ValueError(f"Non-numeric version component: {token!r}")
    return value


def _try_parse_int(text: str) -> Optional[int]:
    """Return ``text`` as a bounded non-negative int, or ``None``."""
    if not text.isascii() or not text.isdigit():
        return None
    value = int(text)
    if value > MAX_VERSION_INT:
        return None
    return value
