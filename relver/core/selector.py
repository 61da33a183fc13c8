"""Released version selection for relver.

:class:`ReleaseVersionSelector` turns an unordered bag of raw version
strings, typically merged from several metadata sources, into the single
highest version that is not a ``-SNAPSHOT`` build.

The selection is pure: no I/O, no shared state, and the same input always
yields the same result. When several distinct strings rank equal (for
example ``"1.0"`` and ``"1.0.0"``) the one seen first wins.

Typical usage::

    selector = ReleaseVersionSelector()
    best = selector.select(["1.0", "1.1-SNAPSHOT", "1.0.1", "1.0.1-beta"])
    print(best.released_label)     # "1.0.1"
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from relver.models.version import ParsedVersion, parse_version
from relver.utils.logger import get_logger

logger = get_logger("selector")

# Public API
__all__ = ["ReleaseVersionSelector", "dedupe_versions"]


def dedupe_versions(versions: Iterable[str]) -> List[str]:
    """Drop exact-duplicate strings, keeping first-seen order.

    Example::

        >>> dedupe_versions(["1.0", "1.1", "1.0"])
        ['1.0', '1.1']
    """
    return list(dict.fromkeys(versions))


class ReleaseVersionSelector:
    """Pick the highest released (non-snapshot) version."""

    def parse_all(self, versions: Iterable[str]) -> List[ParsedVersion]:
        """Deduplicate and parse ``versions``, preserving first-seen order."""
        return [parse_version(raw) for raw in dedupe_versions(versions)]

    def select(self, versions: Iterable[str]) -> Optional[ParsedVersion]:
        """Return the highest non-snapshot version, or ``None``.

        Args:
            versions: Raw version strings; duplicates are tolerated.

        Returns:
            The selected :class:`ParsedVersion`, or ``None`` when the input
            is empty or holds only snapshots.

        Example::

            >>> ReleaseVersionSelector().select(["2.0-SNAPSHOT"]) is None
            True
        """
        best: Optional[ParsedVersion] = None
        considered = 0

        for candidate in self.parse_all(versions):
            if candidate.is_snapshot:
                continue
            considered += 1
            # Strictly greater only, so ties keep the earlier entry
            if best is None or candidate > best:
                best = candidate

        logger.debug(
            "Selected %s from %d released candidate(s)",
            best.raw if best else None,
            considered,
        )
        return best
