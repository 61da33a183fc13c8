"""
Unified data model exports for relver.

Example:
    >>> from relver.models import ArtifactCoordinates, parse_version
"""

from __future__ import annotations

from relver.models.version import ParsedVersion, parse_version
from relver.models.coordinates import (
    ArtifactCoordinates,
    MetadataRequest,
    Repository,
)

__all__ = [
    "ParsedVersion",
    "parse_version",
    "ArtifactCoordinates",
    "MetadataRequest",
    "Repository",
]
