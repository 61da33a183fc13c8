"""
Artifact coordinate and repository models for relver.

This module defines the identifiers used to locate version metadata:
:class:`ArtifactCoordinates` (``groupId:artifactId``), :class:`Repository`
(a remote repository and its release/snapshot policy) and
:class:`MetadataRequest` (one metadata lookup).
"""

from __future__ import annotations

from dataclasses import dataclass

from relver.constants import RELEASE_QUERY_VERSION, SNAPSHOT_SUFFIX
from relver.exceptions import CoordinatesError


@dataclass(frozen=True)
class ArtifactCoordinates:
    """
    Maven-style artifact coordinates.

    Attributes:
        group_id: Dotted group identifier, e.g. ``org.example``.
        artifact_id: Artifact identifier, e.g. ``demo-core``.
    """

    group_id: str
    artifact_id: str

    @classmethod
    def parse(cls, text: str) -> "ArtifactCoordinates":
        """
        Parse ``groupId:artifactId``.

        Args:
            text: Coordinates string.

        Returns:
            Parsed coordinates.

        Raises:
            CoordinatesError: If the string does not have exactly two
                non-empty, whitespace-free parts.
        """
        parts = text.strip().split(":")
        if len(parts) != 2 or any(not p or any(c.isspace() for c in p) for p in parts):
            raise CoordinatesError(
                f"Expected coordinates of the form groupId:artifactId, got {text!r}",
                coordinates=text,
            )
        return cls(group_id=parts[0], artifact_id=parts[1])

    @property
    def path(self) -> str:
        """Repository-relative directory, e.g. ``org/example/demo-core``."""
        return f"{self.group_id.replace('.', '/')}/{self.artifact_id}"

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass(frozen=True)
class Repository:
    """
    A remote repository and the version kinds it serves.

    Attributes:
        id: Short identifier used in logs.
        url: Base URL of the repository layout.
        releases: Whether released versions are looked up here.
        snapshots: Whether snapshot versions are looked up here.
    """

    id: str
    url: str
    releases: bool = True
    snapshots: bool = False

    def accepts(self, version: str) -> bool:
        """Return True if lookups for ``version`` may use this repository."""
        if version.endswith(SNAPSHOT_SUFFIX):
            return self.snapshots
        return self.releases

    def metadata_url(self, coordinates: ArtifactCoordinates, filename: str) -> str:
        """Build the URL of an artifact-level metadata file."""
        return f"{self.url.rstrip('/')}/{coordinates.path}/{filename}"


@dataclass(frozen=True)
class MetadataRequest:
    """
    One version-metadata lookup.

    ``version`` never filters the returned versions; it only drives which
    repositories are asked (see :meth:`Repository.accepts`).

    Attributes:
        coordinates: Artifact being looked up.
        version: Version the lookup is made on behalf of.
    """

    coordinates: ArtifactCoordinates
    version: str = RELEASE_QUERY_VERSION

    @classmethod
    def for_releases(cls, coordinates: ArtifactCoordinates) -> "MetadataRequest":
        """Build a request that is routed to release repositories."""
        return cls(coordinates=coordinates, version=RELEASE_QUERY_VERSION)
