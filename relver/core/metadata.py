"""Version metadata sources for relver.

A metadata source answers one question: which version strings are known
for an artifact? Three implementations are provided:

1. :class:`RemoteMetadataSource` reads ``maven-metadata.xml`` from every
   remote repository whose policy accepts the request's version.
2. :class:`LocalRepositoryMetadataSource` reads a local repository
   directory (``maven-metadata-local.xml`` plus installed version folders).
3. :class:`CompositeMetadataSource` merges several sources in order.

Sources never filter by release or snapshot status; the request's
``version`` only decides *which repositories* are consulted. Any failure to
complete a lookup is reported as :class:`MetadataUnavailable`.

Typical usage::

    async with HTTPClient() as http:
        source = CompositeMetadataSource(
            RemoteMetadataSource(http, [central]),
            LocalRepositoryMetadataSource(Path("~/.m2/repository")),
        )
        versions = await source.fetch_versions(
            MetadataRequest.for_releases(ArtifactCoordinates.parse("junit:junit"))
        )
"""

from __future__ import annotations

import asyncio
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Protocol, Sequence, Union

from relver.constants import LOCAL_METADATA_FILE, REMOTE_METADATA_FILE
from relver.core.selector import dedupe_versions
from relver.exceptions import FileOperationError, MetadataUnavailable, NetworkError
from relver.models.coordinates import MetadataRequest, Repository
from relver.utils.filesystem import safe_read_file, validate_path
from relver.utils.http import HTTPClient
from relver.utils.logger import get_logger

logger = get_logger("metadata")

# Public API
__all__ = [
    "MetadataSource",
    "RemoteMetadataSource",
    "LocalRepositoryMetadataSource",
    "CompositeMetadataSource",
    "parse_metadata_versions",
]


class MetadataSource(Protocol):
    """Anything that can list the known versions of an artifact."""

    async def fetch_versions(self, request: MetadataRequest) -> List[str]:
        """Return every version string known for ``request.coordinates``.

        Raises:
            MetadataUnavailable: The lookup could not be completed.
        """
        ...


# ---------------------------------------------------------------------------
# Metadata document parsing
# ---------------------------------------------------------------------------


def parse_metadata_versions(document: str) -> List[str]:
    """Extract ``versioning/versions/version`` entries from a metadata XML.

    Args:
        document: Raw ``maven-metadata*.xml`` content.

    Returns:
        Version strings in document order, blanks skipped.

    Raises:
        ET.ParseError: The document is not well-formed XML.

    Example::

        >>> parse_metadata_versions(
        ...     "<metadata><versioning><versions>"
        ...     "<version>1.0</version><version>1.1</version>"
        ...     "</versions></versioning></metadata>"
        ... )
        ['1.0', '1.1']
    """
    root = ET.fromstring(document)
    versions: List[str] = []

    for versioning in _children(root, "versioning"):
        for versions_elem in _children(versioning, "versions"):
            for version_elem in _children(versions_elem, "version"):
                text = (version_elem.text or "").strip()
                if text:
                    versions.append(text)

    return versions


def _children(element: ET.Element, name: str) -> List[ET.Element]:
    """Direct children named ``name``, ignoring any XML namespace."""
    return [child for child in element if child.tag.rsplit("}", 1)[-1] == name]


# ---------------------------------------------------------------------------
# Remote repositories
# ---------------------------------------------------------------------------


class RemoteMetadataSource:
    """Reads artifact metadata from remote repositories over HTTP.

    Repositories are queried concurrently; results are merged in the order
    the repositories were configured, so the output is deterministic.

    Args:
        http_client: Shared :class:`HTTPClient` (owns the connection pool).
        repositories: Repositories to consider, in priority order.
    """

    def __init__(
        self,
        http_client: HTTPClient,
        repositories: Sequence[Repository],
    ) -> None:
        self.http_client = http_client
        self.repositories: List[Repository] = list(repositories)

    def repositories_for(self, request: MetadataRequest) -> List[Repository]:
        """Repositories whose policy accepts ``request.version``."""
        return [repo for repo in self.repositories if repo.accepts(request.version)]

    async def fetch_versions(self, request: MetadataRequest) -> List[str]:
        selected = self.repositories_for(request)
        if not selected:
            logger.debug("No repository accepts version %s", request.version)
            return []

        logger.debug(
            "Querying %d repository(ies) for %s: %s",
            len(selected),
            request.coordinates,
            ", ".join(repo.id for repo in selected),
        )

        # Every fetch settles before returning, so none outlives the client.
        results = await asyncio.gather(
            *(self._fetch_from(repo, request) for repo in selected),
            return_exceptions=True,
        )

        merged: List[str] = []
        for result in results:
            if isinstance(result, BaseException):
                raise result
            merged.extend(result)
        return dedupe_versions(merged)

    async def _fetch_from(
        self,
        repository: Repository,
        request: MetadataRequest,
    ) -> List[str]:
        """Fetch and parse one repository's metadata.

        A 404 means the artifact is not published there and yields ``[]``.
        """
        url = repository.metadata_url(request.coordinates, REMOTE_METADATA_FILE)

        try:
            document = await self.http_client.get_text(url)
        except Exception as exc:
            if isinstance(exc, NetworkError) and exc.status_code == 404:
                logger.debug("No metadata for %s in %s", request.coordinates, repository.id)
                return []
            raise MetadataUnavailable(
                f"Could not download metadata from repository '{repository.id}'",
                artifact=str(request.coordinates),
                source=url,
                original_error=exc,
            ) from exc

        try:
            versions = parse_metadata_versions(document)
        except ET.ParseError as exc:
            raise MetadataUnavailable(
                f"Malformed metadata in repository '{repository.id}'",
                artifact=str(request.coordinates),
                source=url,
                original_error=exc,
            ) from exc

        logger.debug("%s lists %d version(s)", repository.id, len(versions))
        return versions


# ---------------------------------------------------------------------------
# Local repository
# ---------------------------------------------------------------------------


class LocalRepositoryMetadataSource:
    """Reads versions installed in a local repository directory.

    Two listings are merged: the versions recorded in
    ``maven-metadata-local.xml`` and, after them, every version directory
    that holds the artifact's POM (sorted by name).

    Args:
        root: Local repository root, e.g. ``~/.m2/repository``.
    """

    def __init__(self, root: Union[str, Path]) -> None:
        self.root: Path = validate_path(root)

    async def fetch_versions(self, request: MetadataRequest) -> List[str]:
        coordinates = request.coordinates
        try:
            artifact_dir = validate_path(self.root / coordinates.path, base_dir=self.root)
        except FileOperationError as exc:
            raise MetadataUnavailable(
                "Artifact path escapes the local repository",
                artifact=str(coordinates),
                source=str(self.root),
                original_error=exc,
            ) from exc

        if not artifact_dir.is_dir():
            logger.debug("%s not installed in %s", coordinates, self.root)
            return []

        versions: List[str] = []

        metadata_file = artifact_dir / LOCAL_METADATA_FILE
        if metadata_file.is_file():
            try:
                versions.extend(parse_metadata_versions(safe_read_file(metadata_file)))
            except (FileOperationError, ET.ParseError) as exc:
                raise MetadataUnavailable(
                    "Unreadable local repository metadata",
                    artifact=str(coordinates),
                    source=str(metadata_file),
                    original_error=exc,
                ) from exc

        try:
            versions.extend(self._installed_versions(artifact_dir, coordinates.artifact_id))
        except OSError as exc:
            raise MetadataUnavailable(
                "Unreadable local repository directory",
                artifact=str(coordinates),
                source=str(artifact_dir),
                original_error=exc,
            ) from exc

        logger.debug("Local repository lists %d version(s) for %s", len(versions), coordinates)
        return dedupe_versions(versions)

    @staticmethod
    def _installed_versions(artifact_dir: Path, artifact_id: str) -> List[str]:
        """Version directories that hold the artifact's POM, sorted by name."""
        return [
            entry.name
            for entry in sorted(artifact_dir.iterdir())
            if entry.is_dir() and (entry / f"{artifact_id}-{entry.name}.pom").is_file()
        ]


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


class CompositeMetadataSource:
    """Concatenates several sources, dropping exact duplicates.

    Sources are consulted in order; the first failure propagates.
    """

    def __init__(self, *sources: MetadataSource) -> None:
        self.sources: List[MetadataSource] = list(sources)

    async def fetch_versions(self, request: MetadataRequest) -> List[str]:
        merged: List[str] = []
        for source in self.sources:
            merged.extend(await source.fetch_versions(request))
        return dedupe_versions(merged)
