"""The released-version build step.

:class:`ReleasedVersionResolver` wires the three collaborators together:

1. a :class:`~relver.core.metadata.MetadataSource` lists every known
   version of the artifact;
2. :class:`~relver.core.selector.ReleaseVersionSelector` picks the highest
   non-snapshot version;
3. a :class:`~relver.core.properties.PropertySink` receives the six
   ``{prefix}.*`` properties.

The metadata query is always made with the marker version ``"0"``. The
version of the project being built is irrelevant to the lookup, and a
``-SNAPSHOT`` project version would otherwise route the query to snapshot
repositories only, hiding every release.

The step never fails the surrounding build: unavailable metadata is logged
as a warning and no properties are defined.

Typical usage::

    sink = PropertyCollector()
    resolver = ReleasedVersionResolver(source, sink, property_prefix="rv")
    version = await resolver.resolve(ArtifactCoordinates.parse("org.example:demo"))
"""

from __future__ import annotations

from typing import Optional

from relver.constants import DEFAULT_PROPERTY_PREFIX
from relver.core.metadata import MetadataSource
from relver.core.properties import PropertySink, version_properties
from relver.core.selector import ReleaseVersionSelector
from relver.exceptions import MetadataUnavailable
from relver.models.coordinates import ArtifactCoordinates, MetadataRequest
from relver.models.version import ParsedVersion
from relver.utils.logger import get_logger

logger = get_logger("resolver")


class ReleasedVersionResolver:
    """Resolve the latest released version of an artifact and publish it.

    Args:
        source: Where version listings come from.
        sink: Where the resulting properties are defined.
        property_prefix: Prefix for every published property name.
        selector: Selection strategy; a default
            :class:`ReleaseVersionSelector` is used when omitted.

    Raises:
        ValueError: If ``property_prefix`` is empty.
    """

    def __init__(
        self,
        source: MetadataSource,
        sink: PropertySink,
        property_prefix: str = DEFAULT_PROPERTY_PREFIX,
        selector: Optional[ReleaseVersionSelector] = None,
    ) -> None:
        if not property_prefix:
            raise ValueError("property_prefix must not be empty")

        self.source = source
        self.sink = sink
        self.property_prefix = property_prefix
        self.selector = selector or ReleaseVersionSelector()

    async def resolve(self, coordinates: ArtifactCoordinates) -> Optional[ParsedVersion]:
        """Look up, select and publish the released version.

        Args:
            coordinates: Artifact to resolve.

        Returns:
            The selected version, or ``None`` when metadata was unavailable
            or no released version exists. No properties are defined in
            either ``None`` case.
        """
        request = MetadataRequest.for_releases(coordinates)

        try:
            versions = await self.source.fetch_versions(request)
        except MetadataUnavailable as exc:
            logger.warning(
                "Failed to retrieve artifacts metadata, cannot resolve the released version"
            )
            logger.debug("Metadata failure for %s: %s", coordinates, exc)
            return None

        logger.info("Found %d version(s) for %s", len(versions), coordinates)

        released = self.selector.select(versions)
        if released is None:
            logger.debug("No released version found.")
            return None

        for key, value in version_properties(released, self.property_prefix):
            self.sink.define(key, value)

        logger.info("Released version of %s is %s", coordinates, released.raw)
        return released
