"""Resolve command implementation for relver.

Looks up the latest released version of an artifact and prints the
``{prefix}.*`` properties describing it.

The command orchestrates three core components:

1. **Metadata sources**: remote repositories (``maven-metadata.xml``)
   followed by the local repository, merged into one version listing.
2. **ReleaseVersionSelector**: picks the highest non-snapshot version.
3. **PropertyCollector**: gathers the published properties for output.

A repository outage is not a build failure: a warning is logged and the
command exits 0 without printing any properties.

Typical usage::

    # Print properties for the latest release
    $ relver resolve org.example:demo-core

    # Custom prefix, written to a file for a later build step
    $ relver resolve org.example:demo-core --property-prefix demo -o released.properties

    # Query a private repository and emit JSON
    $ relver resolve org.example:demo-core -r internal=https://repo.example.com/releases -f json
"""

from __future__ import annotations

import sys
import json
import click
import asyncio
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from relver.exceptions import RelverError
from relver.context import pass_context, RelverContext
from relver.models import ArtifactCoordinates, ParsedVersion, Repository
from relver.core import (
    CompositeMetadataSource,
    LocalRepositoryMetadataSource,
    MetadataSource,
    PropertyCollector,
    ReleasedVersionResolver,
    RemoteMetadataSource,
)
from relver.utils import (
    HTTPClient,
    get_logger,
    print_error,
    print_success,
    print_table,
    print_warning,
    safe_write_file,
)

logger = get_logger("commands.resolve")


@click.command()
@click.argument("coordinates", metavar="GROUP:ARTIFACT")
@click.option(
    "--property-prefix",
    "-p",
    default=None,
    help="Prefix for the published property names [default: releasedVersion].",
)
@click.option(
    "--repository",
    "-r",
    "repositories",
    multiple=True,
    metavar="[ID=]URL",
    help="Remote repository to query (repeatable). Replaces configured repositories.",
)
@click.option(
    "--local-repository",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Local repository directory [default: ~/.m2/repository].",
)
@click.option(
    "--offline",
    is_flag=True,
    help="Do not contact remote repositories.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["properties", "json", "table"], case_sensitive=False),
    default="properties",
    help="Output format.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the properties to this .properties file.",
)
@pass_context
def resolve(
    ctx: RelverContext,
    coordinates: str,
    property_prefix: Optional[str],
    repositories: Tuple[str, ...],
    local_repository: Optional[Path],
    offline: bool,
    format: str,
    output: Optional[Path],
) -> None:
    """Resolve the latest released version of GROUP:ARTIFACT.

    Every published version is collected from the remote repositories and
    the local repository, ``-SNAPSHOT`` versions are discarded, and the
    highest remaining version is published as six properties::

    \b
      releasedVersion.version
      releasedVersion.majorVersion
      releasedVersion.minorVersion
      releasedVersion.incrementalVersion
      releasedVersion.buildNumber
      releasedVersion.qualifier

    Nothing is printed when no released version exists or when the
    repositories cannot be reached; the command still exits 0.
    """
    config = ctx.effective_config
    format = format.lower()

    try:
        artifact = ArtifactCoordinates.parse(coordinates)
        repos = (
            _parse_repository_options(repositories)
            if repositories
            else list(config.repositories)
        )
        prefix = property_prefix if property_prefix is not None else config.property_prefix
        if not prefix:
            raise click.BadParameter("must not be empty", param_hint="--property-prefix")

        version, properties = asyncio.run(
            _resolve_async(
                artifact,
                repositories=repos,
                local_repository=local_repository or config.local_repository,
                offline=offline or config.offline,
                property_prefix=prefix,
                timeout=config.timeout,
                max_retries=config.max_retries,
                verify_ssl=config.verify_ssl,
            )
        )

        _display(artifact, version, properties, format)

        if output is not None:
            if len(properties):
                safe_write_file(output, properties.to_properties())
                if format == "table":
                    print_success(f"Wrote {len(properties)} properties to {output}")
            else:
                logger.info("No properties to write; %s left untouched", output)

    except click.ClickException:
        raise
    except RelverError as e:
        print_error(f"{e}")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in resolve command")
        sys.exit(1)


# ---------------------------------------------------------------------------
# Async orchestration
# ---------------------------------------------------------------------------


async def _resolve_async(
    artifact: ArtifactCoordinates,
    *,
    repositories: Sequence[Repository],
    local_repository: Path,
    offline: bool,
    property_prefix: str,
    timeout: int,
    max_retries: int,
    verify_ssl: bool,
) -> Tuple[Optional[ParsedVersion], PropertyCollector]:
    """Build the metadata sources, run the resolver and collect properties.

    Remote repositories are listed before the local repository so that the
    merged listing keeps published versions first.
    """
    properties = PropertyCollector()

    async with HTTPClient(
        timeout=timeout, max_retries=max_retries, verify_ssl=verify_ssl
    ) as http:
        sources: List[MetadataSource] = []
        if offline:
            logger.info("Offline mode: skipping remote repositories")
        else:
            sources.append(RemoteMetadataSource(http, repositories))
        sources.append(LocalRepositoryMetadataSource(local_repository))

        resolver = ReleasedVersionResolver(
            CompositeMetadataSource(*sources),
            properties,
            property_prefix=property_prefix,
        )
        version = await resolver.resolve(artifact)

    return version, properties


# ---------------------------------------------------------------------------
# Option parsing
# ---------------------------------------------------------------------------


def _parse_repository_options(values: Sequence[str]) -> List[Repository]:
    """Turn ``[ID=]URL`` option values into :class:`Repository` objects.

    Raises:
        click.BadParameter: A value does not carry an http(s) URL.
    """
    repositories: List[Repository] = []

    for index, value in enumerate(values, start=1):
        repo_id, sep, url = value.partition("=")
        if not sep or "://" in repo_id:
            repo_id, url = f"repo-{index}", value
        if not url.startswith(("http://", "https://")):
            raise click.BadParameter(
                f"expected [ID=]URL with an http(s) URL, got {value!r}",
                param_hint="--repository",
            )
        repositories.append(Repository(id=repo_id, url=url))

    return repositories


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


def _display(
    artifact: ArtifactCoordinates,
    version: Optional[ParsedVersion],
    properties: PropertyCollector,
    format: str,
) -> None:
    """Render the outcome in the requested format."""
    if format == "json":
        payload = {
            "artifact": str(artifact),
            "released_version": version.raw if version else None,
            "properties": properties.as_dict(),
        }
        click.echo(json.dumps(payload, indent=2))
        return

    if format == "table":
        if version is None:
            print_warning(f"No released version found for {artifact}")
            return
        print_table(
            [{"Property": key, "Value": value} for key, value in properties],
            headers=["Property", "Value"],
            title=f"{artifact} {version.raw}",
            column_styles={"Property": {"style": "cyan", "no_wrap": True}},
        )
        return

    text = properties.to_properties()
    if text:
        click.echo(text, nl=False)
