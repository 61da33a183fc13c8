"""
Centralized constants for relver.

This module defines immutable configuration values used across relver,
including repository layout, network settings, property names, and
logging formats. All values are intended to be treated as read-only.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

#: HTTP User-Agent template used for outbound requests.
USER_AGENT_TEMPLATE: Final[str] = "relver/{version}"

# ---------------------------------------------------------------------------
# Repository layout
# ---------------------------------------------------------------------------

#: Default remote repository (Maven Central).
MAVEN_CENTRAL_ID: Final[str] = "central"
MAVEN_CENTRAL_URL: Final[str] = "https://repo.maven.apache.org/maven2"

#: Artifact-level metadata file published by remote repositories.
REMOTE_METADATA_FILE: Final[str] = "maven-metadata.xml"

#: Artifact-level metadata file written by local installs.
LOCAL_METADATA_FILE: Final[str] = "maven-metadata-local.xml"

#: Default local repository, relative to the user's home directory.
DEFAULT_LOCAL_REPOSITORY: Final[str] = ".m2/repository"

# ---------------------------------------------------------------------------
# Versions
# ---------------------------------------------------------------------------

#: Suffix marking an in-development build. Matched case-sensitively.
SNAPSHOT_SUFFIX: Final[str] = "-SNAPSHOT"

#: Version used for the metadata query so that release repositories are asked.
RELEASE_QUERY_VERSION: Final[str] = "0"

#: Largest value accepted for a numeric version field.
MAX_VERSION_INT: Final[int] = 2**31 - 1

# ---------------------------------------------------------------------------
# Published properties
# ---------------------------------------------------------------------------

#: Default prefix for the published property names.
DEFAULT_PROPERTY_PREFIX: Final[str] = "releasedVersion"

#: Property suffixes, in publication order.
PROPERTY_NAMES: Final[Sequence[str]] = (
    "version",
    "majorVersion",
    "minorVersion",
    "incrementalVersion",
    "buildNumber",
    "qualifier",
)

# ---------------------------------------------------------------------------
# HTTP configuration
# ---------------------------------------------------------------------------

#: Default network timeout in seconds.
DEFAULT_TIMEOUT: Final[int] = 30

#: Maximum number of retries for failed HTTP requests.
DEFAULT_MAX_RETRIES: Final[int] = 3

#: Verify TLS certificates of remote repositories.
DEFAULT_VERIFY_SSL: Final[bool] = True

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

#: Skip remote repositories unless overridden.
DEFAULT_OFFLINE: Final[bool] = False

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed size (in bytes) for local metadata files.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
