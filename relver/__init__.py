"""
relver: latest released version lookup for Maven-style repositories.

relver queries the configured package repositories for every published
version of an artifact, picks the highest version that is not a
``-SNAPSHOT`` build, and publishes its fields as named properties so that
later build steps can consume them::

    releasedVersion.version=1.4.2
    releasedVersion.majorVersion=1
    releasedVersion.minorVersion=4
    releasedVersion.incrementalVersion=2
    releasedVersion.buildNumber=0
    releasedVersion.qualifier=
"""

from __future__ import annotations

from relver.__version__ import __version__

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "relver Contributors"
__license__ = "MIT"
__description__ = "Resolve the latest released version of a Maven artifact."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

from relver.models import ParsedVersion, parse_version  # noqa: E402
from relver.core.selector import ReleaseVersionSelector  # noqa: E402
from relver.core.resolver import ReleasedVersionResolver  # noqa: E402

__all__ = [
    "__version__",
    "ParsedVersion",
    "parse_version",
    "ReleaseVersionSelector",
    "ReleasedVersionResolver",
]
