"""
Core functionality exports for relver.

This module provides convenient access to the core subsystems of relver.
Importing from here keeps user-facing imports clean and stable:

    from relver.core import ReleasedVersionResolver
"""

from __future__ import annotations

from relver.core.selector import ReleaseVersionSelector, dedupe_versions
from relver.core.properties import PropertyCollector, PropertySink, version_properties
from relver.core.metadata import (
    CompositeMetadataSource,
    LocalRepositoryMetadataSource,
    MetadataSource,
    RemoteMetadataSource,
)
from relver.core.resolver import ReleasedVersionResolver

__all__ = [
    "ReleaseVersionSelector",
    "dedupe_versions",
    "PropertyCollector",
    "PropertySink",
    "version_properties",
    "MetadataSource",
    "RemoteMetadataSource",
    "LocalRepositoryMetadataSource",
    "CompositeMetadataSource",
    "ReleasedVersionResolver",
]
