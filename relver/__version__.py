"""
relver version information.

Single source of truth for the package version; ``pyproject.toml`` reads
it at build time and the CLI reports it via ``relver --version``.
"""

from __future__ import annotations

__version__ = "0.1.0"
