"""Configuration file loader for relver.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``relver.toml``: settings under ``[relver]`` table
- ``pyproject.toml``: settings under ``[tool.relver]`` table

Discovery order:

1. Explicit path from ``--config`` or ``RELVER_CONFIG``
2. ``relver.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.relver]`` section

Configuration precedence: defaults < config file < CLI args.

Typical usage::

    config = load_config()  # Auto-discover
    config = load_config(Path("custom.toml"))  # Explicit path

Example (``relver.toml``)::

    [relver]
    property_prefix = "releasedVersion"
    local_repository = "~/.m2/repository"

    [[relver.repositories]]
    id = "central"
    url = "https://repo.maven.apache.org/maven2"

    [[relver.repositories]]
    id = "internal"
    url = "https://repo.example.com/releases"
    snapshots = true
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from relver.exceptions import ConfigError
from relver.models.coordinates import Repository
from relver.utils.logger import get_logger
from relver.constants import (
    DEFAULT_LOCAL_REPOSITORY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_OFFLINE,
    DEFAULT_PROPERTY_PREFIX,
    DEFAULT_TIMEOUT,
    DEFAULT_VERIFY_SSL,
    MAVEN_CENTRAL_ID,
    MAVEN_CENTRAL_URL,
)

logger = get_logger("config")


def _default_repositories() -> List[Repository]:
    return [Repository(id=MAVEN_CENTRAL_ID, url=MAVEN_CENTRAL_URL)]


def _default_local_repository() -> Path:
    return Path.home() / DEFAULT_LOCAL_REPOSITORY


@dataclass
class RelverConfig:
    """Parsed and validated relver configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        property_prefix: Prefix for the published property names.
        local_repository: Local repository root directory.
        offline: Skip remote repositories entirely.
        timeout: HTTP timeout in seconds.
        max_retries: Retries for transient HTTP failures.
        verify_ssl: Verify TLS certificates of remote repositories.
        repositories: Remote repositories, in priority order.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    property_prefix: str = DEFAULT_PROPERTY_PREFIX
    local_repository: Path = field(default_factory=_default_local_repository)
    offline: bool = DEFAULT_OFFLINE
    timeout: int = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    verify_ssl: bool = DEFAULT_VERIFY_SSL
    repositories: List[Repository] = field(default_factory=_default_repositories)

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging.

        Excludes ``source_path`` metadata.
        """
        return {
            "property_prefix": self.property_prefix,
            "local_repository": str(self.local_repository),
            "offline": self.offline,
            "timeout": self.timeout,
            "max_retries": self.max_retries,
            "verify_ssl": self.verify_ssl,
            "repositories": [repo.id for repo in self.repositories],
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Search order:

    1. ``explicit_path`` (from ``--config`` or ``RELVER_CONFIG``)
    2. ``relver.toml`` in current directory
    3. ``pyproject.toml`` with ``[tool.relver]`` section in current directory

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    relver_toml = cwd / "relver.toml"
    if relver_toml.is_file():
        logger.debug("Found relver.toml: %s", relver_toml)
        return relver_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_relver_section(pyproject_toml):
        logger.debug("Found [tool.relver] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_relver_section(path: Path) -> bool:
    """Check if pyproject.toml contains a [tool.relver] section.

    Parse errors are ignored so that a broken pyproject.toml does not
    block auto-discovery.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return "relver" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> RelverConfig:
    """Load and validate relver configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`RelverConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return RelverConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("relver", {})
    else:
        section = raw.get("relver", {})

    if not section:
        logger.debug("Config file found but no relver section; using defaults")
        return RelverConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


_KNOWN_KEYS = {
    "property_prefix",
    "local_repository",
    "offline",
    "timeout",
    "max_retries",
    "verify_ssl",
    "repositories",
}

_KNOWN_REPOSITORY_KEYS = {"id", "url", "releases", "snapshots"}


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> RelverConfig:
    """Parse and validate the ``[relver]`` or ``[tool.relver]`` table.

    Raises:
        ConfigError: Unknown keys or incorrect types.
    """
    config = RelverConfig()

    unknown = set(section.keys()) - _KNOWN_KEYS
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    if "property_prefix" in section:
        val = section["property_prefix"]
        if not isinstance(val, str) or not val.strip():
            raise ConfigError(
                "property_prefix must be a non-empty string",
                config_path=config_path,
                option="property_prefix",
            )
        config.property_prefix = val.strip()

    if "local_repository" in section:
        val = section["local_repository"]
        if not isinstance(val, str) or not val:
            raise ConfigError(
                "local_repository must be a non-empty string",
                config_path=config_path,
                option="local_repository",
            )
        config.local_repository = Path(val).expanduser()

    if "offline" in section:
        config.offline = _expect_bool(section, "offline", config_path)

    if "timeout" in section:
        val = section["timeout"]
        if isinstance(val, bool) or not isinstance(val, int) or val <= 0:
            raise ConfigError(
                "timeout must be a positive integer",
                config_path=config_path,
                option="timeout",
            )
        config.timeout = val

    if "max_retries" in section:
        val = section["max_retries"]
        if isinstance(val, bool) or not isinstance(val, int) or val < 0:
            raise ConfigError(
                "max_retries must be a non-negative integer",
                config_path=config_path,
                option="max_retries",
            )
        config.max_retries = val

    if "verify_ssl" in section:
        config.verify_ssl = _expect_bool(section, "verify_ssl", config_path)

    if "repositories" in section:
        config.repositories = _parse_repositories(section["repositories"], config_path)

    return config


def _expect_bool(table: Dict[str, Any], key: str, config_path: str) -> bool:
    val = table[key]
    if not isinstance(val, bool):
        raise ConfigError(
            f"{key} must be a boolean, got {type(val).__name__}",
            config_path=config_path,
            option=key,
        )
    return val


def _parse_repositories(value: Any, config_path: str) -> List[Repository]:
    """Validate the ``repositories`` array of tables."""
    if not isinstance(value, list):
        raise ConfigError(
            "repositories must be an array of tables",
            config_path=config_path,
            option="repositories",
        )

    repositories: List[Repository] = []
    seen_ids = set()

    for index, entry in enumerate(value):
        option = f"repositories[{index}]"
        if not isinstance(entry, dict):
            raise ConfigError(
                f"{option} must be a table",
                config_path=config_path,
                option=option,
            )

        unknown = set(entry.keys()) - _KNOWN_REPOSITORY_KEYS
        if unknown:
            raise ConfigError(
                f"Unknown keys in {option}: {', '.join(sorted(unknown))}",
                config_path=config_path,
                option=option,
            )

        repo_id = entry.get("id")
        url = entry.get("url")
        if not isinstance(repo_id, str) or not repo_id:
            raise ConfigError(
                f"{option}.id must be a non-empty string",
                config_path=config_path,
                option=f"{option}.id",
            )
        if not isinstance(url, str) or not url.startswith(("http://", "https://")):
            raise ConfigError(
                f"{option}.url must be an http(s) URL",
                config_path=config_path,
                option=f"{option}.url",
            )
        if repo_id in seen_ids:
            raise ConfigError(
                f"Duplicate repository id: {repo_id}",
                config_path=config_path,
                option=f"{option}.id",
            )
        seen_ids.add(repo_id)

        releases = _expect_bool(entry, "releases", config_path) if "releases" in entry else True
        snapshots = _expect_bool(entry, "snapshots", config_path) if "snapshots" in entry else False

        repositories.append(
            Repository(id=repo_id, url=url, releases=releases, snapshots=snapshots)
        )

    return repositories
