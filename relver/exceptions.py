"""
Custom exception hierarchy for relver.

This module defines structured exception types used across relver.
All exceptions inherit from :class:`RelverError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.

"No released version found" is deliberately absent: it is a normal
outcome, not an error.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class RelverError(Exception):
    """Base exception for all relver errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ConfigError(RelverError):
    """Raised when a configuration file is missing, malformed or invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file involved.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class CoordinatesError(RelverError):
    """Raised when artifact coordinates cannot be parsed.

    Args:
        message: Error description.
        coordinates: The raw coordinates string.
    """

    __slots__ = ("coordinates",)

    def __init__(self, message: str, *, coordinates: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "coordinates", coordinates)

        super().__init__(message, details)

        self.coordinates = coordinates


class NetworkError(RelverError):
    """Raised when HTTP or network operations fail.

    Args:
        message: Error description.
        url: URL being accessed.
        status_code: HTTP status code, if available.
        response_body: Raw response body, truncated for safety.
    """

    __slots__ = ("url", "status_code", "response_body")

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "url", url)
        _add_if(details, "status_code", status_code)

        if response_body is not None:
            details["response"] = _truncate(response_body)

        super().__init__(message, details)

        self.url = url
        self.status_code = status_code
        self.response_body = response_body


class RepositoryError(NetworkError):
    """Raised for failures reported by a package repository.

    Args:
        message: Error description.
        repository_id: Identifier of the repository involved.
        **kwargs: Additional arguments forwarded to ``NetworkError``.
    """

    __slots__ = ("repository_id",)

    def __init__(
        self,
        message: str,
        *,
        repository_id: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)

        self.repository_id = repository_id
        if repository_id is not None:
            self.details["repository"] = repository_id


class MetadataUnavailable(RelverError):
    """Raised when version metadata could not be retrieved.

    Covers transfer failures and unreadable metadata documents. Callers
    treat it as "no versions known" rather than a fatal error.

    Args:
        message: Error description.
        artifact: ``group:artifact`` string of the artifact queried.
        source: Location that failed (URL or path).
        original_error: Underlying exception, if any.
    """

    __slots__ = ("artifact", "source", "original_error")

    def __init__(
        self,
        message: str,
        *,
        artifact: Optional[str] = None,
        source: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "artifact", artifact)
        _add_if(details, "source", source)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.artifact = artifact
        self.source = source
        self.original_error = original_error


class FileOperationError(RelverError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/write/delete).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
