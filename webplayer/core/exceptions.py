"""
Core Exceptions - Custom exception classes for WebPlayer.

This module defines custom exception classes used throughout the
WebPlayer application for better error handling and user feedback.
"""

from enum import Enum
from typing import Optional, Any


class WebPlayerError(Exception):
    """Base exception class for all WebPlayer-specific errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        """
        Initialize WebPlayer error.

        Args:
            message: Human-readable error message
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(WebPlayerError):
    """Raised when configuration-related errors occur."""

    def __init__(self, message: str, config_path: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize configuration error.

        Args:
            message: Error description
            config_path: Path to the problematic configuration file
            details: Additional error context
        """
        super().__init__(message, details)
        self.config_path = config_path


class NetworkError(WebPlayerError):
    """Raised when network-related errors occur."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None, details: Optional[Any] = None):
        """
        Initialize network error.

        Args:
            message: Error description
            url: URL that caused the error
            status_code: HTTP status code if applicable
            details: Additional error context
        """
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class DecodeErrorKind(str, Enum):
    """Reasons a stream-link payload could not be decoded."""

    NO_MATCHING_SHAPE = "no_matching_shape"
    INVALID_JSON = "invalid_json"


class DecodeError(WebPlayerError):
    """Raised when an upstream JSON payload matches none of the known shapes."""

    def __init__(
        self,
        message: str,
        kind: DecodeErrorKind = DecodeErrorKind.NO_MATCHING_SHAPE,
        field_name: Optional[str] = None,
        details: Optional[Any] = None
    ):
        """
        Initialize decode error.

        Args:
            message: Error description
            kind: Failure category
            field_name: Logical field that could not be resolved
            details: Additional error context
        """
        super().__init__(message, details)
        self.kind = kind
        self.field_name = field_name


class ScrapeErrorKind(str, Enum):
    """Failure categories surfaced by the scrape pipeline."""

    INVALID_URL = "invalid_url"
    NETWORK_FAILURE = "network_failure"
    NO_DATA = "no_data"
    PARSING_ERROR = "parsing_error"


class ScrapeError(WebPlayerError):
    """Raised when a page cannot be fetched or parsed."""

    def __init__(
        self,
        message: str,
        kind: ScrapeErrorKind,
        url: Optional[str] = None,
        details: Optional[Any] = None
    ):
        """
        Initialize scrape error.

        Args:
            message: Error description
            kind: Failure category
            url: URL being scraped
            details: Additional error context
        """
        super().__init__(message, details)
        self.kind = kind
        self.url = url


class APIErrorKind(str, Enum):
    """Failure categories for upstream API clients."""

    INVALID_URL = "invalid_url"
    NETWORK_ERROR = "network_error"
    DECODING_ERROR = "decoding_error"
    INVALID_RESPONSE = "invalid_response"


class APIError(WebPlayerError):
    """Raised when an upstream JSON API call fails."""

    def __init__(
        self,
        message: str,
        kind: APIErrorKind,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Any] = None
    ):
        super().__init__(message, details)
        self.kind = kind
        self.url = url
        self.status_code = status_code


class SearchError(WebPlayerError):
    """Raised when search-related errors occur."""

    def __init__(self, message: str, query: Optional[str] = None, source: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize search error.

        Args:
            message: Error description
            query: Search query that caused the error
            source: Data source that failed
            details: Additional error context
        """
        super().__init__(message, details)
        self.query = query
        self.source = source


class StorageError(WebPlayerError):
    """Raised when the persistent key-value store cannot be read or written."""

    def __init__(self, message: str, path: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.path = path


# Export all exception classes
__all__ = [
    "WebPlayerError",
    "ConfigurationError",
    "NetworkError",
    "DecodeErrorKind",
    "DecodeError",
    "ScrapeErrorKind",
    "ScrapeError",
    "APIErrorKind",
    "APIError",
    "SearchError",
    "StorageError",
]
