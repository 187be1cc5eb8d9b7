"""
Geocoding Exceptions

This module contains the exception hierarchy raised by geocoding provider clients.
Every failure of a geocoding call surfaces as exactly one GeocodingError subclass.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Base exception class for all geocoding errors, dood!

    Attributes:
        message: Human-readable error message
        provider: Name of the provider that produced the error (if known)
    """

    def __init__(self, message: str, provider: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider
        logger.debug(f"{type(self).__name__}: {message} (provider: {provider})")

    def __str__(self) -> str:
        if self.provider:
            return f"[{self.provider}] {self.message}"
        return self.message


class InvalidQueryError(GeocodingError):
    """Raised when caller input is malformed.

    Always raised before any network I/O happens:
    - empty forward address
    - latitude outside [-90, 90] or longitude outside [-180, 180]
    - non-positive result limit or malformed country code
    """


class NetworkError(GeocodingError):
    """Raised on transport-level failure (DNS, connection, TLS, timeout)."""


class GeocodingCancelledError(NetworkError):
    """Raised when an in-flight request was aborted by the caller."""

    def __init__(self, message: str = "Request cancelled", provider: Optional[str] = None) -> None:
        super().__init__(message, provider)


class ProviderError(GeocodingError):
    """Raised when the provider answers with a non-success HTTP status.

    Attributes:
        status: HTTP status code
        body: Raw response body, kept for diagnostics
    """

    def __init__(self, status: int, body: str, provider: Optional[str] = None, message: Optional[str] = None) -> None:
        self.status = status
        self.body = body
        super().__init__(message or f"HTTP {status}", provider)


class AuthenticationError(ProviderError):
    """Raised on 401/403: API key missing, invalid or disabled."""


class QuotaExceededError(ProviderError):
    """Raised on 402/429: request quota or rate limit exceeded.

    Retrying is the caller's decision, see RetryPolicy.
    """


class DecodeError(GeocodingError):
    """Raised when the response body is not JSON or does not match the expected schema."""
