"""
Mapbox API Exceptions

This module contains custom exception classes for handling Mapbox API errors.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class MapboxError(Exception):
    """Base exception class for all Mapbox API errors.

    Attributes:
        message: Human-readable error message
        statusCode: HTTP status code (if available)
        response: Raw API response data (if available)
    """

    def __init__(
        self,
        message: str,
        statusCode: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.statusCode = statusCode
        self.response = response
        logger.debug(f"MapboxError: {message} (status: {statusCode})")

    def __str__(self) -> str:
        if self.statusCode:
            return f"{self.message} (status: {self.statusCode})"
        return self.message


class MissingTokenError(MapboxError):
    """Raised when the client is created without an access token.

    No network call is made when this is raised.
    """

    def __init__(self, message: str = "Mapbox access token cannot be empty") -> None:
        super().__init__(message)


class UnauthorizedError(MapboxError):
    """Raised on HTTP 401: the access token is invalid, expired or lacks scopes."""

    def __init__(
        self,
        message: str = "Mapbox API error unauthorized",
        statusCode: Optional[int] = 401,
        response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, statusCode, response)


class RateLimitError(MapboxError):
    """Raised on HTTP 429: the account rate limit has been exceeded."""

    def __init__(
        self,
        message: str = "Mapbox API error api rate limit exceeded",
        statusCode: Optional[int] = 429,
        response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, statusCode, response)


class APIError(MapboxError):
    """Raised when the API returns any other non-success status."""


class NetworkError(MapboxError):
    """Raised when the request could not be sent or no response was received.

    This includes connection failures, DNS resolution failures and timeouts.
    """

    def __init__(self, message: str = "Network error occurred.") -> None:
        super().__init__(message)


class DecodeError(MapboxError):
    """Raised when a response body is not JSON or not shaped as expected."""


def parseApiError(statusCode: int, responseData: Dict[str, Any]) -> MapboxError:
    """Map a non-success HTTP response to the matching exception.

    Args:
        statusCode: HTTP status code
        responseData: Parsed JSON body (Mapbox sends ``{"message": ...}``)

    Returns:
        Exception instance to raise
    """
    message = responseData.get("message")

    if statusCode == 401:
        return UnauthorizedError(message or "Mapbox API error unauthorized", statusCode, responseData)
    elif statusCode == 429:
        return RateLimitError(message or "Mapbox API error api rate limit exceeded", statusCode, responseData)

    return APIError(message or "Unknown API error", statusCode, responseData)
