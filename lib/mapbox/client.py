"""
Mapbox API Base Client

This module provides the MapboxClient class that holds the access token and
performs the HTTP round trips shared by the geocoding and directions modules.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from .constants import (
    ACCESS_TOKEN_PARAM,
    API_BASE_URL,
    CONTENT_TYPE_JSON,
    DEFAULT_TIMEOUT,
    HTTP_GET,
    HTTP_POST,
    VERSION,
)
from .exceptions import (
    DecodeError,
    MapboxError,
    MissingTokenError,
    NetworkError,
    parseApiError,
)

logger = logging.getLogger(__name__)


class MapboxClient:
    """Synchronous base client for the Mapbox web APIs.

    Holds the access token and a lazily created ``httpx.Client``. Every call
    to :meth:`query` or :meth:`queryWithBody` is exactly one HTTP request;
    nothing is retried.

    Example:
        >>> with MapboxClient(os.environ["MAPBOX_TOKEN"]) as client:
        ...     geocode = GeocodeClient(client)
        ...     result = geocode.forward("2 Lincoln Memorial Circle NW")

    Args:
        accessToken: Mapbox access token
        baseUrl: Base URL for the API (default: https://api.mapbox.com)
        requestTimeout: Request timeout in seconds (default: 30)
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests

    Raises:
        MissingTokenError: If accessToken is empty
    """

    __slots__ = (
        "accessToken",
        "baseUrl",
        "requestTimeout",
        "_transport",
        "_httpClient",
    )

    def __init__(
        self,
        accessToken: str,
        baseUrl: str = API_BASE_URL,
        requestTimeout: int = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if not accessToken or not accessToken.strip():
            raise MissingTokenError()

        self.accessToken = accessToken.strip()
        self.baseUrl = baseUrl.rstrip("/")
        self.requestTimeout = requestTimeout
        self._transport = transport
        self._httpClient: Optional[httpx.Client] = None

        logger.debug(f"MapboxClient initialized for {self.baseUrl}")

    def __enter__(self) -> "MapboxClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _getHttpClient(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._httpClient is None or self._httpClient.is_closed:
            self._httpClient = httpx.Client(
                base_url=self.baseUrl,
                timeout=httpx.Timeout(self.requestTimeout),
                headers={
                    "User-Agent": f"mapbox-client-python/{VERSION}",
                    "Accept": CONTENT_TYPE_JSON,
                },
                transport=self._transport,
            )
            logger.debug("Created new HTTP client")

        return self._httpClient

    def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._httpClient is not None and not self._httpClient.is_closed:
            self._httpClient.close()
            logger.debug("HTTP client closed")

    def query(self, path: str, queryParams: Optional[Dict[str, Any]] = None) -> Any:
        """Issue a GET request and return the decoded JSON body.

        Args:
            path: API path relative to the base URL, e.g. "search/geocode/v6/forward"
            queryParams: Query parameters; the access token is added automatically

        Returns:
            Decoded JSON response

        Raises:
            UnauthorizedError: On HTTP 401
            RateLimitError: On HTTP 429
            APIError: On any other non-success status
            NetworkError: On transport failure
            DecodeError: If the body is not valid JSON
        """
        return self._makeRequest(HTTP_GET, path, queryParams)

    def queryWithBody(self, path: str, queryParams: Optional[Dict[str, Any]], body: Any) -> Any:
        """Issue a POST request with a JSON body and return the decoded JSON body.

        Raises the same errors as :meth:`query`.
        """
        return self._makeRequest(HTTP_POST, path, queryParams, body)

    def _makeRequest(
        self,
        method: str,
        path: str,
        queryParams: Optional[Dict[str, Any]],
        body: Any = None,
    ) -> Any:
        """Single point for all HTTP requests with error handling and authentication."""
        params: Dict[str, Any] = dict(queryParams or {})
        url = "/" + path.lstrip("/")

        # Log request without the token
        logger.debug(f"Making {method} request to {url} with params: {params}")
        params[ACCESS_TOKEN_PARAM] = self.accessToken

        kwargs: Dict[str, Any] = {"params": params}
        if method == HTTP_POST:
            kwargs["json"] = body

        try:
            response = self._getHttpClient().request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"Request timeout: {type(e).__name__}#{e}")
            raise NetworkError(f"Request timeout: {e}") from e
        except httpx.RequestError as e:
            logger.error(f"Network error: {type(e).__name__}#{e}")
            raise NetworkError(f"Network error: {e}") from e

        if response.is_success:
            try:
                data = response.json()
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.error(f"Failed to parse JSON response: {e}")
                raise DecodeError(f"Invalid JSON response: {e}", response.status_code) from e
            logger.debug(f"Request successful: {method} {url} {response.status_code}")
            return data

        try:
            errorData = response.json()
        except ValueError:
            errorData = None
        if not isinstance(errorData, dict):
            errorData = {"message": response.text or None}

        error: MapboxError = parseApiError(response.status_code, errorData)
        logger.warning(f"API error: {response.status_code} {errorData}")
        raise error
