"""
Mapbox API Constants

This module contains shared constants for the Mapbox API client library.
"""

from typing import Final

VERSION: Final[str] = "0.1.0"

# API Configuration
API_BASE_URL: Final[str] = "https://api.mapbox.com"
DEFAULT_TIMEOUT: Final[int] = 30

# Authentication
ACCESS_TOKEN_PARAM: Final[str] = "access_token"

# Content Types
CONTENT_TYPE_JSON: Final[str] = "application/json"

# HTTP Methods
HTTP_GET: Final[str] = "GET"
HTTP_POST: Final[str] = "POST"

# Geocoding v6
GEOCODE_API_NAME: Final[str] = "search"
GEOCODE_API_VERSION: Final[str] = "geocode/v6"
GEOCODE_BATCH_LIMIT: Final[int] = 1000

# Directions v5
DIRECTIONS_API_NAME: Final[str] = "directions"
DIRECTIONS_API_VERSION: Final[str] = "v5"

# GeoJSON
FEATURE_COLLECTION_TYPE: Final[str] = "FeatureCollection"
