"""
Mapbox API Client Library

This package provides a synchronous Python client for the Mapbox Geocoding v6
and Directions v5 APIs with typed request options, typed responses and typed
errors.

Example usage:
    from lib.mapbox import Location, MapboxClient
    from lib.mapbox.geocode import ForwardRequestOpts, GeocodeClient, ReverseRequestOpts

    with MapboxClient(os.environ["MAPBOX_TOKEN"]) as client:
        geocode = GeocodeClient(client)

        # Forward geocoding
        result = geocode.forward("2 Lincoln Memorial Circle NW", ForwardRequestOpts(limit=1))

        # Reverse geocoding
        result = geocode.reverse(Location(-77.036556, 38.897708), ReverseRequestOpts(types="address"))
"""

from .client import MapboxClient
from .exceptions import (
    APIError,
    DecodeError,
    MapboxError,
    MissingTokenError,
    NetworkError,
    RateLimitError,
    UnauthorizedError,
)
from .models import (
    BoundingBox,
    Coordinates,
    Feature,
    FeatureCollection,
    Geometry,
    Location,
    MatchCode,
    RoutablePoint,
)

__all__ = [
    # Client
    "MapboxClient",
    # Models
    "Location",
    "BoundingBox",
    "Geometry",
    "Feature",
    "FeatureCollection",
    "Coordinates",
    "RoutablePoint",
    "MatchCode",
    # Errors
    "MapboxError",
    "MissingTokenError",
    "UnauthorizedError",
    "RateLimitError",
    "APIError",
    "NetworkError",
    "DecodeError",
]
