"""
Mapbox Geocoding v6 API

Example usage:
    from lib.mapbox import MapboxClient
    from lib.mapbox.geocode import FeatureType, ForwardRequestOpts, GeocodeClient

    geocode = GeocodeClient(MapboxClient("your_token"))

    # Forward geocoding
    result = geocode.forward("2 Lincoln Memorial Circle NW", ForwardRequestOpts(limit=1))

    # Forward geocoding filtered by type
    result = geocode.forwardWithTypes("Central Park", [FeatureType.ADDRESS, FeatureType.PLACE])
"""

from .client import GeocodeClient, bboxToString, proximityToString, typesToString
from .models import (
    BatchQuery,
    BatchRequestOpts,
    BatchResponse,
    FeatureType,
    ForwardRequestOpts,
    ReverseRequestOpts,
    StructuredInputOpts,
)

__all__ = [
    "GeocodeClient",
    "FeatureType",
    "ForwardRequestOpts",
    "StructuredInputOpts",
    "ReverseRequestOpts",
    "BatchQuery",
    "BatchRequestOpts",
    "BatchResponse",
    "typesToString",
    "proximityToString",
    "bboxToString",
]
