"""
Mapbox Directions v5 API

Example usage:
    from lib.mapbox import Location, MapboxClient
    from lib.mapbox.directions import DirectionsClient, RoutingProfile

    directions = DirectionsClient(MapboxClient("your_token"))
    res = directions.getDirections([Location(-122.42, 37.78), Location(-77.03, 38.91)], RoutingProfile.CYCLING)
"""

from .client import DirectionsClient
from .models import (
    DirectionsRequestOpts,
    DirectionsResponse,
    GeometryType,
    Overview,
    ResponseCode,
    Route,
    RouteLeg,
    RoutingProfile,
    Waypoint,
)

__all__ = [
    "DirectionsClient",
    "DirectionsRequestOpts",
    "DirectionsResponse",
    "GeometryType",
    "Overview",
    "ResponseCode",
    "Route",
    "RouteLeg",
    "RoutingProfile",
    "Waypoint",
]
