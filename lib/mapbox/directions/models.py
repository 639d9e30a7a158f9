"""
Mapbox Directions v5 data models.

Request options, routing profiles and the decoded route response.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Dict, List, Optional

from ..models import BaseRequestOpts, Geometry


class RoutingProfile(StrEnum):
    """Routing profiles, used as the first path segment of a directions request."""

    DRIVING = "mapbox/driving"
    DRIVING_TRAFFIC = "mapbox/driving-traffic"
    """Driving with live traffic"""
    WALKING = "mapbox/walking"
    CYCLING = "mapbox/cycling"


class ResponseCode(StrEnum):
    """Value of the ``code`` field of a directions response."""

    OK = "Ok"
    NO_ROUTE = "NoRoute"
    NO_SEGMENT = "NoSegment"
    PROFILE_NOT_FOUND = "ProfileNotFound"
    INVALID_INPUT = "InvalidInput"


class GeometryType(StrEnum):
    GEOJSON = "geojson"
    POLYLINE = "polyline"
    POLYLINE6 = "polyline6"


class Overview(StrEnum):
    FULL = "full"
    SIMPLIFIED = "simplified"
    NONE = "false"


@dataclass(slots=True)
class DirectionsRequestOpts(BaseRequestOpts):
    """Options for a directions request.

    Per-waypoint lists (``radiuses``, ``bearings``, ``waypoint_names``) are
    semicolon-separated strings with one entry per location.
    """

    alternatives: Optional[bool] = None
    geometries: Optional[str] = None
    """One of GeometryType, polyline if unset"""
    overview: Optional[str] = None
    """One of Overview, simplified if unset"""
    radiuses: Optional[str] = None
    steps: Optional[bool] = None
    continue_straight: Optional[bool] = None
    bearings: Optional[str] = None
    annotations: Optional[str] = None
    """Comma-separated: duration, distance, speed, congestion"""
    language: Optional[str] = None
    banner_instructions: Optional[bool] = None
    voice_instructions: Optional[bool] = None
    waypoint_names: Optional[str] = None
    exclude: Optional[str] = None
    """Comma-separated road classes to avoid: toll, motorway, ferry"""


def _decodeGeometry(data: Any) -> Any:
    # geojson geometries are objects, polyline ones are encoded strings
    if isinstance(data, dict):
        return Geometry.from_dict(data)
    return data


@dataclass(slots=True)
class Waypoint:
    """
    Input location snapped to the road network
    """

    name: str
    """Name of the road the waypoint snapped to"""
    location: List[float]
    """Snapped [lon, lat]"""
    distance: Optional[float] = None
    """Distance in meters from the input location"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Waypoint":
        return cls(
            name=data.get("name", ""),
            location=data.get("location", []),
            distance=data.get("distance"),
        )


@dataclass(slots=True)
class RouteLeg:
    """
    Route between two consecutive waypoints
    """

    distance: float
    duration: float
    summary: str = ""
    steps: List[Dict[str, Any]] = field(default_factory=list)
    """Turn-by-turn steps, only present when requested"""
    annotation: Dict[str, Any] = field(default_factory=dict)
    api_kwargs: Dict[str, Any] = field(default_factory=dict)
    """Raw API response data"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RouteLeg":
        return cls(
            distance=data.get("distance", 0.0),
            duration=data.get("duration", 0.0),
            summary=data.get("summary", ""),
            steps=data.get("steps", None) or [],
            annotation=data.get("annotation", None) or {},
            api_kwargs={
                k: v for k, v in data.items() if k not in {"distance", "duration", "summary", "steps", "annotation"}
            },
        )


@dataclass(slots=True)
class Route:
    """
    Route through all waypoints
    """

    distance: float
    """Meters"""
    duration: float
    """Seconds"""
    weight: Optional[float] = None
    weight_name: Optional[str] = None
    geometry: Any = None
    """Geometry object for geojson, encoded string for polyline"""
    legs: List[RouteLeg] = field(default_factory=list)
    api_kwargs: Dict[str, Any] = field(default_factory=dict)
    """Raw API response data"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Route":
        """Create Route instance from API response dictionary."""
        return cls(
            distance=data.get("distance", 0.0),
            duration=data.get("duration", 0.0),
            weight=data.get("weight"),
            weight_name=data.get("weight_name"),
            geometry=_decodeGeometry(data.get("geometry")),
            legs=[RouteLeg.from_dict(leg) for leg in data.get("legs", None) or []],
            api_kwargs={
                k: v
                for k, v in data.items()
                if k not in {"distance", "duration", "weight", "weight_name", "geometry", "legs"}
            },
        )


@dataclass(slots=True)
class DirectionsResponse:
    """
    Response of a directions request
    """

    code: str
    """Status code, see ResponseCode"""
    routes: List[Route] = field(default_factory=list)
    """Routes, best first; more than one only with alternatives"""
    waypoints: List[Waypoint] = field(default_factory=list)
    uuid: Optional[str] = None
    message: Optional[str] = None
    """Error details when code is not Ok"""
    api_kwargs: Dict[str, Any] = field(default_factory=dict)
    """Raw API response data"""

    @property
    def isOk(self) -> bool:
        return self.code == ResponseCode.OK

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DirectionsResponse":
        """Create DirectionsResponse instance from API response dictionary.

        Raises:
            ValueError: If ``data`` has no ``code`` field
        """
        if not isinstance(data, dict) or "code" not in data:
            raise ValueError("Response has no 'code' field")

        return cls(
            code=data["code"],
            routes=[Route.from_dict(r) for r in data.get("routes", None) or []],
            waypoints=[Waypoint.from_dict(w) for w in data.get("waypoints", None) or []],
            uuid=data.get("uuid"),
            message=data.get("message"),
            api_kwargs={
                k: v for k, v in data.items() if k not in {"code", "routes", "waypoints", "uuid", "message"}
            },
        )
