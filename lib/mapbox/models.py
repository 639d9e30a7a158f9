"""
Shared Mapbox data models.

This module contains the location primitives and the GeoJSON containers
shared by the geocoding and directions modules: Location, BoundingBox,
Geometry, Feature and FeatureCollection.
"""

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .constants import FEATURE_COLLECTION_TYPE


def _encodeValue(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class BaseRequestOpts:
    """Mixin turning dataclass fields into query parameters."""

    __slots__ = ()

    def toQueryParams(self) -> Dict[str, str]:
        """Return set fields as API query parameters, unset fields are left out."""
        ret: Dict[str, str] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if value is not None:
                ret[f.name] = _encodeValue(value)
        return ret


def formatCoordinate(value: float) -> str:
    """Format coordinate as the shortest exact fixed-point decimal (no exponent)."""
    ret = format(Decimal(repr(float(value))), "f")
    if "." in ret:
        ret = ret.rstrip("0").rstrip(".")
    if ret in ("", "-0"):
        return "0"
    return ret


@dataclass(slots=True, frozen=True)
class Location:
    """
    Geographic point as a (longitude, latitude) pair
    """

    longitude: float
    """Longitude in degrees, -180..180"""
    latitude: float
    """Latitude in degrees, -90..90"""

    def __post_init__(self) -> None:
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")

    def toString(self) -> str:
        """Return ``"lon,lat"`` as used in directions paths."""
        return f"{formatCoordinate(self.longitude)},{formatCoordinate(self.latitude)}"

    @classmethod
    def from_list(cls, data: List[float]) -> "Location":
        """Create Location from a GeoJSON ``[lon, lat]`` array."""
        return cls(longitude=float(data[0]), latitude=float(data[1]))


@dataclass(slots=True, frozen=True)
class BoundingBox:
    """
    Bounding box as (west, south, east, north)
    """

    west: float
    south: float
    east: float
    north: float

    def toString(self) -> str:
        return f"{self.west:f},{self.south:f},{self.east:f},{self.north:f}"

    @classmethod
    def from_list(cls, data: List[float]) -> "BoundingBox":
        if len(data) != 4:
            raise ValueError(f"Bounding box needs 4 values, got {len(data)}")
        return cls(*(float(v) for v in data))


@dataclass(slots=True)
class Geometry:
    """
    GeoJSON geometry
    """

    type: str
    """Geometry type, e.g. "Point" or "LineString"."""
    coordinates: Any
    """Coordinates array, nesting depends on type"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Geometry":
        """Create Geometry instance from API response dictionary."""
        return cls(type=data.get("type", ""), coordinates=data.get("coordinates", []))


@dataclass(slots=True)
class RoutablePoint:
    """
    Routable entrance point of a feature (v6)
    """

    name: str
    longitude: float
    latitude: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoutablePoint":
        return cls(
            name=data.get("name", ""),
            longitude=data.get("longitude", 0.0),
            latitude=data.get("latitude", 0.0),
        )


@dataclass(slots=True)
class Coordinates:
    """
    Coordinate details from ``properties.coordinates`` (v6)
    """

    longitude: float
    latitude: float
    accuracy: Optional[str] = None
    """Point accuracy such as "rooftop" or "interpolated"."""
    routable_points: List[RoutablePoint] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Coordinates":
        return cls(
            longitude=data.get("longitude", 0.0),
            latitude=data.get("latitude", 0.0),
            accuracy=data.get("accuracy"),
            routable_points=[RoutablePoint.from_dict(p) for p in data.get("routable_points", None) or []],
        )


@dataclass(slots=True)
class MatchCode:
    """
    Smart Address Match result from ``properties.match_code`` (v6)

    Each component is one of "matched", "unmatched", "plausible", "not_applicable" or "inferred".
    """

    address_number: Optional[str] = None
    street: Optional[str] = None
    postcode: Optional[str] = None
    place: Optional[str] = None
    region: Optional[str] = None
    locality: Optional[str] = None
    country: Optional[str] = None
    confidence: Optional[str] = None
    """Overall confidence: "exact", "high", "medium" or "low"."""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchCode":
        return cls(
            address_number=data.get("address_number"),
            street=data.get("street"),
            postcode=data.get("postcode"),
            place=data.get("place"),
            region=data.get("region"),
            locality=data.get("locality"),
            country=data.get("country"),
            confidence=data.get("confidence"),
        )


@dataclass(slots=True)
class Feature:
    """
    GeoJSON feature returned by the geocoding API
    """

    type: str
    """GeoJSON type tag, "Feature"."""
    geometry: Geometry
    properties: Dict[str, Any] = field(default_factory=dict)
    """Feature properties (name, place_formatted, feature_type, context, ...)"""
    id: Optional[str] = None
    api_kwargs: Dict[str, Any] = field(default_factory=dict)
    """Raw API response data"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Feature":
        """Create Feature instance from API response dictionary."""
        return cls(
            type=data.get("type", "Feature"),
            geometry=Geometry.from_dict(data.get("geometry", None) or {}),
            properties=data.get("properties", None) or {},
            id=data.get("id"),
            api_kwargs={k: v for k, v in data.items() if k not in {"type", "geometry", "properties", "id"}},
        )

    @property
    def name(self) -> Optional[str]:
        return self.properties.get("name")

    @property
    def placeFormatted(self) -> Optional[str]:
        return self.properties.get("place_formatted")

    @property
    def featureType(self) -> Optional[str]:
        return self.properties.get("feature_type")

    def getCoordinates(self) -> Optional[Coordinates]:
        data = self.properties.get("coordinates")
        if not isinstance(data, dict):
            return None
        return Coordinates.from_dict(data)

    def getMatchCode(self) -> Optional[MatchCode]:
        """Get Smart Address Match info, present for structured and address queries."""
        data = self.properties.get("match_code")
        if not isinstance(data, dict):
            return None
        return MatchCode.from_dict(data)


@dataclass(slots=True)
class FeatureCollection:
    """
    GeoJSON feature collection, the top level of a geocoding response
    """

    type: str = FEATURE_COLLECTION_TYPE
    features: List[Feature] = field(default_factory=list)
    """Features in provider order, best match first"""
    attribution: Optional[str] = None
    api_kwargs: Dict[str, Any] = field(default_factory=dict)
    """Raw API response data"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeatureCollection":
        """Create FeatureCollection instance from API response dictionary.

        Raises:
            ValueError: If ``data`` is not shaped like a feature collection
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected JSON object, got {type(data).__name__}")
        features = data.get("features")
        if not isinstance(features, list):
            raise ValueError("Response has no 'features' array")

        return cls(
            type=data.get("type", FEATURE_COLLECTION_TYPE),
            features=[Feature.from_dict(f) for f in features],
            attribution=data.get("attribution"),
            api_kwargs={k: v for k, v in data.items() if k not in {"type", "features", "attribution"}},
        )
