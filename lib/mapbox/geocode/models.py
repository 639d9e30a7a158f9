"""
Mapbox Geocoding v6 request models.

Options objects are flat dataclasses whose field names match the API query
parameter names. Fields left as ``None`` are omitted from the request.

Example:
    opts = ForwardRequestOpts(country="us", limit=5, types="address", language="en")
    opts.toQueryParams()
    # {"country": "us", "types": "address", "limit": "5", "language": "en"}
"""

from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any, Dict, List, Optional

from ..models import BaseRequestOpts, FeatureCollection


class FeatureType(StrEnum):
    """Geocoding feature types, used for the ``types`` filter."""

    COUNTRY = "country"
    REGION = "region"
    POSTCODE = "postcode"
    DISTRICT = "district"
    PLACE = "place"
    LOCALITY = "locality"
    NEIGHBORHOOD = "neighborhood"
    STREET = "street"
    BLOCK = "block"
    """Japanese addresses only"""
    ADDRESS = "address"
    SECONDARY_ADDRESS = "secondary_address"
    """US only"""


@dataclass(slots=True)
class ForwardRequestOpts(BaseRequestOpts):
    """Options for forward geocoding of free-form text."""

    country: Optional[str] = None
    """Comma-separated ISO 3166 alpha-2 country codes"""
    proximity: Optional[str] = None
    """Point to bias results toward as lon,lat, or ip"""
    types: Optional[str] = None
    """Comma-separated feature types"""
    autocomplete: Optional[bool] = None
    bbox: Optional[str] = None
    """Bounding box as minLon,minLat,maxLon,maxLat"""
    limit: Optional[int] = None
    """Max results, 1-10"""
    language: Optional[str] = None
    worldview: Optional[str] = None
    format: Optional[str] = None
    """Response format: geojson (default) or v5"""
    permanent: Optional[bool] = None
    """Results may be stored permanently"""


@dataclass(slots=True)
class StructuredInputOpts(BaseRequestOpts):
    """Options for forward geocoding with the address split into components."""

    address_line1: Optional[str] = None
    address_number: Optional[str] = None
    street: Optional[str] = None
    block: Optional[str] = None
    place: Optional[str] = None
    region: Optional[str] = None
    postcode: Optional[str] = None
    locality: Optional[str] = None
    neighborhood: Optional[str] = None
    country: Optional[str] = None
    autocomplete: Optional[bool] = None
    bbox: Optional[str] = None
    format: Optional[str] = None
    language: Optional[str] = None
    limit: Optional[int] = None
    proximity: Optional[str] = None
    types: Optional[str] = None
    worldview: Optional[str] = None
    permanent: Optional[bool] = None


@dataclass(slots=True)
class ReverseRequestOpts(BaseRequestOpts):
    """Options for reverse geocoding."""

    types: Optional[str] = None
    limit: Optional[int] = None
    """Max results; only honoured together with a single ``types`` value"""
    country: Optional[str] = None
    language: Optional[str] = None
    worldview: Optional[str] = None
    permanent: Optional[bool] = None


@dataclass(slots=True)
class BatchRequestOpts(BaseRequestOpts):
    """Query options for the batch endpoint itself."""

    permanent: Optional[bool] = None


@dataclass(slots=True)
class BatchQuery:
    """
    Single query inside a batch request.

    Set ``q`` for a forward query, the address components for a structured
    query, or ``longitude``/``latitude`` for a reverse query.
    """

    # Forward geocoding
    q: Optional[str] = None
    types: Optional[str] = None
    bbox: Optional[str] = None
    limit: Optional[int] = None
    country: Optional[str] = None
    language: Optional[str] = None

    # Structured input
    address_line1: Optional[str] = None
    address_number: Optional[str] = None
    street: Optional[str] = None
    block: Optional[str] = None
    place: Optional[str] = None
    region: Optional[str] = None
    postcode: Optional[str] = None
    locality: Optional[str] = None
    neighborhood: Optional[str] = None

    # Reverse geocoding
    longitude: Optional[float] = None
    latitude: Optional[float] = None

    # Common
    autocomplete: Optional[bool] = None
    proximity: Optional[str] = None
    worldview: Optional[str] = None
    format: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON object for the request body, omitting unset fields."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


BatchResponse = List[FeatureCollection]
