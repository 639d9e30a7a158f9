"""
Mapbox Geocoding v6 Client

This module provides the GeocodeClient class for forward, structured, reverse
and batch geocoding, plus convenience wrappers taking typed filters.
See https://docs.mapbox.com/api/search/geocoding/ for API details.
"""

import dataclasses
import logging
from typing import Any, List, Optional, Sequence

from ..client import MapboxClient
from ..constants import GEOCODE_API_NAME, GEOCODE_API_VERSION, GEOCODE_BATCH_LIMIT
from ..exceptions import DecodeError
from ..models import BoundingBox, FeatureCollection, Location, formatCoordinate
from .models import (
    BatchQuery,
    BatchRequestOpts,
    BatchResponse,
    FeatureType,
    ForwardRequestOpts,
    ReverseRequestOpts,
    StructuredInputOpts,
)

logger = logging.getLogger(__name__)

GEOCODE_PATH = f"{GEOCODE_API_NAME}/{GEOCODE_API_VERSION}"


def typesToString(types: Sequence[FeatureType]) -> str:
    """Join feature types into the comma-separated ``types`` value.

    Example:
        >>> typesToString([FeatureType.ADDRESS, FeatureType.PLACE])
        'address,place'
    """
    return ",".join(str(t) for t in types)


def proximityToString(proximity: Sequence[float]) -> str:
    """Format a ``(longitude, latitude)`` pair, returns "" unless given exactly two values."""
    if len(proximity) != 2:
        return ""
    return f"{proximity[0]:f},{proximity[1]:f}"


def bboxToString(bbox: BoundingBox) -> str:
    return bbox.toString()


def _decodeCollection(data: Any) -> FeatureCollection:
    try:
        return FeatureCollection.from_dict(data)
    except (ValueError, TypeError, AttributeError) as e:
        logger.error(f"Unexpected geocoding response: {e}")
        raise DecodeError(f"Unexpected geocoding response: {e}") from e


class GeocodeClient:
    """Client for the Mapbox Geocoding v6 API.

    Every method is a single HTTP call through the shared
    :class:`~lib.mapbox.client.MapboxClient`; all errors are raised from it.

    Example:
        >>> geocode = GeocodeClient(MapboxClient(token))
        >>> result = geocode.forward("1600 Pennsylvania Avenue", ForwardRequestOpts(country="us", limit=1))
        >>> result.features[0].geometry.coordinates
        [-77.036547, 38.897675]
    """

    __slots__ = ("base",)

    def __init__(self, base: MapboxClient) -> None:
        self.base = base

    def forward(self, place: str, opts: Optional[ForwardRequestOpts] = None) -> FeatureCollection:
        """Forward geocoding: find locations from search text.

        Args:
            place: Free-form search text, e.g. an address or place name
            opts: Optional request options

        Returns:
            Matching features, best match first
        """
        params = (opts or ForwardRequestOpts()).toQueryParams()
        params["q"] = place

        return _decodeCollection(self.base.query(f"{GEOCODE_PATH}/forward", params))

    def forwardStructured(self, opts: StructuredInputOpts) -> FeatureCollection:
        """Forward geocoding with the address given as separate components.

        More accurate than free text when the components are already known.
        """
        return _decodeCollection(self.base.query(f"{GEOCODE_PATH}/forward", opts.toQueryParams()))

    def reverse(self, location: Location, opts: Optional[ReverseRequestOpts] = None) -> FeatureCollection:
        """Reverse geocoding: find place names for a location.

        Args:
            location: Point to look up
            opts: Optional request options

        Returns:
            Features containing the point, most specific first
        """
        params = (opts or ReverseRequestOpts()).toQueryParams()
        params["longitude"] = formatCoordinate(location.longitude)
        params["latitude"] = formatCoordinate(location.latitude)

        return _decodeCollection(self.base.query(f"{GEOCODE_PATH}/reverse", params))

    def batch(self, queries: Sequence[BatchQuery], opts: Optional[BatchRequestOpts] = None) -> BatchResponse:
        """Run several forward, structured or reverse queries in one request.

        The API accepts up to GEOCODE_BATCH_LIMIT queries per request; larger
        batches are sent as is and only logged.

        Returns:
            One feature collection per query, in query order

        Raises:
            DecodeError: If the response is not one collection per query
        """
        params = (opts or BatchRequestOpts()).toQueryParams()
        body = [q.to_dict() for q in queries]
        logger.debug(f"Sending batch of {len(body)} queries")
        if len(body) > GEOCODE_BATCH_LIMIT:
            logger.warning(f"Batch of {len(body)} queries exceeds API limit of {GEOCODE_BATCH_LIMIT}")

        data = self.base.queryWithBody(f"{GEOCODE_PATH}/batch", params, body)

        if not isinstance(data, dict) or not isinstance(data.get("batch"), list):
            logger.error("Batch response has no 'batch' array")
            raise DecodeError("Unexpected batch response: no 'batch' array")

        ret: List[FeatureCollection] = [_decodeCollection(item) for item in data["batch"]]
        if len(ret) != len(body):
            logger.error(f"Batch returned {len(ret)} results for {len(body)} queries")
            raise DecodeError(f"Batch returned {len(ret)} results for {len(body)} queries")
        return ret

    def forwardWithTypes(
        self, place: str, types: Sequence[FeatureType], opts: Optional[ForwardRequestOpts] = None
    ) -> FeatureCollection:
        opts = dataclasses.replace(opts) if opts is not None else ForwardRequestOpts()
        if types:
            opts.types = typesToString(types)
        return self.forward(place, opts)

    def forwardWithProximity(
        self, place: str, proximity: Sequence[float], opts: Optional[ForwardRequestOpts] = None
    ) -> FeatureCollection:
        """Forward geocoding biased toward a ``(longitude, latitude)`` pair."""
        opts = dataclasses.replace(opts) if opts is not None else ForwardRequestOpts()
        if len(proximity) == 2:
            opts.proximity = proximityToString(proximity)
        return self.forward(place, opts)

    def forwardWithBBox(
        self, place: str, bbox: BoundingBox, opts: Optional[ForwardRequestOpts] = None
    ) -> FeatureCollection:
        opts = dataclasses.replace(opts) if opts is not None else ForwardRequestOpts()
        opts.bbox = bboxToString(bbox)
        return self.forward(place, opts)

    def reverseWithTypes(
        self, location: Location, types: Sequence[FeatureType], opts: Optional[ReverseRequestOpts] = None
    ) -> FeatureCollection:
        opts = dataclasses.replace(opts) if opts is not None else ReverseRequestOpts()
        if types:
            opts.types = typesToString(types)
        return self.reverse(location, opts)
