"""
Mapbox Directions v5 Client

See https://docs.mapbox.com/api/navigation/directions/ for API details.
"""

import logging
from typing import Optional, Sequence

from ..client import MapboxClient
from ..constants import DIRECTIONS_API_NAME, DIRECTIONS_API_VERSION
from ..exceptions import DecodeError
from ..models import Location
from .models import DirectionsRequestOpts, DirectionsResponse, RoutingProfile

logger = logging.getLogger(__name__)


class DirectionsClient:
    """Client for the Mapbox Directions v5 API.

    Example:
        >>> directions = DirectionsClient(MapboxClient(token))
        >>> res = directions.getDirections(
        ...     [Location(-122.42, 37.78), Location(-77.03, 38.91)],
        ...     RoutingProfile.CYCLING,
        ... )
        >>> res.code
        'Ok'
    """

    __slots__ = ("base",)

    def __init__(self, base: MapboxClient) -> None:
        self.base = base

    def getDirections(
        self,
        locations: Sequence[Location],
        profile: RoutingProfile,
        opts: Optional[DirectionsRequestOpts] = None,
    ) -> DirectionsResponse:
        """Find a route visiting the locations in order.

        Args:
            locations: Two or more waypoints (the API allows up to 25)
            profile: Routing profile
            opts: Optional request options

        Returns:
            Decoded response; check ``code`` (or ``isOk``) before using ``routes``

        Raises:
            ValueError: If fewer than two locations are given
            DecodeError: If the response has no ``code`` field
        """
        if len(locations) < 2:
            raise ValueError(f"At least two locations are required, got {len(locations)}")

        coordinates = ";".join(loc.toString() for loc in locations)
        path = f"{DIRECTIONS_API_NAME}/{DIRECTIONS_API_VERSION}/{profile}/{coordinates}"
        params = (opts or DirectionsRequestOpts()).toQueryParams()

        data = self.base.query(path, params)
        try:
            ret = DirectionsResponse.from_dict(data)
        except (ValueError, TypeError, AttributeError) as e:
            logger.error(f"Unexpected directions response: {e}")
            raise DecodeError(f"Unexpected directions response: {e}") from e

        if not ret.isOk:
            logger.warning(f"Directions returned code {ret.code}: {ret.message}")
        return ret
