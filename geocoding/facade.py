"""
Geocoding facade: one call signature for every provider, dood!

Callers talk to Geocoder and can swap the provider behind it without
touching call sites.
"""

import asyncio
import logging
from typing import List, Optional, Union

from .interface import GeocodingProvider
from .models import ForwardQuery, GeocodingResult, ReverseQuery
from .validation import validateCoordinates, validateForwardQuery

logger = logging.getLogger(__name__)


class Geocoder:
    """Uniform forward/reverse geocoding over a pluggable provider.

    Example:
        >>> from geocoding import Geocoder
        >>> from geocoding.openstreetmap import OpenstreetmapClient
        >>>
        >>> geocoder = Geocoder(OpenstreetmapClient())
        >>> results = await geocoder.forward("Schwabing, München")
        >>> for result in results:
        ...     print(result.formatted_address, result.coordinates.lat, result.coordinates.lon)
    """

    def __init__(self, provider: GeocodingProvider):
        """Initialize facade.

        Args:
            provider: Any object implementing forward() and reverse(), see GeocodingProvider

        Raises:
            TypeError: If provider does not implement the GeocodingProvider protocol
        """
        if not isinstance(provider, GeocodingProvider):
            raise TypeError(f"{type(provider).__name__} does not implement forward() and reverse()")
        self.provider = provider

    @property
    def providerName(self) -> str:
        return self.provider.providerName

    async def forward(
        self, query: Union[str, ForwardQuery], *, cancelEvent: Optional[asyncio.Event] = None
    ) -> List[GeocodingResult]:
        """Forward geocoding: address -> list of results (empty if nothing matched).

        Raises:
            InvalidQueryError: On empty address or bad options, before any request
            NetworkError, ProviderError, DecodeError: On request failure
        """
        query = validateForwardQuery(query, self.providerName)
        logger.debug(f"Forward geocoding via {self.providerName}: {query.address}")
        return await self.provider.forward(query, cancelEvent=cancelEvent)

    async def reverse(
        self, lat: float, lon: float, *, cancelEvent: Optional[asyncio.Event] = None
    ) -> List[GeocodingResult]:
        """Reverse geocoding: WGS84 point -> list of results (empty if nothing matched).

        Raises:
            InvalidQueryError: If lat/lon is out of range, before any request
            NetworkError, ProviderError, DecodeError: On request failure
        """
        validateCoordinates(lat, lon, self.providerName)
        logger.debug(f"Reverse geocoding via {self.providerName}: {lat}, {lon}")
        return await self.provider.reverse(lat, lon, cancelEvent=cancelEvent)

    async def geocode(
        self, query: Union[str, ForwardQuery, ReverseQuery], *, cancelEvent: Optional[asyncio.Event] = None
    ) -> List[GeocodingResult]:
        """Run any geocoding query: address or ForwardQuery goes forward, ReverseQuery goes reverse."""
        if isinstance(query, ReverseQuery):
            return await self.reverse(query.lat, query.lon, cancelEvent=cancelEvent)
        return await self.forward(query, cancelEvent=cancelEvent)
