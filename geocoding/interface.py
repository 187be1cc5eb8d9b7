"""
Capability protocols implemented by geocoding providers, dood!

Providers share no implementation, only call signatures, so the contract is a
set of typing.Protocol classes rather than a base class. Any object with
matching methods can be handed to the Geocoder facade.
"""

import asyncio
from typing import List, Optional, Protocol, Union, runtime_checkable

from .models import ForwardQuery, GeocodingResult


@runtime_checkable
class ForwardGeocoder(Protocol):
    """Something that can turn an address into coordinates."""

    providerName: str

    async def forward(
        self, query: Union[str, ForwardQuery], *, cancelEvent: Optional[asyncio.Event] = None
    ) -> List[GeocodingResult]:
        """Forward geocoding: address -> zero or more results.

        Raises:
            GeocodingError: Any subclass, see geocoding.errors
        """
        ...


@runtime_checkable
class ReverseGeocoder(Protocol):
    """Something that can turn coordinates into an address."""

    providerName: str

    async def reverse(
        self, lat: float, lon: float, *, cancelEvent: Optional[asyncio.Event] = None
    ) -> List[GeocodingResult]:
        """Reverse geocoding: WGS84 point -> zero or more results.

        Raises:
            GeocodingError: Any subclass, see geocoding.errors
        """
        ...


@runtime_checkable
class GeocodingProvider(ForwardGeocoder, ReverseGeocoder, Protocol):
    """Provider supporting both forward and reverse geocoding."""
