"""
OpenStreetMap Nominatim Client Library

Async client for Nominatim (public instance or self-hosted) with typed
GeoJSON responses.

Example usage:
    from geocoding.openstreetmap import OpenstreetmapClient, OpenstreetmapParams

    client = OpenstreetmapClient()

    # Forward geocoding
    results = await client.forward("Schwabing, München")

    # Full GeoJSON response
    response = await client.forwardFull(OpenstreetmapParams(query="UCL CASA", addressdetails=True))
"""

from .client import OpenstreetmapClient
from .models import (
    AddressDetails,
    OpenstreetmapParams,
    OpenstreetmapResponse,
    OpenstreetmapResult,
    ResultGeometry,
    ResultProperties,
)

__all__ = [
    "OpenstreetmapClient",
    "OpenstreetmapParams",
    "OpenstreetmapResponse",
    "OpenstreetmapResult",
    "ResultProperties",
    "ResultGeometry",
    "AddressDetails",
]
