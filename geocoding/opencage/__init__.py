"""
OpenCage Geocoding API Client Library

Async client for the OpenCage Geocoding API (https://opencagedata.com/api)
with typed responses.

Example usage:
    from geocoding.opencage import OpencageClient

    client = OpencageClient(apiKey="your_api_key")

    # Forward geocoding
    results = await client.forward("Schwabing, München")

    # Reverse geocoding
    places = await client.reverse(41.40139, 2.12870)
"""

from .client import OpencageClient
from .models import (
    Annotations,
    Bounds,
    Currency,
    LatLng,
    License,
    OpencageResponse,
    OpencageResult,
    Rate,
    Status,
    Sun,
    SunTimes,
    Timezone,
)

__all__ = [
    "OpencageClient",
    "OpencageResponse",
    "OpencageResult",
    "Annotations",
    "Bounds",
    "Currency",
    "LatLng",
    "License",
    "Rate",
    "Status",
    "Sun",
    "SunTimes",
    "Timezone",
]
