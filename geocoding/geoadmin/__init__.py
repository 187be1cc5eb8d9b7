"""
GeoAdmin API Client Library

Async client for Swiss geocoding through api3.geo.admin.ch.

Example usage:
    from geocoding.geoadmin import GeoAdminClient

    client = GeoAdminClient()
    results = await client.forward("Seftigenstrasse 264, 3084 Wabern")
"""

from .client import GeoAdminClient
from .models import (
    GeoAdminForwardLocation,
    GeoAdminForwardResponse,
    GeoAdminParams,
    GeoAdminReverseLocation,
    GeoAdminReverseResponse,
)

__all__ = [
    "GeoAdminClient",
    "GeoAdminParams",
    "GeoAdminForwardResponse",
    "GeoAdminForwardLocation",
    "GeoAdminReverseResponse",
    "GeoAdminReverseLocation",
]
