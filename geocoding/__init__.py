"""
Geocoding Client Library

Async forward and reverse geocoding over OpenCage, OpenStreetMap Nominatim and
the Swiss GeoAdmin API, with typed responses and one unified result model.

Example usage:
    from geocoding import Geocoder
    from geocoding.opencage import OpencageClient

    geocoder = Geocoder(OpencageClient(apiKey="your_api_key"))

    # Forward geocoding
    results = await geocoder.forward("Schwabing, München")

    # Reverse geocoding
    places = await geocoder.reverse(41.40139, 2.12870)
"""

from .errors import (
    AuthenticationError,
    DecodeError,
    GeocodingCancelledError,
    GeocodingError,
    InvalidQueryError,
    NetworkError,
    ProviderError,
    QuotaExceededError,
)
from .facade import Geocoder
from .factory import createGeocoder
from .geoadmin import GeoAdminClient
from .interface import ForwardGeocoder, GeocodingProvider, ReverseGeocoder
from .models import Coordinates, ForwardQuery, GeocodingResult, InputBounds, ReverseQuery, Timestamp
from .opencage import OpencageClient
from .openstreetmap import OpenstreetmapClient
from .transport import HttpTransport, RetryPolicy
from .unix_time import UnixTime

__all__ = [
    # Facade
    "Geocoder",
    "createGeocoder",
    "ForwardGeocoder",
    "ReverseGeocoder",
    "GeocodingProvider",
    # Providers
    "OpencageClient",
    "OpenstreetmapClient",
    "GeoAdminClient",
    # Transport
    "HttpTransport",
    "RetryPolicy",
    # Models
    "UnixTime",
    "Coordinates",
    "InputBounds",
    "Timestamp",
    "ForwardQuery",
    "ReverseQuery",
    "GeocodingResult",
    # Errors
    "GeocodingError",
    "InvalidQueryError",
    "NetworkError",
    "GeocodingCancelledError",
    "ProviderError",
    "AuthenticationError",
    "QuotaExceededError",
    "DecodeError",
]
