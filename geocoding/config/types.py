"""Type definitions for geocoding configuration."""

from typing import Any, Dict, List, NotRequired, TypedDict

# Per-provider section, e.g. [geocoding.providers.opencage]
ProviderConfig = TypedDict(
    "ProviderConfig",
    {
        "api-key": NotRequired[str],  # Auth credential
        "base-url": NotRequired[str],  # Override endpoint (self-hosted Nominatim, proxies)
        "bbox": NotRequired[List[float]],  # [minLon, minLat, maxLon, maxLat], restrict search area
        "countrycodes": NotRequired[List[str]],  # Restrict by country
        "limit": NotRequired[int],  # Max results
        "language": NotRequired[str],
        "email": NotRequired[str],  # Nominatim only
    },
)

# Main [geocoding] section
GeocodingConfig = TypedDict(
    "GeocodingConfig",
    {
        "provider": str,  # Provider used by default: "opencage", "openstreetmap" or "geoadmin"
        "request-timeout": NotRequired[float],
        "tls-backend": NotRequired[str],  # "certifi" or "system"
        "ca-bundle": NotRequired[str],  # Custom CA bundle path, overrides tls-backend
        "user-agent": NotRequired[str],
        "providers": NotRequired[Dict[str, ProviderConfig]],
    },
)

LoggingConfig = Dict[str, Any]
