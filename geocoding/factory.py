"""
Build ready-to-use geocoders from configuration.
"""

import logging
from typing import Any, Dict, Optional

from .facade import Geocoder
from .geoadmin import GeoAdminClient
from .interface import GeocodingProvider
from .models import InputBounds
from .openstreetmap import OpenstreetmapClient
from .opencage import OpencageClient
from .tls import TLS_BACKEND_CERTIFI
from .transport import DEFAULT_REQUEST_TIMEOUT, DEFAULT_USER_AGENT, HttpTransport, RetryPolicy

logger = logging.getLogger(__name__)


def createTransport(config: Dict[str, Any], retryPolicy: Optional[RetryPolicy] = None) -> HttpTransport:
    """Create HttpTransport from the [geocoding] section."""
    return HttpTransport(
        requestTimeout=float(config.get("request-timeout", DEFAULT_REQUEST_TIMEOUT)),
        tls=config.get("tls-backend", TLS_BACKEND_CERTIFI),
        caBundle=config.get("ca-bundle"),
        userAgent=config.get("user-agent", DEFAULT_USER_AGENT),
        retryPolicy=retryPolicy,
    )


def createProvider(
    providerName: str, providerConfig: Dict[str, Any], transport: HttpTransport
) -> GeocodingProvider:
    """Create provider client by name.

    Raises:
        ValueError: On unknown provider name, missing OpenCage API key or malformed bbox
    """
    bounds = None
    if "bbox" in providerConfig:
        bounds = InputBounds.fromSequence(providerConfig["bbox"])

    match providerName:
        case "opencage":
            return OpencageClient(
                providerConfig.get("api-key", ""),
                baseUrl=providerConfig.get("base-url"),
                transport=transport,
                bounds=bounds,
                countrycodes=providerConfig.get("countrycodes"),
                limit=providerConfig.get("limit"),
                language=providerConfig.get("language"),
            )
        case "openstreetmap":
            return OpenstreetmapClient(
                baseUrl=providerConfig.get("base-url"),
                apiKey=providerConfig.get("api-key"),
                transport=transport,
                bounds=bounds,
                countrycodes=providerConfig.get("countrycodes"),
                limit=providerConfig.get("limit"),
                language=providerConfig.get("language"),
                email=providerConfig.get("email"),
            )
        case "geoadmin":
            return GeoAdminClient(
                baseUrl=providerConfig.get("base-url"),
                transport=transport,
                limit=providerConfig.get("limit"),
                bounds=bounds,
                language=providerConfig.get("language", "en"),
            )
        case _:
            raise ValueError(f"Unknown geocoding provider: {providerName}")


def createGeocoder(
    config: Dict[str, Any],
    providerName: Optional[str] = None,
    *,
    retryPolicy: Optional[RetryPolicy] = None,
) -> Geocoder:
    """Create Geocoder from the [geocoding] config section, dood!

    Args:
        config: [geocoding] section, see GeocodingConfig
        providerName: Provider to use instead of config["provider"]
        retryPolicy: Optional retry hook passed to the transport

    Example:
        >>> configManager = ConfigManager("config.toml")
        >>> geocoder = createGeocoder(configManager.getGeocodingConfig())
        >>> results = await geocoder.forward("Bern")
    """
    providerName = providerName or config.get("provider")
    if not providerName:
        raise ValueError("No geocoding provider configured")

    providerConfig = config.get("providers", {}).get(providerName, {})
    transport = createTransport(config, retryPolicy)
    logger.info(f"Creating {providerName} geocoder")
    return Geocoder(createProvider(providerName, providerConfig, transport))
