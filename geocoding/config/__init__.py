"""Geocoding configuration: TOML loading and typed config sections."""

from .manager import KNOWN_PROVIDERS, ConfigError, ConfigManager, substituteEnvVars
from .types import GeocodingConfig, LoggingConfig, ProviderConfig

__all__ = [
    "ConfigManager",
    "ConfigError",
    "KNOWN_PROVIDERS",
    "substituteEnvVars",
    "GeocodingConfig",
    "ProviderConfig",
    "LoggingConfig",
]
