"""
Configuration management for geocoding clients.

Loads TOML configuration (main file plus optional directories of .toml
overrides), substitutes ${ENV_VAR} placeholders and exposes typed sections.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

from .. import utils
from .types import GeocodingConfig, LoggingConfig, ProviderConfig

logger = logging.getLogger(__name__)

KNOWN_PROVIDERS = ("opencage", "openstreetmap", "geoadmin")


class ConfigError(ValueError):
    """Raised when configuration is missing or invalid."""


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace environment variable placeholder with its value.

    Unset variables keep the original placeholder.
    """
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} placeholders in strings, dicts and lists."""
    if isinstance(value, str):
        return re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}", replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


class ConfigManager:
    """Manages geocoding configuration loading and validation, dood!

    Example config.toml:
        [geocoding]
        provider = "opencage"
        request-timeout = 10
        tls-backend = "system"

        [geocoding.providers.opencage]
        api-key = "${OPENCAGE_API_KEY}"
        countrycodes = ["de", "at"]
        limit = 5

        [logging]
        level = "INFO"
        console = true
    """

    def __init__(
        self,
        configPath: str = "config.toml",
        configDirs: Optional[List[str]] = None,
        dotEnvFile: Optional[str] = ".env",
    ):
        """Initialize ConfigManager.

        Args:
            configPath: Main TOML file
            configDirs: Directories scanned recursively for extra .toml files, merged in sorted order
            dotEnvFile: Optional .env file loaded into the environment before substitution

        Raises:
            ConfigError: If no configuration can be loaded or it is invalid
        """
        self.configPath = configPath
        self.configDirs = configDirs or []
        if dotEnvFile and Path(dotEnvFile).is_file():
            utils.loadDotenv(dotEnvFile)
        self.config: Dict[str, Any] = substituteEnvVars(self._loadConfig())
        self._validate()

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory."""
        dirPath = Path(directory)
        if not dirPath.is_dir():
            logger.warning(f"Config directory {directory} does not exist, skipping, dood!")
            return []

        tomlFiles = [path for path in dirPath.rglob("*.toml") if path.is_file()]
        for tomlFile in tomlFiles:
            logger.debug(f"Found config file: {tomlFile}")
        return sorted(tomlFiles)

    def _mergeConfigs(self, baseConfig: Dict[str, Any], newConfig: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries, newConfig wins."""
        merged = baseConfig.copy()
        for key, value in newConfig.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._mergeConfigs(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _readToml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "rb") as f:
                return tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    def _loadConfig(self) -> Dict[str, Any]:
        """Load main config file and merge configs from directories."""
        configFile = Path(self.configPath)
        hasConfigFile = configFile.is_file()
        if not hasConfigFile and not self.configDirs:
            raise ConfigError(f"Configuration file {self.configPath} not found")

        config: Dict[str, Any] = {}
        if hasConfigFile:
            config = self._readToml(configFile)
            logger.info(f"Loaded main config from {self.configPath}")

        for configDir in self.configDirs:
            tomlFiles = self._findTomlFilesRecursive(configDir)
            logger.info(f"Found {len(tomlFiles)} .toml files in {configDir}")
            for tomlFile in tomlFiles:
                config = self._mergeConfigs(config, self._readToml(tomlFile))
                logger.info(f"Merged config from {tomlFile}")

        return config

    def _validate(self) -> None:
        geocodingConfig = self.config.get("geocoding")
        if not isinstance(geocodingConfig, dict):
            raise ConfigError("[geocoding] section not found in configuration")

        provider = geocodingConfig.get("provider")
        if provider not in KNOWN_PROVIDERS:
            raise ConfigError(f"Unknown provider {provider!r}, expected one of {', '.join(KNOWN_PROVIDERS)}")

        logger.info(f"Configuration loaded successfully, provider: {provider}, dood!")

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getGeocodingConfig(self) -> GeocodingConfig:
        """Get [geocoding] section."""
        return self.get("geocoding", {})

    def getProviderConfig(self, provider: Optional[str] = None) -> ProviderConfig:
        """Get [geocoding.providers.<name>] section, default provider if name is None."""
        geocodingConfig = self.getGeocodingConfig()
        provider = provider or geocodingConfig["provider"]
        return geocodingConfig.get("providers", {}).get(provider, {})

    def getLoggingConfig(self) -> LoggingConfig:
        """Get logging-specific configuration."""
        return self.get("logging", {})
