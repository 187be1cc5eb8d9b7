"""
Command line geocoding, dood!

Usage:
    python -m geocoding --config config.toml forward "Seftigenstrasse 264, 3084 Wabern"
    python -m geocoding --provider openstreetmap reverse 41.40139 2.12870

Results are printed to stdout as a JSON list of unified results.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional, Union

from .config import ConfigError, ConfigManager
from .errors import GeocodingError
from .factory import createGeocoder
from .logging_utils import initLogging
from .models import ReverseQuery
from .utils import jsonDumps

# Configure basic logging first, config may override it
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.WARNING)
logger = logging.getLogger(__name__)


def parseArguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog="geocoding", description="Forward and reverse geocoding, dood!")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument(
        "-p",
        "--provider",
        help="Provider to use instead of the configured one (opencage, openstreetmap, geoadmin)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    forwardParser = subparsers.add_parser("forward", help="Address to coordinates")
    forwardParser.add_argument("address", help="Free-form address")
    reverseParser = subparsers.add_parser("reverse", help="Coordinates to address")
    reverseParser.add_argument("lat", type=float, help="Latitude (-90 to 90)")
    reverseParser.add_argument("lon", type=float, help="Longitude (-180 to 180)")

    args = parser.parse_args(argv)
    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dirPath) for dirPath in args.config_dir]
    return args


def buildQuery(args: argparse.Namespace) -> Union[str, ReverseQuery]:
    match args.command:
        case "forward":
            return args.address
        case "reverse":
            return ReverseQuery(lat=args.lat, lon=args.lon)
        case _:
            raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parseArguments(argv)

    try:
        configManager = ConfigManager(args.config, args.config_dir)
        initLogging(configManager.getLoggingConfig())
        geocoder = createGeocoder(configManager.getGeocodingConfig(), args.provider)
    except (ConfigError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 2

    try:
        results = asyncio.run(geocoder.geocode(buildQuery(args)))
    except GeocodingError as e:
        logger.error(f"Geocoding failed: {e}")
        return 1

    print(jsonDumps([result.model_dump(mode="json") for result in results], indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
