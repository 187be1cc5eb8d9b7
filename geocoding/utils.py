"""
Common utilities for geocoding.
"""

import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)


def loadDotenv(path: str = ".env", populateEnv: bool = True) -> Dict[str, str]:
    """
    Simple dotenv file loader.
    Read file line by line and put KEY=VALUE pairs into dictionary.

    Args:
        path: Path to .env file (default ".env")
        populateEnv: Whether to set variables not yet present in the environment (default True)

    Returns:
        Dictionary of key-value pairs from .env file
    """
    ret: Dict[str, str] = {}
    with open(path, "rt", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            ret[key.strip()] = value.strip().strip('"')

    if populateEnv:
        for k, v in ret.items():
            os.environ.setdefault(k, v)
    logger.debug(f"Loaded {len(ret)} variables from {path}")
    return ret


def jsonDumps(data: Any, **kwargs) -> str:
    """Dump data to JSON keeping non-ASCII characters readable."""
    kwargs.setdefault("ensure_ascii", False)
    kwargs.setdefault("default", str)
    return json.dumps(data, **kwargs)
