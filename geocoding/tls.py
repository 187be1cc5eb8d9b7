"""
Pluggable TLS backend selection for the HTTP transport.

Backends:
- "certifi": Mozilla CA bundle shipped with certifi (default, same as httpx)
- "system": operating system trust store through the ssl default context
- a path to a custom CA bundle file
"""

import logging
import ssl
from pathlib import Path
from typing import Optional, Union

import certifi

logger = logging.getLogger(__name__)

TLS_BACKEND_CERTIFI = "certifi"
TLS_BACKEND_SYSTEM = "system"
TLS_BACKENDS = (TLS_BACKEND_CERTIFI, TLS_BACKEND_SYSTEM)


def createSslContext(backend: str = TLS_BACKEND_CERTIFI, caBundle: Optional[str] = None) -> ssl.SSLContext:
    """Create SSL context for the requested TLS backend, dood!

    Args:
        backend: "certifi" or "system"
        caBundle: Optional path to a PEM CA bundle, overrides backend

    Returns:
        Configured client-side SSLContext with certificate verification enabled

    Raises:
        ValueError: If backend is unknown or caBundle does not exist
    """
    if caBundle is not None:
        if not Path(caBundle).is_file():
            raise ValueError(f"CA bundle {caBundle} does not exist")
        logger.debug(f"Using custom CA bundle: {caBundle}")
        return ssl.create_default_context(cafile=caBundle)

    match backend:
        case "certifi":
            return ssl.create_default_context(cafile=certifi.where())
        case "system":
            return ssl.create_default_context()
        case _:
            raise ValueError(f"Unknown TLS backend '{backend}', expected one of {', '.join(TLS_BACKENDS)}")


def resolveVerify(
    tls: Union[str, ssl.SSLContext, None] = None, caBundle: Optional[str] = None
) -> ssl.SSLContext:
    """Turn a TLS setting (backend name, ready SSLContext or None) into an SSLContext for httpx."""
    if isinstance(tls, ssl.SSLContext):
        return tls
    return createSslContext(tls or TLS_BACKEND_CERTIFI, caBundle)
