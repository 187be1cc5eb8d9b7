"""
Test fixtures package for geocoding tests.

- http_mocks: recorded provider responses and httpx.AsyncClient mocks
- responses/: recorded JSON bodies of OpenCage, Nominatim and GeoAdmin
"""

from tests.fixtures.http_mocks import RESPONSES_PATH, createMockResponse, installMockResponse, loadResponse

__all__ = [
    "RESPONSES_PATH",
    "loadResponse",
    "createMockResponse",
    "installMockResponse",
]
