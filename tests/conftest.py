"""
Pytest configuration and common fixtures for geocoding tests.

All fixtures follow camelCase naming convention.
"""

from typing import Any, Dict

import pytest

from tests.fixtures import loadResponse


@pytest.fixture
def opencageReverseData() -> Dict[str, Any]:
    """Full annotated OpenCage response for 41.40139, 2.12870."""
    return loadResponse("opencage_reverse")


@pytest.fixture
def openstreetmapSearchData() -> Dict[str, Any]:
    """Nominatim GeoJSON FeatureCollection with one Barcelona building."""
    return loadResponse("openstreetmap_search")


@pytest.fixture
def geoadminSearchData() -> Dict[str, Any]:
    """GeoAdmin SearchServer response for Seftigenstrasse 264, 3084 Wabern (sr=4326)."""
    return loadResponse("geoadmin_search_wgs84")


@pytest.fixture
def geoadminIdentifyData() -> Dict[str, Any]:
    """GeoAdmin MapServer/identify response on the building register layer."""
    return loadResponse("geoadmin_identify")
