"""Recorded data tests for all geocoding providers.

These tests replay recorded provider responses to check every provider end
to end behind the Geocoder facade, without making actual API calls.
"""

from unittest.mock import patch

import pytest

from geocoding import Geocoder, GeoAdminClient, OpencageClient, OpenstreetmapClient
from tests.fixtures import createMockResponse, installMockResponse


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "client,fixtureName,expectedAddress",
    [
        (OpencageClient(apiKey="test_key"), "opencageReverseData", "Carrer de Calatrava, 68, 08017 Barcelona, Spain"),
        (
            OpenstreetmapClient(),
            "openstreetmapSearchData",
            "68, Carrer de Calatrava, les Tres Torres, Sarrià - Sant Gervasi, Barcelona, BCN, Catalonia, 08017, Spain",
        ),
        (GeoAdminClient(), "geoadminIdentifyData", "Seftigenstrasse 264, 3084 Wabern"),
    ],
)
async def test_reverse_recorded(client, fixtureName, expectedAddress, request):
    """Test reverse geocoding with every provider through the facade, dood!

    Args:
        client: Provider client under test
        fixtureName: Name of the conftest fixture holding the recorded response
        expectedAddress: Formatted address of the first result
        request: Pytest request, used to resolve the fixture by name
    """
    data = request.getfixturevalue(fixtureName)
    geocoder = Geocoder(client)

    with patch("httpx.AsyncClient") as mock_client:
        installMockResponse(mock_client, createMockResponse(200, data))

        results = await geocoder.reverse(41.40139, 2.12870)

    assert len(results) == 1
    assert results[0].provider == client.providerName
    assert results[0].formatted_address == expectedAddress
    assert -90 <= results[0].coordinates.lat <= 90
    assert -180 <= results[0].coordinates.lon <= 180


@pytest.mark.asyncio
async def test_swap_provider_keeps_call_sites(openstreetmapSearchData, geoadminSearchData):
    """Test the same call works unchanged with different providers."""

    async def lookup(geocoder: Geocoder):
        return await geocoder.forward("Seftigenstrasse 264, 3084 Wabern")

    with patch("httpx.AsyncClient") as mock_client:
        installMockResponse(mock_client, createMockResponse(200, openstreetmapSearchData))
        osmResults = await lookup(Geocoder(OpenstreetmapClient()))

    with patch("httpx.AsyncClient") as mock_client:
        installMockResponse(mock_client, createMockResponse(200, geoadminSearchData))
        geoadminResults = await lookup(Geocoder(GeoAdminClient()))

    assert osmResults[0].provider == "openstreetmap"
    assert geoadminResults[0].provider == "geoadmin"
    assert geoadminResults[0].formatted_address == "Seftigenstrasse 264 3084 Wabern"


@pytest.mark.asyncio
async def test_results_persist_as_json(opencageReverseData):
    """Test unified results survive a JSON round trip, dood!"""
    geocoder = Geocoder(OpencageClient(apiKey="test_key"))

    with patch("httpx.AsyncClient") as mock_client:
        installMockResponse(mock_client, createMockResponse(200, opencageReverseData))
        results = await geocoder.reverse(41.40139, 2.12870)

    restored = type(results[0]).model_validate_json(results[0].model_dump_json())
    assert restored == results[0]
    assert restored.timestamp.created_unix.asSeconds() == 1652712767
