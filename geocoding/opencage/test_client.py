"""
Unit tests for OpenCage Geocoding API Client

This module contains unit tests for the OpencageClient class, testing request
parameters, response decoding, unified result mapping and error handling.
"""

import asyncio
from unittest.mock import patch

import pytest

from geocoding.errors import (
    AuthenticationError,
    DecodeError,
    GeocodingCancelledError,
    InvalidQueryError,
    QuotaExceededError,
)
from geocoding.models import ForwardQuery, InputBounds
from geocoding.opencage import OpencageClient, OpencageResponse
from geocoding.unix_time import UnixTime
from tests.fixtures import createMockResponse, installMockResponse, loadResponse


def emptyResponse():
    data = loadResponse("opencage_reverse")
    data["results"] = []
    data["total_results"] = 0
    return data


def test_api_key_required():
    """Test client refuses to start without API key, dood!"""
    with pytest.raises(ValueError):
        OpencageClient(apiKey="")


@pytest.mark.asyncio
async def test_forward_request_params():
    """Test forward geocoding query parameters, dood!"""
    client = OpencageClient(apiKey="test_key")
    bounds = InputBounds.fromLonLat(-0.13806939, 51.51989264, -0.13427138, 51.52319711)

    with patch("httpx.AsyncClient") as mock_client:
        session = installMockResponse(mock_client, createMockResponse(200, emptyResponse()))

        await client.forward(
            ForwardQuery(address="UCL CASA", bounds=bounds, countrycodes=["GB"], limit=2, language="en")
        )

        args, kwargs = session.get.call_args
        assert args[0] == OpencageClient.API_BASE_URL
        assert kwargs["params"] == {
            "q": "UCL CASA",
            "no_annotations": 1,
            "bounds": "-0.13806939,51.51989264,-0.13427138,51.52319711",
            "countrycode": "gb",
            "limit": 2,
            "language": "en",
            "key": "test_key",
            "no_record": 1,
        }


@pytest.mark.asyncio
async def test_client_defaults_applied():
    """Test client-level defaults fill unset query options."""
    client = OpencageClient(apiKey="test_key", countrycodes=["de", "at"], limit=5, language="de")

    with patch("httpx.AsyncClient") as mock_client:
        session = installMockResponse(mock_client, createMockResponse(200, emptyResponse()))

        await client.forward(ForwardQuery(address="Wien", limit=1))

        params = session.get.call_args.kwargs["params"]
        assert params["countrycode"] == "de,at"
        assert params["limit"] == 1
        assert params["language"] == "de"


@pytest.mark.asyncio
async def test_reverse_request_params():
    """Test reverse query is sent in lat, lon order."""
    client = OpencageClient(apiKey="test_key")

    with patch("httpx.AsyncClient") as mock_client:
        session = installMockResponse(mock_client, createMockResponse(200, loadResponse("opencage_reverse")))

        await client.reverse(41.40139, 2.1287)

        params = session.get.call_args.kwargs["params"]
        assert params["q"] == "41.40139, 2.1287"
        assert params["no_annotations"] == 1
        assert params["no_record"] == 1


@pytest.mark.asyncio
async def test_reverse_unified_result():
    """Test mapping of OpenCage result to GeocodingResult, dood!"""
    client = OpencageClient(apiKey="test_key")

    with patch("httpx.AsyncClient") as mock_client:
        installMockResponse(mock_client, createMockResponse(200, loadResponse("opencage_reverse")))

        results = await client.reverse(41.40139, 2.12870)

    assert len(results) == 1
    result = results[0]
    assert result.provider == "opencage"
    assert result.formatted_address == "Carrer de Calatrava, 68, 08017 Barcelona, Spain"
    assert result.coordinates.lat == 41.4014067
    assert result.coordinates.lon == 2.1287224
    assert result.bounds.minimum.lat == 41.401227
    assert result.bounds.maximum.lon == 2.128952
    assert result.components["road"] == "Carrer de Calatrava"
    assert result.components["postcode"] == "08017"
    assert result.confidence == 10.0
    assert result.timestamp.created_unix == UnixTime(1652712767)
    assert result.timestamp.created_http == "Mon, 16 May 2022 14:52:47 GMT"
    assert result.timestamp.isConsistent()


@pytest.mark.asyncio
async def test_reverse_full_response():
    """Test full annotated response decoding."""
    client = OpencageClient(apiKey="test_key")

    with patch("httpx.AsyncClient") as mock_client:
        session = installMockResponse(mock_client, createMockResponse(200, loadResponse("opencage_reverse")))

        response = await client.reverseFull(41.40139, 2.12870, language="es")

        params = session.get.call_args.kwargs["params"]
        assert params["no_annotations"] == 0
        assert params["language"] == "es"

    assert isinstance(response, OpencageResponse)
    assert response.remainingCalls() == 2499
    assert response.rate.reset == UnixTime(1523318400)
    assert response.total_results == 1
    assert response.status.code == 200

    annotations = response.results[0].annotations
    assert annotations.mgrs == "31TDF2717083684"
    assert annotations.currency.iso_code == "EUR"
    assert annotations.sun.rise.apparent == UnixTime(1523251260)
    assert annotations.timezone.name == "Europe/Madrid"
    assert annotations.timezone.offset_string == 200


@pytest.mark.asyncio
async def test_inconsistent_timestamp_still_decodes():
    """Test mismatched timestamp fields are kept as reported."""
    data = loadResponse("opencage_reverse")
    data["timestamp"]["created_unix"] = 1652712768
    client = OpencageClient(apiKey="test_key")

    with patch("httpx.AsyncClient") as mock_client:
        installMockResponse(mock_client, createMockResponse(200, data))

        results = await client.reverse(41.40139, 2.12870)

    timestamp = results[0].timestamp
    assert timestamp.created_unix == UnixTime(1652712768)
    assert timestamp.created_http == "Mon, 16 May 2022 14:52:47 GMT"
    assert not timestamp.isConsistent()


@pytest.mark.asyncio
async def test_forward_full_keeps_annotations_in_metadata():
    client = OpencageClient(apiKey="test_key")

    with patch("httpx.AsyncClient") as mock_client:
        installMockResponse(mock_client, createMockResponse(200, loadResponse("opencage_reverse")))

        response = await client.forwardFull("Carrer de Calatrava 68, Barcelona")

    result = client._toResult(response.results[0], response)
    assert result.metadata["annotations"]["MGRS"] == "31TDF2717083684"
    assert result.metadata["annotations"]["callingcode"] == 34


@pytest.mark.asyncio
async def test_empty_results():
    """Test zero results decode to empty list, not an error."""
    client = OpencageClient(apiKey="test_key")

    with patch("httpx.AsyncClient") as mock_client:
        installMockResponse(mock_client, createMockResponse(200, emptyResponse()))

        assert await client.forward("Nowhere at all") == []


@pytest.mark.asyncio
async def test_unknown_fields_ignored():
    """Test extra fields in the response do not break decoding, dood!"""
    data = loadResponse("opencage_reverse")
    data["brand_new_field"] = {"nested": [1, 2, 3]}
    data["results"][0]["new_result_field"] = "whatever"
    client = OpencageClient(apiKey="test_key")

    with patch("httpx.AsyncClient") as mock_client:
        installMockResponse(mock_client, createMockResponse(200, data))

        results = await client.reverse(41.40139, 2.12870)

    assert len(results) == 1


@pytest.mark.asyncio
async def test_missing_required_field():
    """Test missing timestamp raises DecodeError."""
    data = loadResponse("opencage_reverse")
    del data["timestamp"]
    client = OpencageClient(apiKey="test_key")

    with patch("httpx.AsyncClient") as mock_client:
        installMockResponse(mock_client, createMockResponse(200, data))

        with pytest.raises(DecodeError) as excInfo:
            await client.reverse(41.40139, 2.12870)

    assert excInfo.value.provider == "opencage"


@pytest.mark.asyncio
async def test_invalid_reverse_makes_no_request():
    """Test out of range coordinates fail before any network I/O, dood!"""
    client = OpencageClient(apiKey="test_key")

    with patch("httpx.AsyncClient") as mock_client:
        with pytest.raises(InvalidQueryError):
            await client.reverse(91.0, 0.0)
        with pytest.raises(InvalidQueryError):
            await client.forward("   ")

        mock_client.assert_not_called()


@pytest.mark.asyncio
async def test_error_handling_401():
    """Test handling of authentication error, dood!"""
    client = OpencageClient(apiKey="invalid_key")

    with patch("httpx.AsyncClient") as mock_client:
        body = '{"status": {"code": 401, "message": "invalid API key"}}'
        installMockResponse(mock_client, createMockResponse(401, None, text=body))

        with pytest.raises(AuthenticationError) as excInfo:
            await client.forward("Test")

    assert excInfo.value.status == 401
    assert excInfo.value.provider == "opencage"


@pytest.mark.asyncio
async def test_error_handling_402():
    """Test handling of exhausted quota."""
    client = OpencageClient(apiKey="test_key")

    with patch("httpx.AsyncClient") as mock_client:
        installMockResponse(mock_client, createMockResponse(402, None, text="quota exceeded"))

        with pytest.raises(QuotaExceededError):
            await client.reverse(41.40139, 2.12870)


@pytest.mark.asyncio
async def test_cancelled_before_send():
    client = OpencageClient(apiKey="test_key")
    cancelEvent = asyncio.Event()
    cancelEvent.set()

    with patch("httpx.AsyncClient") as mock_client:
        with pytest.raises(GeocodingCancelledError):
            await client.forward("Bern", cancelEvent=cancelEvent)

        mock_client.assert_not_called()
