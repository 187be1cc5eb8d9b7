"""
Unit tests for query validation and response decoding.
"""

import pytest

from geocoding.errors import DecodeError, InvalidQueryError
from geocoding.models import ForwardQuery, InputBounds
from geocoding.opencage.models import Status
from geocoding.validation import decodeModel, validateCoordinates, validateForwardQuery


def test_validate_coordinates_accepts_edges():
    """Test range limits themselves are valid."""
    for lat, lon in ((90, 180), (-90, -180), (0, 0), (41.40139, 2.12870)):
        validateCoordinates(lat, lon)


@pytest.mark.parametrize(
    "lat,lon",
    [
        (90.0001, 0),
        (-91, 0),
        (0, 180.5),
        (0, -181),
        (float("nan"), 0),
        (0, float("inf")),
        ("north", 0),
    ],
)
def test_validate_coordinates_rejects(lat, lon):
    """Test out of range or non-numeric coordinates, dood!"""
    with pytest.raises(InvalidQueryError) as excInfo:
        validateCoordinates(lat, lon, "opencage")
    assert excInfo.value.provider == "opencage"


def test_validate_forward_query_normalizes():
    """Test address is stripped and country codes lowercased."""
    query = validateForwardQuery(ForwardQuery(address="  Bern  ", countrycodes=["CH", "Li"], limit=3))
    assert query.address == "Bern"
    assert query.countrycodes == ["ch", "li"]
    assert query.limit == 3


def test_validate_forward_query_accepts_string():
    query = validateForwardQuery("Schwabing, München")
    assert isinstance(query, ForwardQuery)
    assert query.address == "Schwabing, München"


@pytest.mark.parametrize(
    "query",
    [
        "",
        "   \t\n",
        ForwardQuery(address="Bern", limit=0),
        ForwardQuery(address="Bern", limit=-2),
        ForwardQuery(address="Bern", countrycodes=["che"]),
        ForwardQuery(address="Bern", countrycodes=["1a"]),
        ForwardQuery(address="Bern", countrycodes=["de\n"]),
        "Bern \ud800",
        ForwardQuery(address="Bern", bounds=InputBounds.fromLonLat(0, 0, 200, 10)),
    ],
)
def test_validate_forward_query_rejects(query):
    """Test malformed forward queries raise InvalidQueryError, dood!"""
    with pytest.raises(InvalidQueryError):
        validateForwardQuery(query)


def test_decode_model_ignores_unknown_fields():
    status = decodeModel(Status, {"code": 200, "message": "OK", "extra": True})
    assert status.code == 200


def test_decode_model_missing_field():
    """Test missing required field becomes DecodeError."""
    with pytest.raises(DecodeError) as excInfo:
        decodeModel(Status, {"code": 200}, "opencage")
    assert excInfo.value.provider == "opencage"
    assert "Status" in str(excInfo.value)


def test_decode_model_wrong_type():
    with pytest.raises(DecodeError):
        decodeModel(Status, ["not", "an", "object"])


def test_unencodable_address_message():
    """Test lone surrogates are rejected as invalid query, dood!"""
    with pytest.raises(InvalidQueryError) as excInfo:
        validateForwardQuery("Bern \ud800", "openstreetmap")
    assert excInfo.value.provider == "openstreetmap"
    assert isinstance(excInfo.value.__cause__, UnicodeEncodeError)
