"""
Query and response validation shared by all provider clients.

Query checks run before a request is built, so a malformed query never
reaches the network. Response decoding turns schema mismatches into
DecodeError.
"""

import math
import re
from typing import Any, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .errors import DecodeError, InvalidQueryError
from .models import ForwardQuery

COUNTRY_CODE_RE = re.compile(r"[A-Za-z]{2}")

M = TypeVar("M", bound=BaseModel)


def decodeModel(modelClass: Type[M], data: Any, provider: Optional[str] = None) -> M:
    """Validate decoded JSON against a wire model.

    Unknown fields are ignored, missing optional fields default to None.

    Raises:
        DecodeError: If a required field is missing or has the wrong type
    """
    try:
        return modelClass.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Unexpected {modelClass.__name__} schema: {e.error_count()} error(s): {e}", provider) from e


def validateCoordinates(lat: float, lon: float, provider: Optional[str] = None) -> None:
    """Check that lat/lon is a finite WGS84 point.

    Raises:
        InvalidQueryError: If latitude is outside [-90, 90] or longitude is outside [-180, 180]
    """
    try:
        lat = float(lat)
        lon = float(lon)
    except (TypeError, ValueError):
        raise InvalidQueryError(f"Coordinates must be numbers, got {lat!r}, {lon!r}", provider)

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidQueryError(f"Coordinates must be finite, got {lat}, {lon}", provider)
    if not -90.0 <= lat <= 90.0:
        raise InvalidQueryError(f"Latitude {lat} is out of range [-90, 90]", provider)
    if not -180.0 <= lon <= 180.0:
        raise InvalidQueryError(f"Longitude {lon} is out of range [-180, 180]", provider)


def validateForwardQuery(query: Union[str, ForwardQuery], provider: Optional[str] = None) -> ForwardQuery:
    """Normalize and validate a forward query.

    Accepts a plain address string or a ForwardQuery. Returns a new
    ForwardQuery with the address stripped and country codes lowercased.

    Raises:
        InvalidQueryError: On empty or unencodable address, non-positive limit, bad country code or bad bounds
    """
    query = ForwardQuery.fromAny(query)
    address = query.address.strip()
    if not address:
        raise InvalidQueryError("Address must not be empty", provider)
    try:
        address.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidQueryError(f"Address is not valid Unicode text: {e}", provider) from e

    if query.limit is not None and query.limit <= 0:
        raise InvalidQueryError(f"Limit must be positive, got {query.limit}", provider)

    countrycodes = None
    if query.countrycodes is not None:
        for code in query.countrycodes:
            if not COUNTRY_CODE_RE.fullmatch(code):
                raise InvalidQueryError(f"Invalid country code: {code!r}", provider)
        countrycodes = [code.lower() for code in query.countrycodes]

    if query.bounds is not None:
        validateCoordinates(query.bounds.minimum.lat, query.bounds.minimum.lon, provider)
        validateCoordinates(query.bounds.maximum.lat, query.bounds.maximum.lon, provider)

    return query.model_copy(update={"address": address, "countrycodes": countrycodes})
