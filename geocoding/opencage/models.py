"""
OpenCage Geocoding API Data Models

This module mirrors the OpenCage JSON response (geocode/v1/json) as pydantic
models. Only fields the API always sends are required; everything else is
optional so the models survive provider schema changes. Unknown fields are
ignored.

See https://opencagedata.com/api#response for field descriptions.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..models import Timestamp
from ..unix_time import UnixTime


class Status(BaseModel):
    """Status block repeated inside the body, dood!"""

    code: int  # HTTP status code
    message: str  # e.g. "OK"


class Rate(BaseModel):
    """Quota information, only present for free-tier keys."""

    limit: Optional[int] = None  # Daily request limit
    remaining: Optional[int] = None  # Requests left today
    reset: Optional[UnixTime] = None  # When the quota resets


class License(BaseModel):
    name: Optional[str] = None
    url: Optional[str] = None


class LatLng(BaseModel):
    lat: float
    lng: float


class Bounds(BaseModel):
    """Bounding box of a result."""

    northeast: LatLng
    southwest: LatLng


class Currency(BaseModel):
    """Currency metadata"""

    alternate_symbols: List[str] = Field(default_factory=list)
    decimal_mark: Optional[str] = None
    html_entity: Optional[str] = None
    iso_code: Optional[str] = None
    iso_numeric: Optional[Union[int, str]] = None  # Sent as string by newer API versions
    name: Optional[str] = None
    smallest_denomination: Optional[int] = None
    subunit: Optional[str] = None
    subunit_to_unit: Optional[int] = None
    symbol: Optional[str] = None
    symbol_first: Optional[int] = None
    thousands_separator: Optional[str] = None


class SunTimes(BaseModel):
    """Sunrise or sunset times for the result location"""

    apparent: Optional[UnixTime] = None
    astronomical: Optional[UnixTime] = None
    civil: Optional[UnixTime] = None
    nautical: Optional[UnixTime] = None


class Sun(BaseModel):
    rise: Optional[SunTimes] = None
    set: Optional[SunTimes] = None


class Timezone(BaseModel):
    """Timezone metadata"""

    name: Optional[str] = None  # e.g. "Europe/Madrid"
    now_in_dst: Optional[int] = None
    offset_sec: Optional[int] = None
    offset_string: Optional[Union[str, int]] = None  # "+0200" (older API versions sent an int)
    short_name: Optional[str] = None


class Annotations(BaseModel):
    """Annotations pertaining to the geocoding result (only when no_annotations=0)."""

    model_config = ConfigDict(populate_by_name=True)

    dms: Optional[Dict[str, str]] = Field(default=None, alias="DMS")
    mgrs: Optional[str] = Field(default=None, alias="MGRS")
    maidenhead: Optional[str] = Field(default=None, alias="Maidenhead")
    mercator: Optional[Dict[str, float]] = Field(default=None, alias="Mercator")
    osm: Optional[Dict[str, str]] = Field(default=None, alias="OSM")
    callingcode: Optional[int] = None
    currency: Optional[Currency] = None
    flag: Optional[str] = None
    geohash: Optional[str] = None
    qibla: Optional[float] = None
    sun: Optional[Sun] = None
    timezone: Optional[Timezone] = None
    what3words: Optional[Dict[str, str]] = None


class OpencageResult(BaseModel):
    """Single forward or reverse geocoding result"""

    annotations: Optional[Annotations] = None
    bounds: Optional[Bounds] = None
    components: Dict[str, Any] = Field(default_factory=dict)  # Address parts, "_type", "ISO_3166-1_alpha-2", ...
    confidence: Optional[int] = None  # 0 (unknown) .. 10 (best)
    formatted: str  # Formatted address
    geometry: LatLng


class OpencageResponse(BaseModel):
    """The top-level full JSON response returned by a geocoding request, dood!

    Example (shortened):
        {
          "documentation": "https://opencagedata.com/api",
          "licenses": [{"name": "see attribution guide", "url": "https://opencagedata.com/credits"}],
          "rate": {"limit": 2500, "remaining": 2499, "reset": 1523318400},
          "results": [{"components": {...}, "confidence": 10, "formatted": "...", "geometry": {...}}],
          "status": {"code": 200, "message": "OK"},
          "thanks": "For using an OpenCage API",
          "timestamp": {"created_http": "Mon, 09 Apr 2018 12:33:01 GMT", "created_unix": 1523277181},
          "total_results": 1
        }
    """

    documentation: Optional[str] = None
    licenses: List[License] = Field(default_factory=list)
    rate: Optional[Rate] = None
    results: List[OpencageResult]
    status: Status
    stay_informed: Dict[str, str] = Field(default_factory=dict)
    thanks: Optional[str] = None
    timestamp: Timestamp
    total_results: int

    def remainingCalls(self) -> Optional[int]:
        """Remaining calls in the daily quota, None for paid-tier keys."""
        if self.rate is None:
            return None
        return self.rate.remaining
