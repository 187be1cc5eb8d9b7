"""
Geocoding Data Models

This module defines the provider-independent models shared by all geocoding
clients: coordinates, search bounds, queries, timestamps and unified results.
All models are pydantic models so results can be persisted with
model_dump(mode="json") and loaded back with model_validate().
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from .unix_time import UnixTime


class Coordinates(BaseModel):
    """Latitude/longitude pair (WGS84), dood!"""

    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class InputBounds(BaseModel):
    """Bounding box to search within when forward-geocoding.

    - `minimum` is the **bottom-left** (south-west) corner
    - `maximum` is the **top-right** (north-east) corner
    """

    model_config = ConfigDict(frozen=True)

    minimum: Coordinates
    maximum: Coordinates

    @classmethod
    def fromLonLat(cls, minLon: float, minLat: float, maxLon: float, maxLat: float) -> "InputBounds":
        """Build bounds from the usual "minLon, minLat, maxLon, maxLat" order."""
        return cls(
            minimum=Coordinates(lat=minLat, lon=minLon),
            maximum=Coordinates(lat=maxLat, lon=maxLon),
        )

    @classmethod
    def fromSequence(cls, values: Sequence[float]) -> "InputBounds":
        """Build bounds from a 4-item [minLon, minLat, maxLon, maxLat] sequence.

        Raises:
            ValueError: If the sequence does not have exactly 4 items
        """
        if len(values) != 4:
            raise ValueError(f"Bounding box needs 4 values (minLon, minLat, maxLon, maxLat), got {len(values)}")
        minLon, minLat, maxLon, maxLat = (float(v) for v in values)
        return cls.fromLonLat(minLon, minLat, maxLon, maxLat)

    def toLonLatString(self) -> str:
        """Render as "minLon,minLat,maxLon,maxLat", the order OpenCage and Nominatim expect."""
        return ",".join(
            str(v) for v in (self.minimum.lon, self.minimum.lat, self.maximum.lon, self.maximum.lat)
        )


class Timestamp(BaseModel):
    """Point in time reported by a provider in two representations.

    Both fields come from the provider and are trusted independently,
    nothing forces them to agree. Use isConsistent() to check.
    """

    created_http: str  # HTTP-date, e.g. "Mon, 16 May 2022 14:52:47 GMT"
    created_unix: UnixTime  # Same instant as seconds since epoch

    def isConsistent(self) -> bool:
        """Check whether created_http and created_unix describe the same instant."""
        try:
            return UnixTime.fromHttpDate(self.created_http) == self.created_unix
        except ValueError:
            return False


class ForwardQuery(BaseModel):
    """Forward geocoding query: free-form address plus optional restrictions."""

    address: str
    bounds: Optional[InputBounds] = None  # Restrict (or bias) search area
    countrycodes: Optional[List[str]] = None  # ISO 3166-1 alpha-2 codes, e.g. ["de", "at"]
    limit: Optional[int] = None  # Max number of results
    language: Optional[str] = None  # Preferred result language, e.g. "en"

    @classmethod
    def fromAny(cls, query: Union[str, "ForwardQuery"]) -> "ForwardQuery":
        """Accept either a plain address or a ready query."""
        if isinstance(query, str):
            return cls(address=query)
        return query

    def withDefaults(
        self,
        *,
        bounds: Optional[InputBounds] = None,
        countrycodes: Optional[List[str]] = None,
        limit: Optional[int] = None,
        language: Optional[str] = None,
    ) -> "ForwardQuery":
        """Return a copy with unset options filled from client-level defaults."""
        return self.model_copy(
            update={
                "bounds": self.bounds if self.bounds is not None else bounds,
                "countrycodes": self.countrycodes if self.countrycodes is not None else countrycodes,
                "limit": self.limit if self.limit is not None else limit,
                "language": self.language or language,
            }
        )


class ReverseQuery(BaseModel):
    """Reverse geocoding query: a WGS84 point."""

    lat: float
    lon: float


class GeocodingResult(BaseModel):
    """Single geocoding match, unified across providers, dood!

    Provider specific extras that do not fit the common fields are kept in
    `metadata` using the provider's own field names.
    """

    provider: str  # Provider name, e.g. "opencage"
    coordinates: Coordinates
    formatted_address: str
    bounds: Optional[InputBounds] = None
    components: Dict[str, str] = Field(default_factory=dict)  # Structured address parts
    confidence: Optional[float] = None  # Provider confidence / importance score
    timestamp: Optional[Timestamp] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
