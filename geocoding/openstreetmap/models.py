"""
OpenStreetMap Nominatim Data Models

This module mirrors the Nominatim GeoJSON output (format=geojson) as pydantic
models, see https://nominatim.org/release-docs/develop/api/Output/#geojson
"""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ..models import InputBounds


class AddressDetails(BaseModel):
    """Structured address components (addressdetails=1), dood!

    All fields are optional as different locations have different address
    structures. Keys not listed here (e.g. "ISO3166-2-lvl4") are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    house_number: Optional[str] = None
    road: Optional[str] = None
    neighbourhood: Optional[str] = None
    suburb: Optional[str] = None
    city_district: Optional[str] = None
    city: Optional[str] = None
    town: Optional[str] = None
    village: Optional[str] = None
    county: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None  # ISO country code (e.g., "es")
    continent: Optional[str] = None
    construction: Optional[str] = None
    public_building: Optional[str] = None


class ResultProperties(BaseModel):
    """Geocoding result properties"""

    place_id: Optional[int] = None  # Unique place identifier
    osm_type: Optional[str] = None  # node/way/relation
    osm_id: Optional[int] = None
    display_name: str  # Full display name
    place_rank: Optional[int] = None
    category: Optional[str] = None
    type: Optional[str] = None
    importance: Optional[float] = None  # 0..1
    addresstype: Optional[str] = None
    name: Optional[str] = None
    address: Optional[AddressDetails] = None
    extratags: Optional[Dict[str, Optional[str]]] = None  # extratags=1
    namedetails: Optional[Dict[str, str]] = None  # namedetails=1


class ResultGeometry(BaseModel):
    type: str = "Point"
    coordinates: Tuple[float, float]  # [lon, lat]


class OpenstreetmapResult(BaseModel):
    """A GeoJSON feature"""

    type: str = "Feature"
    properties: ResultProperties
    bbox: Optional[Tuple[float, float, float, float]] = None  # [minLon, minLat, maxLon, maxLat]
    geometry: ResultGeometry


class OpenstreetmapResponse(BaseModel):
    """The top-level GeoJSON FeatureCollection returned by search and reverse, dood!

    Example (shortened):
        {
          "type": "FeatureCollection",
          "licence": "Data © OpenStreetMap contributors, ODbL 1.0. https://osm.org/copyright",
          "features": [
            {
              "type": "Feature",
              "properties": {"place_id": 263681481, "display_name": "68, Carrer de Calatrava, ...", ...},
              "bbox": [2.1284918, 41.401227, 2.128952, 41.4015815],
              "geometry": {"type": "Point", "coordinates": [2.12872241167437, 41.40140675]}
            }
          ]
        }
    """

    type: str = "FeatureCollection"
    licence: Optional[str] = None
    features: List[OpenstreetmapResult]


class OpenstreetmapParams(BaseModel):
    """Parameters for a full Nominatim search.

    Example:
        >>> params = OpenstreetmapParams(
        ...     query="UCL CASA",
        ...     addressdetails=True,
        ...     viewbox=InputBounds.fromLonLat(-0.13806939, 51.51989264, -0.13427138, 51.52319711),
        ... )
    """

    query: str
    addressdetails: bool = False
    viewbox: Optional[InputBounds] = None  # Preferred area
    bounded: bool = False  # Restrict results to viewbox
    countrycodes: Optional[List[str]] = None
    limit: Optional[int] = None
    language: Optional[str] = None  # Sent as accept-language
    extratags: bool = False
    namedetails: bool = False
    dedupe: bool = True
