"""
GeoAdmin (api3.geo.admin.ch) Data Models

Responses of the Swiss federal geoportal SearchServer and MapServer/identify
endpoints. Swiss LV95 coordinates (EPSG:2056) swap the usual axis names:
`y` is east-west and `x` is north-south.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import InputBounds

SR_LV95 = 2056
SR_WGS84 = 4326
DEFAULT_ORIGINS = "zipcode,gg25,district,kantone,gazetteer,address,parcel"
BUILDING_REGISTER_LAYER = "ch.bfs.gebaeude_wohnungs_register"


class ForwardLocationAttributes(BaseModel):
    """Search result attributes, dood!"""

    model_config = ConfigDict(populate_by_name=True)

    label: str  # HTML label, e.g. "Seftigenstrasse 264 <b>3084 Wabern</b>"
    detail: Optional[str] = None  # Lowercased search detail
    origin: Optional[str] = None  # "address", "zipcode", "gazetteer", ...
    layer_bod_id: Optional[str] = Field(default=None, alias="layerBodId")
    rank: Optional[int] = None
    feature_id: Optional[str] = Field(default=None, alias="featureId")
    geom_quadindex: Optional[str] = None
    geodist: Optional[float] = Field(default=None, alias="@geodist")
    geom_st_box2d: Optional[str] = None
    lat: float  # WGS84 latitude
    lon: float  # WGS84 longitude
    num: Optional[int] = None  # House number
    x: Optional[float] = None  # North-south in the requested reference system
    y: Optional[float] = None  # East-west in the requested reference system
    zoomlevel: Optional[int] = None


class GeoAdminForwardLocation(BaseModel):
    id: Optional[int] = None
    weight: Optional[int] = None
    attrs: ForwardLocationAttributes


class GeoAdminForwardResponse(BaseModel):
    """Full SearchServer response"""

    results: List[GeoAdminForwardLocation]


class ReverseLocationAttributes(BaseModel):
    """Building register attributes of an identified feature"""

    gdenr: Optional[int] = None  # Municipality number
    gdename: Optional[str] = None  # Municipality name
    strname1: str  # Street name
    strname_de: Optional[str] = None
    strname_fr: Optional[str] = None
    strname_rm: Optional[str] = None
    strname_it: Optional[str] = None
    gdekt: Optional[str] = None  # Canton
    label: Optional[str] = None
    gstat: Optional[int] = None
    egid: Optional[int] = None  # Federal building id
    dstrid: Optional[int] = None
    plz6: Optional[int] = None
    bgdi_created: Optional[str] = None
    plz4: int  # Postcode
    plzname: str  # Locality
    deinr: Optional[str] = None  # Entrance (house) number


class GeoAdminReverseLocation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    feature_id: Optional[str] = Field(default=None, alias="featureId")
    layer_bod_id: Optional[str] = Field(default=None, alias="layerBodId")
    layer_name: Optional[str] = Field(default=None, alias="layerName")
    properties: ReverseLocationAttributes
    geometry: Optional[Dict[str, Any]] = None  # GeoJSON geometry in the requested reference system

    def formatAddress(self) -> str:
        """Format as "<street> <number>, <postcode> <locality>"."""
        p = self.properties
        street = f"{p.strname1} {p.deinr}" if p.deinr else p.strname1
        return f"{street}, {p.plz4} {p.plzname}"


class GeoAdminReverseResponse(BaseModel):
    """Full MapServer/identify response"""

    results: List[GeoAdminReverseLocation]


class GeoAdminParams(BaseModel):
    """Parameters for a full SearchServer request.

    Example:
        >>> params = GeoAdminParams(
        ...     searchText="Seftigenstrasse Bern",
        ...     origins="address",
        ...     bbox=InputBounds.fromLonLat(2600967.75, 1197426.0, 2600969.75, 1197428.0),
        ... )

    Note: bbox is given in the `sr` reference system, for LV95 the "lon"
    slot carries the east coordinate and the "lat" slot the north coordinate.
    """

    searchText: str
    origins: str = DEFAULT_ORIGINS
    bbox: Optional[InputBounds] = None
    limit: Optional[int] = 50
    sr: int = SR_LV95
