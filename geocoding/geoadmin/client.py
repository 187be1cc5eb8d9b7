"""
GeoAdmin Async Client

Geocoding for Switzerland through the federal geoportal API
(https://api3.geo.admin.ch/services/sdiservices.html):
- forward geocoding via the Search API (SearchServer)
- reverse geocoding via Identify Features on the building register layer

The unified forward()/reverse() methods work in WGS84 like every other
provider. forwardFull() keeps the native Swiss LV95 reference system by default.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from ..models import Coordinates, ForwardQuery, GeocodingResult, InputBounds
from ..transport import HttpTransport
from ..validation import decodeModel, validateCoordinates, validateForwardQuery
from .models import (
    BUILDING_REGISTER_LAYER,
    SR_WGS84,
    GeoAdminForwardLocation,
    GeoAdminForwardResponse,
    GeoAdminParams,
    GeoAdminReverseLocation,
    GeoAdminReverseResponse,
)

logger = logging.getLogger(__name__)


class GeoAdminClient:
    """Async client for the Swiss GeoAdmin API, dood!

    Example:
        >>> client = GeoAdminClient()
        >>> results = await client.forward("Seftigenstrasse 264, 3084 Wabern")
        >>> places = await client.reverse(46.92793, 7.45135)
    """

    API_BASE_URL = "https://api3.geo.admin.ch/rest/services/api/"
    providerName = "geoadmin"

    def __init__(
        self,
        *,
        baseUrl: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
        bounds: Optional[InputBounds] = None,
        limit: Optional[int] = None,
        language: str = "en",
    ):
        """Initialize GeoAdmin client.

        Args:
            baseUrl: Override endpoint (default: API_BASE_URL)
            transport: HTTP transport (default: HttpTransport with default settings)
            bounds: Default WGS84 search area for forward(), used when a query has none
            limit: Default max number of forward results
            language: Language of identify results ("de", "fr", "it", "rm", "en")
        """
        self.baseUrl = (baseUrl or self.API_BASE_URL).rstrip("/") + "/"
        self.transport = transport if transport is not None else HttpTransport()
        self.bounds = bounds
        self.limit = limit
        self.language = language

    async def forward(
        self, query: Union[str, ForwardQuery], *, cancelEvent: Optional[asyncio.Event] = None
    ) -> List[GeocodingResult]:
        """Forward geocoding of Swiss addresses, dood!

        Searches address origins only and requests WGS84 output.
        Metadata carries the search attributes (origin, feature id, rank), the
        coordinates are taken from attrs.lat/lon.
        Country codes are ignored, the service only covers Switzerland.

        Raises:
            InvalidQueryError: On empty address or bad options (no request is made)
            NetworkError, ProviderError, DecodeError: On request failure
        """
        query = ForwardQuery.fromAny(query).withDefaults(bounds=self.bounds, limit=self.limit)
        query = validateForwardQuery(query, self.providerName)
        params = GeoAdminParams(
            searchText=query.address,
            origins="address",
            bbox=query.bounds,
            limit=query.limit,
            sr=SR_WGS84,
        )
        response = await self.forwardFull(params, cancelEvent=cancelEvent)
        return [self._toForwardResult(location) for location in response.results]

    async def reverse(
        self, lat: float, lon: float, *, cancelEvent: Optional[asyncio.Event] = None
    ) -> List[GeocodingResult]:
        """Reverse geocoding: nearest registered buildings around a WGS84 point.

        Returns:
            Matching buildings formatted as "<street> <number>, <postcode> <locality>",
            empty if no building is within tolerance
        """
        response = await self.reverseFull(lat, lon, cancelEvent=cancelEvent)
        return [self._toReverseResult(location, lat, lon) for location in response.results]

    async def forwardFull(
        self, params: GeoAdminParams, *, cancelEvent: Optional[asyncio.Event] = None
    ) -> GeoAdminForwardResponse:
        """Search API request returning the full response.

        Passes type=locations and the sr, origins, bbox and limit parameters.

        Example:
            >>> params = GeoAdminParams(searchText="Seftigenstrasse Bern", origins="address")
            >>> response = await client.forwardFull(params)
            >>> print(response.results[0].attrs.label)
        """
        validateForwardQuery(ForwardQuery(address=params.searchText, limit=params.limit), self.providerName)

        requestParams: Dict[str, Any] = {
            "searchText": params.searchText.strip(),
            "type": "locations",
            "origins": params.origins,
            "sr": params.sr,
        }
        if params.bbox is not None:
            requestParams["bbox"] = params.bbox.toLonLatString()
        if params.limit is not None:
            requestParams["limit"] = params.limit

        data = await self.transport.getJson(
            f"{self.baseUrl}SearchServer", requestParams, provider=self.providerName, cancelEvent=cancelEvent
        )
        return decodeModel(GeoAdminForwardResponse, data, self.providerName)

    async def reverseFull(
        self, lat: float, lon: float, *, cancelEvent: Optional[asyncio.Event] = None
    ) -> GeoAdminReverseResponse:
        """Identify Features request on the building register layer, WGS84 input."""
        validateCoordinates(lat, lon, self.providerName)

        requestParams: Dict[str, Any] = {
            "geometry": f"{lon},{lat}",
            "geometryType": "esriGeometryPoint",
            "layers": f"all:{BUILDING_REGISTER_LAYER}",
            "mapExtent": "0,0,100,100",
            "imageDisplay": "100,100,100",
            "tolerance": 50,
            "geometryFormat": "geojson",
            "sr": SR_WGS84,
            "lang": self.language,
        }

        data = await self.transport.getJson(
            f"{self.baseUrl}MapServer/identify", requestParams, provider=self.providerName, cancelEvent=cancelEvent
        )
        return decodeModel(GeoAdminReverseResponse, data, self.providerName)

    def _toForwardResult(self, location: GeoAdminForwardLocation) -> GeocodingResult:
        attrs = location.attrs
        metadata = attrs.model_dump(
            include={"origin", "feature_id", "layer_bod_id", "rank", "num", "detail"},
            exclude_none=True,
        )
        return GeocodingResult(
            provider=self.providerName,
            coordinates=Coordinates(lat=attrs.lat, lon=attrs.lon),
            formatted_address=attrs.label.replace("<b>", "").replace("</b>", ""),
            metadata=metadata,
        )

    def _toReverseResult(self, location: GeoAdminReverseLocation, lat: float, lon: float) -> GeocodingResult:
        properties = location.properties
        coordinates = Coordinates(lat=lat, lon=lon)
        geometry = location.geometry or {}
        if geometry.get("type") == "Point":
            pointLon, pointLat = geometry["coordinates"][:2]
            coordinates = Coordinates(lat=pointLat, lon=pointLon)

        components = {
            "road": properties.strname1,
            "postcode": str(properties.plz4),
            "city": properties.plzname,
        }
        if properties.deinr:
            components["house_number"] = properties.deinr
        if properties.gdename:
            components["municipality"] = properties.gdename
        if properties.gdekt:
            components["state_code"] = properties.gdekt

        metadata: Dict[str, Any] = {"feature_id": location.feature_id, "layer_bod_id": location.layer_bod_id}
        if properties.egid is not None:
            metadata["egid"] = properties.egid

        return GeocodingResult(
            provider=self.providerName,
            coordinates=coordinates,
            formatted_address=location.formatAddress(),
            components=components,
            metadata=metadata,
        )
