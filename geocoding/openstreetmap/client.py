"""
OpenStreetMap Nominatim Async Client

This module provides the OpenstreetmapClient class for the Nominatim API
(https://nominatim.org/release-docs/develop/api/Overview/). The public
instance is free but its usage policy requires an identifying User-Agent and
allows at most 1 request per second. Self-hosted instances and
Nominatim-compatible services are supported through baseUrl (and apiKey
where the service needs one).
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from ..models import Coordinates, ForwardQuery, GeocodingResult, InputBounds
from ..transport import HttpTransport
from ..validation import decodeModel, validateCoordinates, validateForwardQuery
from .models import OpenstreetmapParams, OpenstreetmapResponse, OpenstreetmapResult

logger = logging.getLogger(__name__)


class OpenstreetmapClient:
    """Async client for OpenStreetMap Nominatim, dood!

    Always requests GeoJSON output. Stateless: every call is one independent
    request, nothing is cached.

    Example:
        >>> from geocoding.openstreetmap import OpenstreetmapClient
        >>>
        >>> client = OpenstreetmapClient(countrycodes=["de"])
        >>>
        >>> # Forward geocoding
        >>> results = await client.forward("Schwabing, München")
        >>>
        >>> # Reverse geocoding
        >>> places = await client.reverse(41.40139, 2.12870)
    """

    API_BASE_URL = "https://nominatim.openstreetmap.org/"
    providerName = "openstreetmap"

    def __init__(
        self,
        *,
        baseUrl: Optional[str] = None,
        apiKey: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
        bounds: Optional[InputBounds] = None,
        countrycodes: Optional[List[str]] = None,
        limit: Optional[int] = None,
        language: Optional[str] = None,
        email: Optional[str] = None,
    ):
        """Initialize Nominatim client.

        Args:
            baseUrl: Override endpoint, e.g. a self-hosted instance (default: API_BASE_URL)
            apiKey: Optional API key for Nominatim-compatible commercial services
            transport: HTTP transport (default: HttpTransport with default settings)
            bounds: Default search bounds for forward queries
            countrycodes: Default country restriction for forward queries
            limit: Default max number of results for forward queries
            language: Default result language, sent as accept-language
            email: Optional contact email, recommended by the usage policy for bulk use
        """
        self.baseUrl = (baseUrl or self.API_BASE_URL).rstrip("/") + "/"
        self.apiKey = apiKey
        self.transport = transport if transport is not None else HttpTransport()
        self.bounds = bounds
        self.countrycodes = countrycodes
        self.limit = limit
        self.language = language
        self.email = email

    async def forward(
        self, query: Union[str, ForwardQuery], *, cancelEvent: Optional[asyncio.Event] = None
    ) -> List[GeocodingResult]:
        """Forward geocoding: convert address to coordinates, dood!

        Bounds given in the query (or as client default) restrict the search
        area (viewbox + bounded=1).

        Args:
            query: Address string or ForwardQuery
            cancelEvent: Optional event aborting the request when set

        Returns:
            List of results, empty if nothing matched

        Raises:
            InvalidQueryError: On empty address or bad options (no request is made)
            NetworkError, ProviderError, DecodeError: On request failure
        """
        query = self._applyDefaults(query)
        query = validateForwardQuery(query, self.providerName)
        params = OpenstreetmapParams(
            query=query.address,
            addressdetails=True,
            viewbox=query.bounds,
            bounded=query.bounds is not None,
            countrycodes=query.countrycodes,
            limit=query.limit,
            language=query.language,
        )
        response = await self.forwardFull(params, cancelEvent=cancelEvent)
        return [self._toResult(feature) for feature in response.features]

    async def reverse(
        self, lat: float, lon: float, *, cancelEvent: Optional[asyncio.Event] = None
    ) -> List[GeocodingResult]:
        """Reverse geocoding: convert coordinates to address.

        Args:
            lat: Latitude (-90 to 90)
            lon: Longitude (-180 to 180)
            cancelEvent: Optional event aborting the request when set

        Returns:
            List with the nearest OSM object, empty if Nominatim could not geocode the point
        """
        response = await self.reverseFull(lat, lon, cancelEvent=cancelEvent)
        return [self._toResult(feature) for feature in response.features]

    async def forwardFull(
        self, params: OpenstreetmapParams, *, cancelEvent: Optional[asyncio.Event] = None
    ) -> OpenstreetmapResponse:
        """Forward geocoding returning the full GeoJSON FeatureCollection.

        See https://nominatim.org/release-docs/develop/api/Search/ for details.

        Example:
            >>> params = OpenstreetmapParams(query="UCL CASA", addressdetails=True)
            >>> response = await client.forwardFull(params)
            >>> print(response.features[0].properties.display_name)
        """
        validateForwardQuery(
            ForwardQuery(
                address=params.query,
                bounds=params.viewbox,
                countrycodes=params.countrycodes,
                limit=params.limit,
            ),
            self.providerName,
        )

        requestParams: Dict[str, Any] = {
            "q": params.query.strip(),
            "addressdetails": 1 if params.addressdetails else 0,
            "extratags": 1 if params.extratags else 0,
            "namedetails": 1 if params.namedetails else 0,
            "dedupe": 1 if params.dedupe else 0,
        }
        if params.viewbox is not None:
            requestParams["viewbox"] = params.viewbox.toLonLatString()
        if params.bounded:
            requestParams["bounded"] = 1
        if params.countrycodes:
            requestParams["countrycodes"] = ",".join(code.lower() for code in params.countrycodes)
        if params.limit is not None:
            requestParams["limit"] = params.limit
        if params.language:
            requestParams["accept-language"] = params.language

        return await self._makeRequest("search", requestParams, cancelEvent)

    async def reverseFull(
        self,
        lat: float,
        lon: float,
        *,
        zoom: Optional[int] = None,
        language: Optional[str] = None,
        cancelEvent: Optional[asyncio.Event] = None,
    ) -> OpenstreetmapResponse:
        """Reverse geocoding returning the full GeoJSON FeatureCollection.

        Args:
            lat: Latitude (-90 to 90)
            lon: Longitude (-180 to 180)
            zoom: Detail level (3-18, higher = more detailed)
            language: Result language, overrides client default
            cancelEvent: Optional event aborting the request when set
        """
        validateCoordinates(lat, lon, self.providerName)

        requestParams: Dict[str, Any] = {
            "lat": lat,
            "lon": lon,
            "addressdetails": 1,
        }
        if zoom is not None:
            requestParams["zoom"] = zoom
        language = language or self.language
        if language:
            requestParams["accept-language"] = language

        return await self._makeRequest("reverse", requestParams, cancelEvent)

    async def _makeRequest(
        self, endpoint: str, params: Dict[str, Any], cancelEvent: Optional[asyncio.Event]
    ) -> OpenstreetmapResponse:
        params["format"] = "geojson"
        if self.email:
            params["email"] = self.email
        if self.apiKey:
            params["api_key"] = self.apiKey

        data = await self.transport.getJson(
            f"{self.baseUrl}{endpoint}", params, provider=self.providerName, cancelEvent=cancelEvent
        )

        # Nominatim answers "nothing here" with 200 and {"error": "Unable to geocode"}
        if isinstance(data, dict) and "error" in data and "features" not in data:
            logger.info(f"Nominatim {endpoint} returned no result: {data['error']}")
            return OpenstreetmapResponse(features=[])

        return decodeModel(OpenstreetmapResponse, data, self.providerName)

    def _applyDefaults(self, query: Union[str, ForwardQuery]) -> ForwardQuery:
        return ForwardQuery.fromAny(query).withDefaults(
            bounds=self.bounds, countrycodes=self.countrycodes, limit=self.limit, language=self.language
        )

    def _toResult(self, feature: OpenstreetmapResult) -> GeocodingResult:
        properties = feature.properties
        lon, lat = feature.geometry.coordinates

        bounds = None
        if feature.bbox is not None:
            bounds = InputBounds.fromSequence(feature.bbox)

        components: Dict[str, str] = {}
        if properties.address is not None:
            components = {
                k: str(v) for k, v in properties.address.model_dump(exclude_none=True).items() if v is not None
            }

        metadata = properties.model_dump(
            include={"place_id", "osm_type", "osm_id", "place_rank", "category", "type", "addresstype", "name"},
            exclude_none=True,
        )
        if properties.extratags:
            metadata["extratags"] = properties.extratags
        if properties.namedetails:
            metadata["namedetails"] = properties.namedetails

        return GeocodingResult(
            provider=self.providerName,
            coordinates=Coordinates(lat=lat, lon=lon),
            formatted_address=properties.display_name,
            bounds=bounds,
            components=components,
            confidence=properties.importance,
            metadata=metadata,
        )
