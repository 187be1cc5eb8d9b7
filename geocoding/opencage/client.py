"""
OpenCage Geocoding API Async Client

This module provides the OpencageClient class for the OpenCage Geocoding API
(https://opencagedata.com/api). Free-tier keys are limited to 1 request per
second and a daily quota; the remaining quota is reported in every full
response, see OpencageResponse.remainingCalls().

Note on coordinate order: OpenCage takes reverse queries as "lat, lon" but
bounds as "minLon,minLat,maxLon,maxLat".
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from ..models import Coordinates, ForwardQuery, GeocodingResult, InputBounds
from ..transport import HttpTransport
from ..validation import decodeModel, validateCoordinates, validateForwardQuery
from .models import OpencageResponse, OpencageResult

logger = logging.getLogger(__name__)


class OpencageClient:
    """Async client for OpenCage Geocoding API, dood!

    Stateless: every call is one independent request, nothing is cached.

    Example:
        >>> from geocoding.opencage import OpencageClient
        >>>
        >>> client = OpencageClient(apiKey="your_api_key", language="en")
        >>>
        >>> # Forward geocoding
        >>> results = await client.forward("Schwabing, München")
        >>>
        >>> # Reverse geocoding
        >>> places = await client.reverse(41.40139, 2.12870)
        >>>
        >>> # Full response with annotations
        >>> response = await client.forwardFull(ForwardQuery(address="UCL CASA"))
        >>> print(response.remainingCalls())
    """

    API_BASE_URL = "https://api.opencagedata.com/geocode/v1/json"
    providerName = "opencage"

    def __init__(
        self,
        apiKey: str,
        *,
        baseUrl: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
        bounds: Optional[InputBounds] = None,
        countrycodes: Optional[List[str]] = None,
        limit: Optional[int] = None,
        language: Optional[str] = None,
    ):
        """Initialize OpenCage client.

        Args:
            apiKey: OpenCage API key (required)
            baseUrl: Override endpoint URL (default: API_BASE_URL)
            transport: HTTP transport (default: HttpTransport with default settings)
            bounds: Default search bounds for forward queries
            countrycodes: Default country restriction for forward queries
            limit: Default max number of results for forward queries
            language: Default result language (e.g., "en", "de")

        Raises:
            ValueError: If apiKey is empty
        """
        if not apiKey:
            raise ValueError("OpenCage API key is required")
        self.apiKey = apiKey
        self.baseUrl = baseUrl or self.API_BASE_URL
        self.transport = transport if transport is not None else HttpTransport()
        self.bounds = bounds
        self.countrycodes = countrycodes
        self.limit = limit
        self.language = language

    async def forward(
        self, query: Union[str, ForwardQuery], *, cancelEvent: Optional[asyncio.Event] = None
    ) -> List[GeocodingResult]:
        """Forward geocoding: convert address to coordinates, dood!

        Passes no_annotations=1 and no_record=1 to the API.

        Args:
            query: Address string or ForwardQuery
            cancelEvent: Optional event aborting the request when set

        Returns:
            List of results, empty if nothing matched

        Raises:
            InvalidQueryError: On empty address or bad options (no request is made)
            NetworkError, ProviderError, DecodeError: On request failure
        """
        response = await self._forwardRequest(query, annotations=False, cancelEvent=cancelEvent)
        return [self._toResult(result, response) for result in response.results]

    async def reverse(
        self, lat: float, lon: float, *, cancelEvent: Optional[asyncio.Event] = None
    ) -> List[GeocodingResult]:
        """Reverse geocoding: convert coordinates to address.

        Args:
            lat: Latitude (-90 to 90)
            lon: Longitude (-180 to 180)
            cancelEvent: Optional event aborting the request when set

        Returns:
            List of results (OpenCage returns at most one), empty if nothing matched
        """
        response = await self._reverseRequest(lat, lon, annotations=False, cancelEvent=cancelEvent)
        return [self._toResult(result, response) for result in response.results]

    async def forwardFull(
        self, query: Union[str, ForwardQuery], *, cancelEvent: Optional[asyncio.Event] = None
    ) -> OpencageResponse:
        """Forward geocoding returning the full annotated OpenCage response.

        Please see https://opencagedata.com/api#ambiguous-results for best
        practices. Restricting the search with bounds usually helps.

        Example:
            >>> bounds = InputBounds.fromLonLat(-0.13806939, 51.51989264, -0.13427138, 51.52319711)
            >>> response = await client.forwardFull(ForwardQuery(address="UCL CASA", bounds=bounds))
            >>> print(response.results[0].formatted)
        """
        return await self._forwardRequest(query, annotations=True, cancelEvent=cancelEvent)

    async def reverseFull(
        self,
        lat: float,
        lon: float,
        *,
        language: Optional[str] = None,
        cancelEvent: Optional[asyncio.Event] = None,
    ) -> OpencageResponse:
        """Reverse geocoding returning the full annotated OpenCage response.

        Example:
            >>> response = await client.reverseFull(41.40139, 2.12870)
            >>> print(response.results[0].components["road"])
        """
        return await self._reverseRequest(lat, lon, annotations=True, language=language, cancelEvent=cancelEvent)

    async def _forwardRequest(
        self, query: Union[str, ForwardQuery], *, annotations: bool, cancelEvent: Optional[asyncio.Event]
    ) -> OpencageResponse:
        query = validateForwardQuery(self._applyDefaults(query), self.providerName)

        params: Dict[str, Any] = {
            "q": query.address,
            "no_annotations": 0 if annotations else 1,
        }
        if query.bounds is not None:
            params["bounds"] = query.bounds.toLonLatString()
        if query.countrycodes:
            params["countrycode"] = ",".join(query.countrycodes)
        if query.limit is not None:
            params["limit"] = query.limit
        if query.language:
            params["language"] = query.language

        return await self._makeRequest(params, cancelEvent)

    async def _reverseRequest(
        self,
        lat: float,
        lon: float,
        *,
        annotations: bool,
        language: Optional[str] = None,
        cancelEvent: Optional[asyncio.Event],
    ) -> OpencageResponse:
        validateCoordinates(lat, lon, self.providerName)

        params: Dict[str, Any] = {
            # OpenCage expects lat, lon order
            "q": f"{lat}, {lon}",
            "no_annotations": 0 if annotations else 1,
        }
        language = language or self.language
        if language:
            params["language"] = language

        return await self._makeRequest(params, cancelEvent)

    async def _makeRequest(self, params: Dict[str, Any], cancelEvent: Optional[asyncio.Event]) -> OpencageResponse:
        params["key"] = self.apiKey
        params["no_record"] = 1

        data = await self.transport.getJson(
            self.baseUrl, params, provider=self.providerName, cancelEvent=cancelEvent
        )
        response = decodeModel(OpencageResponse, data, self.providerName)
        logger.debug(f"OpenCage returned {len(response.results)} result(s), remaining calls: {response.remainingCalls()}")
        return response

    def _applyDefaults(self, query: Union[str, ForwardQuery]) -> ForwardQuery:
        return ForwardQuery.fromAny(query).withDefaults(
            bounds=self.bounds, countrycodes=self.countrycodes, limit=self.limit, language=self.language
        )

    def _toResult(self, result: OpencageResult, response: OpencageResponse) -> GeocodingResult:
        bounds = None
        if result.bounds is not None:
            bounds = InputBounds(
                minimum=Coordinates(lat=result.bounds.southwest.lat, lon=result.bounds.southwest.lng),
                maximum=Coordinates(lat=result.bounds.northeast.lat, lon=result.bounds.northeast.lng),
            )

        metadata: Dict[str, Any] = {}
        if result.annotations is not None:
            metadata["annotations"] = result.annotations.model_dump(mode="json", by_alias=True, exclude_none=True)

        return GeocodingResult(
            provider=self.providerName,
            coordinates=Coordinates(lat=result.geometry.lat, lon=result.geometry.lng),
            formatted_address=result.formatted,
            bounds=bounds,
            components={k: str(v) for k, v in result.components.items() if isinstance(v, (str, int, float))},
            confidence=float(result.confidence) if result.confidence is not None else None,
            timestamp=response.timestamp,
            metadata=metadata,
        )
