"""
Async HTTP transport shared by all geocoding provider clients.

Single point for all HTTP requests: builds the httpx session, maps transport
failures and HTTP statuses to GeocodingError subclasses, decodes JSON and
supports caller-driven cancellation and an optional retry hook.
"""

import asyncio
import logging
import ssl
from typing import Any, Dict, Optional, Protocol, Union

import httpx

from .errors import (
    AuthenticationError,
    DecodeError,
    GeocodingCancelledError,
    GeocodingError,
    InvalidQueryError,
    NetworkError,
    ProviderError,
    QuotaExceededError,
)
from .tls import resolveVerify

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Python-Geocoding"
DEFAULT_REQUEST_TIMEOUT = 10.0


class RetryPolicy(Protocol):
    """Caller-supplied retry hook, dood!

    No retries happen unless a policy is given. After each failed attempt the
    transport asks the policy what to do.
    """

    def getRetryDelay(self, attempt: int, error: GeocodingError) -> Optional[float]:
        """Decide whether to retry a failed attempt.

        Args:
            attempt: Number of the attempt that just failed (starts at 1)
            error: The error that attempt raised

        Returns:
            Delay in seconds before the next attempt, or None to give up
        """
        ...


class HttpTransport:
    """Async JSON-over-HTTPS transport with typed errors, dood!

    Creates new HTTP session for each request unless a shared
    httpx.AsyncClient is given. A shared client acts as connection pool, it is
    only used for requests and never closed by the transport.

    Example:
        >>> transport = HttpTransport(requestTimeout=5, tls="system")
        >>> data = await transport.getJson("https://example.org/search", {"q": "Berlin"}, provider="demo")
    """

    def __init__(
        self,
        *,
        requestTimeout: float = DEFAULT_REQUEST_TIMEOUT,
        tls: Union[str, ssl.SSLContext, None] = None,
        caBundle: Optional[str] = None,
        userAgent: str = DEFAULT_USER_AGENT,
        retryPolicy: Optional[RetryPolicy] = None,
        httpClient: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize transport.

        Args:
            requestTimeout: HTTP request timeout in seconds (default: 10)
            tls: TLS backend name ("certifi", "system") or ready SSLContext (default: certifi)
            caBundle: Optional path to custom CA bundle, overrides tls backend name
            userAgent: User-Agent header sent with every request
            retryPolicy: Optional retry hook (default: no retries)
            httpClient: Optional shared httpx.AsyncClient to reuse connections
        """
        self.requestTimeout = requestTimeout
        self.verify = resolveVerify(tls, caBundle)
        self.userAgent = userAgent
        self.retryPolicy = retryPolicy
        self.httpClient = httpClient

    async def getJson(
        self,
        url: str,
        params: Dict[str, Any],
        *,
        provider: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        cancelEvent: Optional[asyncio.Event] = None,
    ) -> Any:
        """Send GET request and return decoded JSON body.

        Args:
            url: Full endpoint URL
            params: Query parameters
            provider: Provider name, attached to raised errors
            headers: Extra request headers
            cancelEvent: Optional event, setting it aborts the in-flight request

        Returns:
            Decoded JSON document

        Raises:
            NetworkError: On transport failure, timeout or malformed URL
            InvalidQueryError: If the parameters cannot be encoded into the URL
            GeocodingCancelledError: If cancelEvent was set before the response arrived
            ProviderError: On non-2xx status (AuthenticationError, QuotaExceededError for known cases)
            DecodeError: If the body is not valid JSON
        """
        requestHeaders = {"User-Agent": self.userAgent}
        if headers:
            requestHeaders.update(headers)

        attempt = 0
        while True:
            attempt += 1
            if cancelEvent is not None and cancelEvent.is_set():
                raise GeocodingCancelledError(provider=provider)
            try:
                response = await self._sendCancellable(url, params, requestHeaders, provider, cancelEvent)
                return self._decodeResponse(response, provider)
            except GeocodingCancelledError:
                raise
            except GeocodingError as e:
                if self.retryPolicy is None:
                    raise
                delay = self.retryPolicy.getRetryDelay(attempt, e)
                if delay is None:
                    raise
                logger.info(f"Attempt {attempt} to {url} failed ({e}), retrying in {delay}s")
                await self._waitRetryDelay(delay, provider, cancelEvent)

    async def _waitRetryDelay(
        self, delay: float, provider: Optional[str], cancelEvent: Optional[asyncio.Event]
    ) -> None:
        """Sleep before the next attempt, waking up early if cancelEvent gets set."""
        if cancelEvent is None:
            await asyncio.sleep(delay)
            return

        try:
            await asyncio.wait_for(cancelEvent.wait(), delay)
        except asyncio.TimeoutError:
            return
        logger.info("Retry cancelled by caller")
        raise GeocodingCancelledError(provider=provider)

    async def _sendCancellable(
        self,
        url: str,
        params: Dict[str, Any],
        headers: Dict[str, str],
        provider: Optional[str],
        cancelEvent: Optional[asyncio.Event],
    ) -> httpx.Response:
        if cancelEvent is None:
            return await self._send(url, params, headers, provider)

        requestTask = asyncio.ensure_future(self._send(url, params, headers, provider))
        cancelTask = asyncio.ensure_future(cancelEvent.wait())
        try:
            done, _ = await asyncio.wait({requestTask, cancelTask}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelTask.cancel()
            if not requestTask.done():
                requestTask.cancel()

        if requestTask in done:
            return requestTask.result()

        # Let the aborted request unwind before reporting
        await asyncio.gather(requestTask, return_exceptions=True)
        logger.info(f"Request to {url} cancelled by caller")
        raise GeocodingCancelledError(provider=provider)

    async def _send(
        self, url: str, params: Dict[str, Any], headers: Dict[str, str], provider: Optional[str]
    ) -> httpx.Response:
        logger.debug(f"Making request to {url} with params: {self._maskParams(params)}")
        try:
            if self.httpClient is not None:
                return await self.httpClient.get(url, params=params, headers=headers, timeout=self.requestTimeout)

            # Create new session for each request
            async with httpx.AsyncClient(timeout=self.requestTimeout, verify=self.verify) as session:
                return await session.get(url, params=params, headers=headers)

        except httpx.TimeoutException as e:
            logger.error(f"Request timeout: {url}")
            raise NetworkError(f"Request timeout: {e}", provider) from e

        except httpx.RequestError as e:
            logger.error(f"Network error: {e}")
            raise NetworkError(f"Network error: {e}", provider) from e

        except httpx.InvalidURL as e:
            logger.error(f"Invalid request URL {url}: {e}")
            raise NetworkError(f"Invalid request URL: {e}", provider) from e

        except UnicodeEncodeError as e:
            logger.error(f"Request parameters are not encodable: {e}")
            raise InvalidQueryError(f"Request parameters are not encodable: {e}", provider) from e

    def _decodeResponse(self, response: httpx.Response, provider: Optional[str]) -> Any:
        status = response.status_code

        if 200 <= status < 300:
            try:
                data = response.json()
            except ValueError as e:
                logger.error(f"Failed to parse JSON response: {e}")
                raise DecodeError(f"Invalid JSON in response: {e}", provider) from e
            logger.debug(f"API request successful: {status}")
            return data

        body = response.text
        if status in (401, 403):
            logger.error(f"Authentication failed: {status}")
            raise AuthenticationError(status, body, provider, "Invalid or disabled API key")
        elif status in (402, 429):
            logger.error(f"Quota or rate limit exceeded: {status}")
            raise QuotaExceededError(status, body, provider, "Quota or rate limit exceeded")
        elif status >= 500:
            logger.error(f"Server error: {status}")
        else:
            logger.error(f"API request failed: {status}")
            logger.error(f"Response text: {body}")
        raise ProviderError(status, body, provider)

    @staticmethod
    def _maskParams(params: Dict[str, Any]) -> Dict[str, Any]:
        """Hide credentials from debug logs."""
        return {k: ("***" if k in ("key", "api_key") else v) for k, v in params.items()}
