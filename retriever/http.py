"""
HTTP Fetcher
GET-with-timeout capability shared by every resolver
"""
from typing import Any, Optional
import logging

import httpx

from config import MIN_TIMEOUT_SECONDS
from utils.exceptions import FetchError, FetchFailure


logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = ("http", "https")


class HttpFetcher:
    """
    Thin wrapper around one ``httpx.AsyncClient``.
    
    Every failure surfaces as :class:`FetchError` with a :class:`FetchFailure`
    cause, so callers never see raw httpx exceptions.
    """
    
    def __init__(
        self,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._closed = False
    
    @property
    def timeout(self) -> float:
        return self._timeout
    
    @timeout.setter
    def timeout(self, value: float):
        self._timeout = max(MIN_TIMEOUT_SECONDS, float(value))
    
    @property
    def closed(self) -> bool:
        return self._closed
    
    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    
    async def close(self):
        """Close the client; later requests fail instead of reopening it."""
        self._closed = True
        if self._client is not None:
            await self._client.aclose()
            self._client = None
    
    async def get_json(self, url: str) -> Any:
        response = await self._get(url)
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(
                f"Response is not JSON - {url}",
                url=url,
                cause=FetchFailure.DECODE,
            ) from exc
    
    async def get_text(self, url: str) -> str:
        response = await self._get(url)
        return response.text
    
    def _check_url(self, url: str):
        if not url:
            raise FetchError("URL is a required argument", url=url, cause=FetchFailure.PROTOCOL)
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise FetchError(f"Invalid URI - {url}", url=url, cause=FetchFailure.PROTOCOL) from exc
        if not parsed.scheme:
            raise FetchError(f"Invalid URI - {url}", url=url, cause=FetchFailure.PROTOCOL)
        if parsed.scheme not in _ALLOWED_SCHEMES:
            raise FetchError(f"Invalid protocol: {parsed.scheme} - {url}", url=url, cause=FetchFailure.PROTOCOL)
        if not parsed.host:
            raise FetchError(f"Invalid URI - {url}", url=url, cause=FetchFailure.PROTOCOL)
    
    async def _get(self, url: str) -> httpx.Response:
        self._check_url(url)
        if self._closed:
            raise FetchError(f"Fetcher is closed - {url}", url=url, cause=FetchFailure.PROTOCOL)
        logger.debug(f"GET {url} with {self.timeout}s timeout")
        
        client = self._get_client()
        try:
            response = await client.get(url, timeout=self.timeout)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise FetchError(f"Timed out after {self.timeout}s - {url}", url=url, cause=FetchFailure.TIMEOUT) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise FetchError(
                f"HTTP {status} - {url}",
                url=url,
                cause=FetchFailure.STATUS,
                status_code=status,
            ) from exc
        except (httpx.UnsupportedProtocol, httpx.InvalidURL) as exc:
            raise FetchError(f"{exc} - {url}", url=url, cause=FetchFailure.PROTOCOL) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"{exc} - {url}", url=url, cause=FetchFailure.UNREACHABLE) from exc
        
        return response
