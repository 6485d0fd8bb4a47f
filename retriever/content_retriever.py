"""
Content Retriever
Fetches a base content model from Hypatia and hydrates its references

Any url indexed by Hypatia is supported: www.cnn.com, edition.cnn.com,
money.cnn.com and www.greatbigstory.com. edition.cnn.com serves the same
content as www.cnn.com, so query edition urls with the www domain.

Usage:
    async with ContentRetriever(url) as retriever:
        base = await retriever.get_base_content_model()
        hydrated = await retriever.get_related_content(base)
"""
from datetime import datetime, timezone
from typing import Optional, Union
from urllib.parse import quote
import logging

from .http import HttpFetcher
from .hydrator import DocumentHydrator
from .manifest import VideoManifestResolver
from .overlay import ContentFactorOverlay
from .references import GalleryResolver, VideoReferenceResolver
from config import MIN_TIMEOUT_SECONDS, Settings, get_settings
from models import ContentDocument
from utils.exceptions import ConfigurationError, ContentRetrieverError, NoContentError


logger = logging.getLogger(__name__)

MAX_ROWS = 100

# encodeURIComponent leaves these unescaped
_URI_COMPONENT_SAFE = "!~*'()"


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC, second precision."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


class ContentRetriever:
    """
    Retrieves a fully hydrated content model for one url.
    
    Resolvers share this retriever's :class:`HttpFetcher`; close it with
    ``async with`` or :meth:`close`.
    """
    
    def __init__(
        self,
        url: str,
        settings: Optional[Settings] = None,
        fetcher: Optional[HttpFetcher] = None,
    ):
        self.url = url
        self.settings = settings or get_settings()
        
        hypatia = self.settings.hypatia
        self.hypatia_host = hypatia.host
        self.hypatia_route = hypatia.route
        self.fetcher = fetcher or HttpFetcher(timeout=hypatia.timeout)
        self.timeout = hypatia.timeout
    
    @property
    def timeout(self) -> float:
        """Per-request timeout in seconds."""
        return self.fetcher.timeout
    
    @timeout.setter
    def timeout(self, value: Union[int, float, str]):
        try:
            seconds = float(value)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid timeout: {value!r}") from exc
        
        self.fetcher.timeout = max(MIN_TIMEOUT_SECONDS, seconds)
        logger.debug(f"Set request timeout to {self.fetcher.timeout}s")
    
    @property
    def api_endpoint(self) -> str:
        return f"{self.hypatia_host}{self.hypatia_route}"
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    
    async def close(self):
        await self.fetcher.close()
    
    def base_query_url(self) -> str:
        return f"{self.api_endpoint}url:{quote(self.url, safe=_URI_COMPONENT_SAFE)}"
    
    async def get_base_content_model(self) -> ContentDocument:
        """
        Get the base (unhydrated) content model for :attr:`url`.
        
        Raises:
            FetchError: the Hypatia request failed
            NoContentError: Hypatia returned no documents
        """
        query_url = self.base_query_url()
        logger.debug(f"Hypatia query: {query_url} with {self.timeout}s timeout")
        
        body = await self.fetcher.get_json(query_url)
        if not isinstance(body, dict) or not body.get("docs"):
            raise NoContentError("no content found", {"url": self.url})
        
        return body
    
    def recent_publishes_url(
        self,
        content_type: Optional[str] = None,
        data_source: Optional[str] = None,
        rows: Optional[int] = None,
        since: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """Build the recent-publishes query; segment order is fixed."""
        segments = []
        if content_type:
            segments.append(f"type:{content_type}/")
        if data_source:
            segments.append(f"dataSource:{data_source}/")
        if rows is not None:
            segments.append(f"rows:{min(int(rows), MAX_ROWS)}/")
        if since is not None:
            now = now or datetime.now(timezone.utc)
            segments.append(f"lastPublishDate:{format_timestamp(since)}~{format_timestamp(now)}/")
        segments.append("sort:lastPublishDate/")
        
        return f"{self.api_endpoint}{''.join(segments)}"
    
    async def get_recent_publishes(
        self,
        content_type: Optional[str] = None,
        data_source: Optional[str] = None,
        rows: Optional[int] = None,
        since: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> ContentDocument:
        """List recently published documents; an empty ``docs`` list is valid."""
        query_url = self.recent_publishes_url(content_type, data_source, rows, since, now)
        logger.debug(f"Hypatia recent publishes query: {query_url}")
        
        body = await self.fetcher.get_json(query_url)
        if not isinstance(body, dict):
            raise NoContentError("no content found", {"query": query_url})
        body.setdefault("docs", [])
        return body
    
    def _hydrator(self) -> DocumentHydrator:
        return DocumentHydrator(
            gallery_resolver=GalleryResolver(self.fetcher),
            video_reference_resolver=VideoReferenceResolver(self.fetcher),
            manifest_resolver=VideoManifestResolver(self.fetcher),
            default_data_source=self.settings.hypatia.default_data_source,
        )
    
    async def get_related_content(self, document: ContentDocument) -> ContentDocument:
        """Hydrate ``document`` in place and return it."""
        try:
            return await self._hydrator().hydrate(document)
        except ContentRetrieverError as exc:
            logger.error(f"Hydration failed for {self.url}: {exc}")
            raise
    
    async def apply_content_factors(
        self,
        document: ContentDocument,
        factors_url: Optional[str] = None,
    ) -> ContentDocument:
        """Overlay content factors; never raises on fetch failure."""
        factors_url = factors_url or self.settings.factors.url
        if not factors_url:
            return document
        return await ContentFactorOverlay(self.fetcher).overlay(document, factors_url)
    
    async def retrieve(self, factors_url: Optional[str] = None) -> ContentDocument:
        """Base model, hydration, then the optional factor overlay."""
        document = await self.get_base_content_model()
        document = await self.get_related_content(document)
        return await self.apply_content_factors(document, factors_url)
