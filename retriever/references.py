"""
Reference Resolvers
Gallery slides and related-video documents
"""
from typing import Any, Dict, List
import logging

from .base import BaseResolver
from models import ContentItem, primary_item
from utils.exceptions import EmptyResultError, FetchError, NoSlidesError


logger = logging.getLogger(__name__)


class GalleryResolver(BaseResolver[List[Dict[str, Any]]]):
    """Fetches a gallery document and returns its slides unmodified."""
    
    @property
    def name(self) -> str:
        return "Gallery"
    
    async def resolve(self, url: str) -> List[Dict[str, Any]]:
        try:
            body = await self.fetcher.get_json(url)
        except FetchError as exc:
            self._log_error(f"Failed to fetch gallery {url}", exc)
            raise
        
        item = primary_item(body)
        if not item or item.get("slides") is None:
            raise NoSlidesError(url)
        
        slides = item["slides"]
        logger.debug(f"[Gallery] {len(slides)} slides from {url}")
        return slides


class VideoReferenceResolver(BaseResolver[ContentItem]):
    """Fetches a related-video document and returns its primary item."""
    
    @property
    def name(self) -> str:
        return "VideoReference"
    
    async def resolve(self, url: str) -> ContentItem:
        try:
            body = await self.fetcher.get_json(url)
        except FetchError as exc:
            self._log_error(f"Failed to fetch video reference {url}", exc)
            raise
        
        item = primary_item(body)
        if item is None:
            raise EmptyResultError(f"No video document at {url}")
        return item
