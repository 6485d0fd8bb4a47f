"""
Content Factor Overlay
Applies editorial overrides (cover art, video, thumbnail) to a hydrated document
"""
from typing import Any, Dict
import logging
import re

from .http import HttpFetcher
from models import ContentDocument, OverlayField, primary_item
from utils.exceptions import FetchError


logger = logging.getLogger(__name__)

_HOST_PREFIX = re.compile(r"^https?://(www|edition)\.cnn\.com")
_KEY_SEPARATORS = re.compile(r"[.\-/]")


def factor_key(url: str) -> str:
    """
    Lookup key for a canonical URL.
    
    >>> factor_key("http://www.cnn.com/2016/a")
    '_2016_a'
    """
    return _KEY_SEPARATORS.sub("_", _HOST_PREFIX.sub("", url or ""))


class ContentFactorOverlay:
    """
    Overlays per-URL overrides from a factors map.
    
    A field is overridden only when ``useCMS.<field>`` is explicitly ``False``
    in the entry. Fetch failures are logged and the document is returned
    unchanged.
    """
    
    def __init__(self, fetcher: HttpFetcher):
        self.fetcher = fetcher
    
    async def overlay(self, document: ContentDocument, factors_url: str) -> ContentDocument:
        item = primary_item(document)
        if item is None or not item.get("url"):
            logger.debug("[Overlay] No primary item url, skipping content factors")
            return document
        
        try:
            factors = await self.fetcher.get_json(factors_url)
        except FetchError as exc:
            logger.warning(f"[Overlay] Content factors unavailable, skipping: {exc}")
            return document
        
        if not isinstance(factors, dict):
            logger.warning(f"[Overlay] Content factors from {factors_url} are not a mapping, skipping")
            return document
        
        key = factor_key(item["url"])
        entry = factors.get(key)
        if not isinstance(entry, dict):
            logger.debug(f"[Overlay] No content factors for {key}")
            return document
        
        self._apply(item, entry)
        return document
    
    def _apply(self, item: Dict[str, Any], entry: Dict[str, Any]):
        use_cms: Dict[str, Any] = entry.get("useCMS") or {}
        for field in OverlayField:
            # overlays only add or replace, never blank out a CMS value
            if use_cms.get(field.value) is False and field.value in entry:
                value = entry[field.value]
                item[field.value] = value
                logger.debug(f"[Overlay] {field.value} overridden with {value!r}")
