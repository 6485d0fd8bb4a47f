"""
Document Hydrator
Resolves gallery and video references embedded in a base content document
"""
from typing import Any, Dict, Optional
import asyncio
import logging

from .manifest import VideoManifestResolver
from .references import GalleryResolver, VideoReferenceResolver
from models import (
    ContentDocument,
    ContentItem,
    ContentType,
    ElementType,
    MediaType,
    ReferenceType,
    primary_item,
)
from utils.exceptions import NoContentError


logger = logging.getLogger(__name__)

# Fields copied from a resolved related-video document onto its media entry.
VIDEO_REFERENCE_FIELDS = ("cdnUrls", "headline", "source", "description")

# Primary item types that never carry their own playable video.
NON_VIDEO_TYPES = frozenset({ContentType.ARTICLE.value, ContentType.GALLERY.value})


class DocumentHydrator:
    """
    Hydrates the primary item of a content document in place.
    
    Three passes run concurrently, each owning a disjoint region of the item:
    
    - paragraphs: writes ``slides`` on entries of ``body.paragraphs``
    - related media: writes ``slides``, ``cdnUrls``, ``headline``, ``source``,
      ``description`` and ``m3u8Url`` on entries of ``relatedMedia.media``
    - video content: writes ``m3u8Url`` and ``videoURL`` on the item itself
    
    Within a pass, entries are resolved strictly in order, one network
    round-trip at a time. Passes never write into each other's region, so the
    shared document needs no locking.
    """
    
    def __init__(
        self,
        gallery_resolver: GalleryResolver,
        video_reference_resolver: VideoReferenceResolver,
        manifest_resolver: VideoManifestResolver,
        default_data_source: str = "cnn",
    ):
        self.gallery_resolver = gallery_resolver
        self.video_reference_resolver = video_reference_resolver
        self.manifest_resolver = manifest_resolver
        self.default_data_source = default_data_source
    
    async def hydrate(self, document: ContentDocument) -> ContentDocument:
        """
        Resolve every reference in ``document`` and return the same object.
        
        The first pass error is raised as soon as it happens. Sibling passes
        are not cancelled; whatever they resolve is still written into the
        document.
        
        Raises:
            NoContentError: the document has no primary item
            ContentRetrieverError: any resolver failure
        """
        item = primary_item(document)
        if item is None:
            raise NoContentError("no content found")
        
        await asyncio.gather(
            self.process_paragraphs(item),
            self.process_related_media(item),
            self.process_video_content_type(item),
        )
        return document
    
    def _data_source(self, item: ContentItem) -> str:
        return item.get("dataSource") or self.default_data_source
    
    async def process_paragraphs(self, item: ContentItem):
        """Attach gallery slides to paragraphs whose first element targets a gallery."""
        body = item.get("body") or {}
        paragraphs = body.get("paragraphs") or []
        
        for index, paragraph in enumerate(paragraphs):
            elements = paragraph.get("elements") or []
            if not elements:
                continue
            
            element = elements[0]
            if element.get("type") == ElementType.EMBED.value:
                continue
            
            target = element.get("target") or {}
            if target.get("type") != ReferenceType.GALLERY.value:
                continue
            
            logger.debug(f"[Hydrator] Paragraph {index}: gallery {target.get('referenceUrl')}")
            paragraph["slides"] = await self.gallery_resolver.resolve(target.get("referenceUrl"))
    
    async def process_related_media(self, item: ContentItem):
        """Resolve gallery and video references in ``relatedMedia.media``."""
        related = item.get("relatedMedia") or {}
        media = related.get("media") or []
        data_source = self._data_source(item)
        
        for index, entry in enumerate(media):
            if entry.get("type") != MediaType.REFERENCE.value:
                continue
            
            reference_type = entry.get("referenceType")
            if reference_type == ReferenceType.GALLERY.value:
                logger.debug(f"[Hydrator] Related media {index}: gallery {entry.get('referenceUrl')}")
                entry["slides"] = await self.gallery_resolver.resolve(entry.get("referenceUrl"))
            elif reference_type == ReferenceType.VIDEO.value:
                logger.debug(f"[Hydrator] Related media {index}: video {entry.get('referenceUrl')}")
                await self._hydrate_video_entry(entry, data_source)
    
    async def _hydrate_video_entry(self, entry: Dict[str, Any], data_source: str):
        referenced: Optional[ContentItem] = None
        if entry.get("referenceUrl"):
            referenced = await self.video_reference_resolver.resolve(entry["referenceUrl"])
            for field in VIDEO_REFERENCE_FIELDS:
                if field in referenced:
                    entry[field] = referenced[field]
        
        manifest_url = entry.get("cvpXmlUrl") or (referenced or {}).get("cvpXmlUrl")
        if manifest_url:
            entry["m3u8Url"] = await self.manifest_resolver.resolve(manifest_url, data_source)
            return
        
        hls_url = (entry.get("cdnUrls") or {}).get("hlsVideoURL")
        if hls_url:
            entry["m3u8Url"] = hls_url
    
    async def process_video_content_type(self, item: ContentItem):
        """Set ``m3u8Url`` (and ``videoURL``) on a video primary item."""
        if item.get("type") in NON_VIDEO_TYPES:
            return
        
        hls_url = (item.get("cdnUrls") or {}).get("hlsVideoURL")
        if hls_url:
            item["m3u8Url"] = hls_url
            return
        
        manifest_url = item.get("cvpXmlUrl")
        if not manifest_url:
            return
        
        result = await self.manifest_resolver.resolve(manifest_url, self._data_source(item))
        # m3u8Url drives playback, videoURL drives metadata display
        item["m3u8Url"] = result
        item["videoURL"] = result
