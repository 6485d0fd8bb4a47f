"""
Video Manifest Resolver
Picks the playable rendition URL out of a video XML manifest
"""
from typing import Optional
import logging
import re
import xml.etree.ElementTree as ET

from .base import BaseResolver
from models import VideoManifest, Rendition, bitrate_for
from utils.exceptions import (
    EmptyBodyError,
    FetchError,
    MalformedManifestError,
    NoMatchingRenditionError,
    ParseError,
)


logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


def normalize_manifest_url(url: str) -> str:
    """Percent-encode embedded whitespace."""
    return _WHITESPACE.sub("%20", url or "")


def parse_manifest(text: str, url: str = "") -> VideoManifest:
    """
    Parse video XML into a :class:`VideoManifest`.
    
    Expected shape::
    
        <video>
          <files>
            <file bitrate="hls_1080p">http://.../master.m3u8</file>
            ...
          </files>
        </video>
    
    Only the first ``<files>`` block is read. Text and attributes are trimmed.
    
    Raises:
        ParseError: the text is not well-formed XML
        MalformedManifestError: no ``video/files/file`` entries
    """
    try:
        root = ET.fromstring(text.strip())
    except ET.ParseError as exc:
        raise ParseError(f"Error parsing video xml: {url} - {exc}") from exc
    
    if root.tag != "video":
        raise MalformedManifestError(url)
    
    files = root.find("files")
    if files is None:
        raise MalformedManifestError(url)
    
    renditions = [
        Rendition(
            bitrate=(node.get("bitrate") or "").strip() or None,
            url=(node.text or "").strip(),
        )
        for node in files.findall("file")
    ]
    if not renditions:
        raise MalformedManifestError(url)
    
    return VideoManifest(url=url, renditions=renditions)


class VideoManifestResolver(BaseResolver[str]):
    """
    Resolves a ``cvpXmlUrl`` to a rendition URL.
    
    ``dataSource == "cnn"`` selects the ``hls_1080p`` rendition, anything else
    selects ``ipadFile``. The first match in document order wins.
    """
    
    @property
    def name(self) -> str:
        return "VideoManifest"
    
    async def resolve(self, url: str, data_source: Optional[str] = None) -> str:
        url = normalize_manifest_url(url)
        logger.debug(f"[VideoManifest] Getting video XML: {url}")
        
        try:
            body = await self.fetcher.get_text(url)
        except FetchError as exc:
            self._log_error(f"Error retrieving {url}", exc)
            raise
        
        if not body or not body.strip():
            raise EmptyBodyError(f"Video XML body was empty: {url}")
        
        manifest = parse_manifest(body, url)
        bitrate = bitrate_for(data_source).value
        logger.debug(f"[VideoManifest] dataSource {data_source!r} selects {bitrate}")
        
        rendition = manifest.find(bitrate)
        if rendition is None:
            raise NoMatchingRenditionError(url, bitrate)
        
        logger.debug(f"[VideoManifest] Resolved {rendition.url}")
        return rendition.url
