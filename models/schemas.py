"""
Data Models / Schemas
Wire vocabulary of Hypatia documents and video manifests
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# Hydrated documents stay plain JSON mappings; consumers depend on the wire shape.
ContentDocument = Dict[str, Any]
ContentItem = Dict[str, Any]


class DataSource(str, Enum):
    """Known ``dataSource`` values"""
    CNN = "cnn"
    MONEY = "money"
    GREAT_BIG_STORY = "gbs"


class ContentType(str, Enum):
    """Primary item ``type`` values"""
    ARTICLE = "article"
    GALLERY = "gallery"
    VIDEO = "video"


class ElementType(str, Enum):
    """Paragraph element ``type`` values the hydrator cares about"""
    EMBED = "embed"


class ReferenceType(str, Enum):
    """``target.type`` / ``referenceType`` values that trigger resolution"""
    GALLERY = "gallery"
    VIDEO = "video"


class MediaType(str, Enum):
    """Related-media entry ``type`` values"""
    REFERENCE = "reference"


class Bitrate(str, Enum):
    """Manifest rendition labels"""
    HLS_1080P = "hls_1080p"
    IPAD = "ipadFile"


class Rendition(BaseModel):
    """One playable file listed in a video manifest"""
    bitrate: Optional[str] = Field(None, description="bitrate label")
    url: str = Field("", description="playable URL")


class VideoManifest(BaseModel):
    """Parsed video XML"""
    url: str = Field(..., description="manifest URL")
    renditions: List[Rendition] = Field(default_factory=list, description="renditions in document order")
    
    def find(self, bitrate: str) -> Optional[Rendition]:
        """First rendition with a URL whose label equals ``bitrate``."""
        for rendition in self.renditions:
            if rendition.bitrate == bitrate and rendition.url:
                return rendition
        return None


class OverlayField(str, Enum):
    """Fields a content-factors entry may override"""
    COVER_ART = "coverArt"
    PAGE_TOP_OVERRIDE = "pageTopOverride"
    VIDEO_URL = "videoURL"
    THUMBNAIL_URL = "thumbnailURL"


def bitrate_for(data_source: Optional[str]) -> Bitrate:
    """Rendition label to select for a data source."""
    if data_source == DataSource.CNN.value:
        return Bitrate.HLS_1080P
    return Bitrate.IPAD


def primary_item(document: ContentDocument) -> Optional[ContentItem]:
    """Index-0 entry of ``docs``, or None."""
    docs = document.get("docs") if isinstance(document, dict) else None
    if not docs:
        return None
    return docs[0]
