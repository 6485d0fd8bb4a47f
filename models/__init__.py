"""
Data Models
"""
from .schemas import (
    ContentDocument,
    ContentItem,
    DataSource,
    ContentType,
    ElementType,
    ReferenceType,
    MediaType,
    Bitrate,
    Rendition,
    VideoManifest,
    OverlayField,
    bitrate_for,
    primary_item,
)

__all__ = [
    "ContentDocument",
    "ContentItem",
    "DataSource",
    "ContentType",
    "ElementType",
    "ReferenceType",
    "MediaType",
    "Bitrate",
    "Rendition",
    "VideoManifest",
    "OverlayField",
    "bitrate_for",
    "primary_item",
]
