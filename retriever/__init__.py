"""
Retriever Module
"""
from .http import HttpFetcher
from .base import BaseResolver
from .manifest import VideoManifestResolver, parse_manifest, normalize_manifest_url
from .references import GalleryResolver, VideoReferenceResolver
from .hydrator import DocumentHydrator
from .overlay import ContentFactorOverlay, factor_key
from .content_retriever import ContentRetriever

__all__ = [
    "HttpFetcher",
    "BaseResolver",
    "VideoManifestResolver",
    "parse_manifest",
    "normalize_manifest_url",
    "GalleryResolver",
    "VideoReferenceResolver",
    "DocumentHydrator",
    "ContentFactorOverlay",
    "factor_key",
    "ContentRetriever",
]
