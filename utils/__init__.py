"""
Utils Module
Logging and exception helpers
"""
from .logger import setup_logger
from .exceptions import (
    ContentRetrieverError,
    ConfigurationError,
    FetchFailure,
    FetchError,
    EmptyResultError,
    NoContentError,
    NoSlidesError,
    EmptyBodyError,
    NoMatchingRenditionError,
    ParseError,
    MalformedManifestError,
)

__all__ = [
    "setup_logger",
    "ContentRetrieverError",
    "ConfigurationError",
    "FetchFailure",
    "FetchError",
    "EmptyResultError",
    "NoContentError",
    "NoSlidesError",
    "EmptyBodyError",
    "NoMatchingRenditionError",
    "ParseError",
    "MalformedManifestError",
]
