"""
Custom Exceptions
Error hierarchy for content retrieval and hydration
"""
from enum import Enum
from typing import Optional


class ContentRetrieverError(Exception):
    """Base class for every error raised by the retriever"""
    
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)
    
    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(ContentRetrieverError):
    """Invalid configuration value"""
    pass


class FetchFailure(str, Enum):
    """Why a network call failed"""
    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    PROTOCOL = "protocol"
    STATUS = "status"
    DECODE = "decode"


class FetchError(ContentRetrieverError):
    """Transport, timeout, protocol or URI failure"""
    
    def __init__(
        self,
        message: str,
        url: str = None,
        cause: FetchFailure = FetchFailure.UNREACHABLE,
        status_code: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, kwargs)
        self.url = url
        self.cause = cause
        self.status_code = status_code


class EmptyResultError(ContentRetrieverError):
    """A lookup returned nothing where something was expected"""
    pass


class NoContentError(EmptyResultError):
    """Base lookup returned zero documents"""
    pass


class NoSlidesError(EmptyResultError):
    """Gallery document has no slides"""
    
    def __init__(self, url: str, **kwargs):
        super().__init__(f"No slides in gallery: {url}", kwargs)
        self.url = url


class EmptyBodyError(EmptyResultError):
    """Manifest response body was empty"""
    pass


class NoMatchingRenditionError(EmptyResultError):
    """No manifest rendition carries the requested bitrate label"""
    
    def __init__(self, url: str, bitrate: str, **kwargs):
        super().__init__(f"No {bitrate} rendition in {url}", kwargs)
        self.url = url
        self.bitrate = bitrate


class ParseError(ContentRetrieverError):
    """Malformed XML"""
    pass


class MalformedManifestError(ContentRetrieverError):
    """Manifest parsed but lacks a usable rendition list"""
    
    def __init__(self, url: str, **kwargs):
        super().__init__(f"{url} is blank or malformed.", kwargs)
        self.url = url
