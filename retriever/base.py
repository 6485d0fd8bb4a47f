"""
Base Resolver
Abstract base for the reference resolvers
"""
from abc import ABC, abstractmethod
from typing import Generic, TypeVar
import logging

from .http import HttpFetcher


logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseResolver(ABC, Generic[T]):
    """
    Resolves one kind of reference URL into content.
    
    Resolvers hold no state besides the shared fetcher, so one instance may
    serve any number of concurrent calls.
    """
    
    def __init__(self, fetcher: HttpFetcher):
        self.fetcher = fetcher
    
    @property
    @abstractmethod
    def name(self) -> str:
        pass
    
    @abstractmethod
    async def resolve(self, url: str, *args, **kwargs) -> T:
        pass
    
    def _log_error(self, message: str, error: Exception):
        logger.error(f"[{self.name}] {message}: {error}")
