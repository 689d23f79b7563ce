"""Cache protocols and implementations."""

from .disk import DiskCache
from .protocol import SourceCacheProtocol
from .registry import CacheRegistry
from .simple import SimpleCache

__all__ = [
    "CacheRegistry",
    "DiskCache",
    "SimpleCache",
    "SourceCacheProtocol",
]
