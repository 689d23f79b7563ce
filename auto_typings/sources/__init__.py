"""Source resolver protocol and implementations."""

from .protocol import SourceResolverProtocol
from .unpkg import UNPKG_BASE_URL
from .unpkg import UnpkgSourceResolver

__all__ = [
    "SourceResolverProtocol",
    "UnpkgSourceResolver",
    "UNPKG_BASE_URL",
]
