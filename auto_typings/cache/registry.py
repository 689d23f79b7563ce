"""Registry of named caches shared between sessions."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .protocol import SourceCacheProtocol
from .simple import SimpleCache

logger = logging.getLogger(__name__)

DEFAULT_CACHE_NAME = "default"


class CacheRegistry:
    """Holds caches that several editor sessions may share.

    The application owns the registry and passes it to every session that
    should share a cache; sessions without one get a private cache.
    """

    def __init__(self) -> None:
        self._caches: dict[str, SourceCacheProtocol] = {}

    def get_or_create(
        self,
        name: str = DEFAULT_CACHE_NAME,
        factory: Callable[[], SourceCacheProtocol] = SimpleCache,
    ) -> SourceCacheProtocol:
        """Return the cache registered under name, creating it on first use.

        Args:
            name: Cache name.
            factory: Builds the cache when none is registered yet.

        Returns:
            The registered cache.
        """
        cache = self._caches.get(name)
        if cache is None:
            cache = factory()
            self._caches[name] = cache
            logger.debug(f"Created shared cache '{name}' ({type(cache).__name__})")
        return cache

    def register(self, cache: SourceCacheProtocol, name: str = DEFAULT_CACHE_NAME) -> None:
        """Register an existing cache, replacing any cache with the same name."""
        self._caches[name] = cache

    def clear_all(self) -> None:
        """Clear the contents of every registered cache."""
        for cache in self._caches.values():
            cache.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._caches
