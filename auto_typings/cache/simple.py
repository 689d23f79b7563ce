"""Simple in-memory cache implementation."""

from __future__ import annotations


class SimpleCache:
    """Simple in-memory cache for declaration sources.

    No TTL or eviction policy - content is cached until clear() is called
    or the process ends. Keys map independently, so several sessions may
    share one instance.
    """

    def __init__(self) -> None:
        """Initialize empty cache."""
        self._cache: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        """Get cached content, or None if not cached."""
        return self._cache.get(key)

    def set(self, key: str, content: str) -> None:
        """Cache content under key."""
        self._cache[key] = content

    def clear(self) -> None:
        """Clear all cached content."""
        self._cache.clear()

    def __contains__(self, key: str) -> bool:
        """Check if key is cached."""
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)
