"""Protocol for declaration source caching."""

from __future__ import annotations

from typing import Protocol


class SourceCacheProtocol(Protocol):
    """Protocol for caching fetched declaration content.

    Auto-typings provides SimpleCache (in-memory) and DiskCache.
    A miss is a normal result (None), never an exception.
    """

    def get(self, key: str) -> str | None:
        """Get cached content.

        Args:
            key: File key (``package[@version]/path``).

        Returns:
            Cached content, or None if not cached.
        """
        ...

    def set(self, key: str, content: str) -> None:
        """Cache content.

        Args:
            key: File key.
            content: Declaration or package.json text.
        """
        ...

    def clear(self) -> None:
        """Clear all cached content."""
        ...

    def __contains__(self, key: str) -> bool:
        """Check if key is cached."""
        ...
