"""Disk-based cache implementation for declaration sources."""

from __future__ import annotations

import hashlib
import json
import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def _package_of(key: str) -> str:
    """Package part of a file key, version included (``@types/node@20.1.0``)."""
    segments = key.split("/")
    if key.startswith("@") and len(segments) > 1:
        return "/".join(segments[:2])
    return segments[0]


class DiskCache:
    """Disk-based cache for declaration sources.

    Persists fetched files across processes. The CLI places it at
    ``<home>/cache/sources``.

    Entries are grouped in one directory per package version, so a single
    package can be inspected or deleted by hand. Each entry is a JSON
    document holding its key and content; an entry whose stored key does
    not match is treated as a miss. No TTL or eviction.
    """

    def __init__(self, cache_dir: Path) -> None:
        """Initialize disk cache.

        Args:
            cache_dir: Root directory for cached sources.
        """
        self.cache_dir = cache_dir
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def entry_path(self, key: str) -> Path:
        """File holding the entry for key (``<package dir>/<digest>.json``)."""
        package_dir = "".join(c if c.isalnum() or c in "-_.@" else "+" for c in _package_of(key))
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:24]
        return self.cache_dir / package_dir / f"{digest}.json"

    def get(self, key: str) -> str | None:
        """Cached content for key, or None if missing or unreadable."""
        entry = self.entry_path(key)
        if not entry.is_file():
            return None

        try:
            data = json.loads(entry.read_text(encoding="utf-8"))
            stored_key, content = data["key"], data["content"]
        except (json.JSONDecodeError, KeyError, TypeError):
            logger.warning(f"Dropping unreadable cache entry {entry.name} for {key}")
            entry.unlink(missing_ok=True)
            return None

        return content if stored_key == key else None

    def set(self, key: str, content: str) -> None:
        entry = self.entry_path(key)
        entry.parent.mkdir(parents=True, exist_ok=True)
        entry.write_text(json.dumps({"key": key, "content": content}), encoding="utf-8")

    def clear(self) -> None:
        """Remove every package directory below the cache root."""
        if not self.cache_dir.exists():
            return
        for child in self.cache_dir.iterdir():
            if child.is_dir():
                shutil.rmtree(child)
        logger.debug(f"Cleared source cache at {self.cache_dir}")

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
