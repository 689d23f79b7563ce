"""Path arithmetic and home directory utilities."""

from __future__ import annotations

import os
import posixpath
from pathlib import Path


def get_auto_typings_home() -> Path:
    """Get the auto-typings home directory.

    Resolves in order:
    1. AUTO_TYPINGS_HOME environment variable
    2. ~/.auto-typings (default)

    Returns:
        Resolved path to the home directory.
    """
    env_home = os.environ.get("AUTO_TYPINGS_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return (Path.home() / ".auto-typings").resolve()


def join_path(*segments: str) -> str:
    """Join and normalize POSIX path segments.

    Empty segments are ignored, the result is normalized (``.`` and ``..``
    collapsed) and a trailing slash survives. Joining nothing yields ``.``.

    Args:
        segments: Path segments, in order.

    Returns:
        Normalized joined path.
    """
    joined = "/".join(segment for segment in segments if segment)
    if not joined:
        return "."
    normalized = posixpath.normpath(joined)
    if joined.endswith("/") and not normalized.endswith("/"):
        normalized += "/"
    return normalized


def dirname(path: str) -> str:
    """Directory part of a POSIX path, ``.`` when there is none."""
    return posixpath.dirname(path.rstrip("/")) or "."


def strip_dot_slash(path: str) -> str:
    """Drop a leading ``./`` (package.json entries are often written that way)."""
    return path[2:] if path.startswith("./") else path
