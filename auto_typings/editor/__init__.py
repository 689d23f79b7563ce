"""Editing surface protocol and implementations."""

from .file import FileSurface
from .protocol import EditorSurfaceProtocol
from .protocol import Subscription

__all__ = [
    "EditorSurfaceProtocol",
    "FileSurface",
    "Subscription",
]
