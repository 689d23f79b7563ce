"""Type-checking host protocol and implementations."""

from .directory import DirectoryHost
from .memory import InMemoryHost
from .protocol import TypeCheckingHostProtocol

__all__ = [
    "DirectoryHost",
    "InMemoryHost",
    "TypeCheckingHostProtocol",
]
