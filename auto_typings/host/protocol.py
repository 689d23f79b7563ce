"""Protocol for the type-checking host that receives declarations."""

from __future__ import annotations

from typing import Protocol


class TypeCheckingHostProtocol(Protocol):
    """Virtual file set consulted by a type checker.

    Paths are relative to the host's root, e.g.
    ``node_modules/react/index.d.ts``.
    """

    def get_file(self, path: str) -> str | None:
        """Current content at path, or None if the host has no such file."""
        ...

    def set_file(self, path: str, content: str) -> None:
        """Add or replace the file at path."""
        ...
