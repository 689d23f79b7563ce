"""Protocol for declaration source lookup."""

from __future__ import annotations

from typing import Protocol


class SourceResolverProtocol(Protocol):
    """Protocol for fetching files out of published packages.

    Auto-typings provides UnpkgSourceResolver. Apps may plug in a private
    registry mirror or a local node_modules reader.
    """

    async def fetch(self, package_name: str, sub_path: str, version: str | None = None) -> str | None:
        """Fetch one file from a package.

        Args:
            package_name: Package name, including @scope/ if scoped.
            sub_path: File path inside the package (e.g. ``index.d.ts``,
                ``package.json``, ``lib/package.json``).
            version: Version or dist-tag; latest when None.

        Returns:
            File content, or None if the package or file does not exist.

        Raises:
            SourceFetchError: On transport failures or unexpected responses.
        """
        ...
