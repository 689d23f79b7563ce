"""Source resolver backed by the unpkg CDN."""

from __future__ import annotations

import logging

import httpx

from auto_typings.exceptions import SourceFetchError

logger = logging.getLogger(__name__)

UNPKG_BASE_URL = "https://unpkg.com"


class UnpkgSourceResolver:
    """Fetch package files over HTTP from unpkg (or a compatible mirror).

    URL layout: ``<base_url>/<package>[@<version>]/<sub_path>``.
    A 404 means "not found" and yields None; every other failure raises
    SourceFetchError.

    Pass a shared ``httpx.AsyncClient`` to reuse connections across
    resolvers; otherwise one is created lazily and closed by aclose().
    """

    def __init__(
        self,
        base_url: str = UNPKG_BASE_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize resolver.

        Args:
            base_url: Registry CDN root.
            client: Optional shared client (not closed by this resolver).
            timeout: Request timeout in seconds for an owned client.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def build_url(self, package_name: str, sub_path: str, version: str | None = None) -> str:
        """URL of one file inside a package."""
        package = f"{package_name}@{version}" if version else package_name
        sub_path = sub_path.lstrip("/")
        return f"{self.base_url}/{package}/{sub_path}" if sub_path else f"{self.base_url}/{package}"

    async def fetch(self, package_name: str, sub_path: str, version: str | None = None) -> str | None:
        """Fetch one file from a package.

        Returns:
            File content, or None on 404.

        Raises:
            SourceFetchError: On transport errors or non-404 error statuses.
        """
        url = self.build_url(package_name, sub_path, version)
        client = self._get_client()

        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise SourceFetchError(f"Failed to fetch {url}: {e}") from e

        if response.status_code == 404:
            logger.debug(f"Not found: {url}")
            return None
        if response.is_error:
            raise SourceFetchError(f"Error other than 404 while fetching {url}: HTTP {response.status_code}")

        logger.debug(f"Fetched {url} ({len(response.content)} bytes)")
        return response.text

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this resolver created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> UnpkgSourceResolver:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
