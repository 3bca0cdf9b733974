"""HTTP client for the hotel catalog and its thumbnails."""
from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from hotel_catalog.config.settings import CATALOG_URL

logger = logging.getLogger(__name__)

# InvalidURL is raised before any request is sent and is not an HTTPError.
FETCH_ERRORS = (httpx.HTTPError, httpx.InvalidURL)


class CatalogClient:
    """Thin async wrapper around the catalog endpoint and thumbnail URLs."""

    def __init__(
        self,
        *,
        catalog_url: str = CATALOG_URL,
        timeout: float = 10.0,
        headers: Optional[Dict[str, str]] = None,
        user_agent: str = "hotel-catalog/0.1.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        default_headers = {
            "Accept": "application/json, image/*;q=0.9, */*;q=0.8",
            "User-Agent": user_agent,
        }
        if headers:
            default_headers.update(headers)
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers=default_headers,
            follow_redirects=True,
            transport=transport,
        )
        self._catalog_url = catalog_url

    @property
    def catalog_url(self) -> str:
        return self._catalog_url

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, exc_type, exc, exc_tb) -> None:
        await self.aclose()

    async def _get_bytes(self, url: str) -> bytes:
        response = await self._client.get(url)
        response.raise_for_status()
        return response.content

    async def fetch_catalog(self) -> bytes:
        logger.debug("Fetching catalog from %s", self._catalog_url)
        return await self._get_bytes(self._catalog_url)

    async def fetch_thumbnail(self, url: str) -> bytes:
        logger.debug("Fetching thumbnail %s", url)
        return await self._get_bytes(url)

    async def fetch_catalog_best(self) -> Optional[bytes]:
        try:
            return await self.fetch_catalog()
        except FETCH_ERRORS as exc:
            logger.warning("Catalog request to %s failed: %s", self._catalog_url, exc)
            return None

    async def fetch_thumbnail_best(self, url: str) -> Optional[bytes]:
        try:
            return await self.fetch_thumbnail(url)
        except FETCH_ERRORS as exc:
            logger.warning("Thumbnail request to %s failed: %s", url, exc)
            return None
