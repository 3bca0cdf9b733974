"""State holder for the hotel list screen."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from hotel_catalog.config.settings import Settings
from hotel_catalog.hotels import (
    CatalogDecodeError,
    Hotel,
    SortBy,
    decode_catalog,
    sort_hotels,
    sort_options,
)
from hotel_catalog.services.catalog_client import FETCH_ERRORS, CatalogClient
from hotel_catalog.thumbnails import ThumbnailCache

from .render import HotelListSnapshot, render_snapshot

logger = logging.getLogger(__name__)

RenderCallback = Callable[[HotelListSnapshot], None]


class HotelListController:
    """Loads the catalog, applies sort choices and feeds snapshots to the view.

    All methods are expected to run on a single event loop. Network
    completions land back on that loop before touching ``hotels`` or calling
    ``on_render``.
    """

    def __init__(
        self,
        client: CatalogClient,
        *,
        on_render: RenderCallback,
        settings: Optional[Settings] = None,
        title: Optional[str] = None,
        fetch_thumbnails: bool = True,
    ) -> None:
        self._client = client
        self._on_render = on_render
        self._settings = settings or Settings()
        self._title = title or self._settings.screen_title
        self._thumbnails = ThumbnailCache(client.fetch_thumbnail)
        self.hotels: List[Hotel] = []
        self.sort_mode: Optional[SortBy] = None
        self.fetch_thumbnails = fetch_thumbnails
        # Rows the view currently shows; None means every row.
        self.visible_rows: Optional[range] = None
        self.snapshot: HotelListSnapshot = render_snapshot(
            (), title=self._title, locale=self._settings.locale
        )

    @property
    def thumbnails(self) -> ThumbnailCache:
        return self._thumbnails

    async def __aenter__(self) -> "HotelListController":
        return self

    async def __aexit__(self, exc_type, exc, exc_tb) -> None:
        await self.close()

    async def load(self) -> bool:
        """Fetch and decode the catalog; returns ``True`` when the list was populated.

        Network and decode failures leave ``hotels`` untouched.
        """
        try:
            payload = await self._client.fetch_catalog()
        except FETCH_ERRORS as exc:
            logger.warning("Catalog fetch failed, keeping %s hotels: %s", len(self.hotels), exc)
            return False

        try:
            page = decode_catalog(payload, default_currency=self._settings.default_currency)
        except CatalogDecodeError as exc:
            logger.warning(
                "Catalog decode failed (%s), keeping %s hotels: %s",
                exc.kind.value,
                len(self.hotels),
                exc,
            )
            return False

        self.hotels = list(page.hotels)
        logger.info("Loaded %s hotels from %s", len(self.hotels), self._client.catalog_url)
        self.refresh()
        return True

    def sort(self, mode: SortBy) -> None:
        sort_hotels(self.hotels, mode)
        self.sort_mode = mode
        self.refresh()

    @staticmethod
    def sort_options() -> List[Tuple[str, SortBy]]:
        return sort_options()

    def refresh(self, visible: Optional[Iterable[int]] = None) -> HotelListSnapshot:
        """Re-render and request thumbnails for visible rows that still lack one."""
        if visible is None:
            visible = self.visible_rows
        rows = range(len(self.hotels)) if visible is None else visible
        missing: List[Hotel] = []
        for row in rows:
            if not 0 <= row < len(self.hotels):
                continue
            hotel = self.hotels[row]
            if hotel.downloaded:
                continue
            cached = self._thumbnails.cached(hotel.thumbnail_url)
            if cached is not None:
                hotel.attach_thumbnail(cached)
            else:
                missing.append(hotel)

        self.snapshot = render_snapshot(
            self.hotels,
            title=self._title,
            sort_mode=self.sort_mode,
            locale=self._settings.locale,
        )
        self._on_render(self.snapshot)

        if self.fetch_thumbnails and not self._thumbnails.closed:
            for hotel in missing:
                self._request_thumbnail(hotel)
        return self.snapshot

    def _request_thumbnail(self, hotel: Hotel) -> None:
        def _attach(data: bytes) -> None:
            hotel.attach_thumbnail(data)
            self.refresh()

        self._thumbnails.request(hotel.thumbnail_url, _attach, owner=hotel.hotel_id)

    async def wait_for_thumbnails(self) -> None:
        await self._thumbnails.wait()

    async def close(self) -> None:
        await self._thumbnails.aclose()
