"""URL-keyed thumbnail cache with in-flight request deduplication."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Hashable, Optional

from hotel_catalog.services.catalog_client import FETCH_ERRORS

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[bytes]]
ReadyCallback = Callable[[bytes], None]


class ThumbnailCache:
    """Fetches thumbnails once per URL and fans the bytes out to every waiter.

    Successful downloads are memoised. Failures are not: the next ``request``
    for the same URL issues a fresh fetch. Callbacks run on the event loop
    after the fetch completes, never while a caller is mid-mutation.
    """

    def __init__(self, fetch: Fetcher) -> None:
        self._fetch = fetch
        self._images: Dict[str, bytes] = {}
        self._pending: Dict[str, asyncio.Task[Optional[bytes]]] = {}
        self._waiters: Dict[str, Dict[Hashable, ReadyCallback]] = {}
        self._closed = False
        self.requests_issued = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def cached(self, url: str) -> Optional[bytes]:
        return self._images.get(url)

    def in_flight(self, url: str) -> bool:
        return url in self._pending

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def request(self, url: str, on_ready: ReadyCallback, *, owner: Hashable) -> bool:
        """Ask for ``url``; returns ``True`` when a new network fetch was started.

        Cached bytes are delivered immediately. While a fetch for ``url`` is in
        flight, further requests only register ``on_ready`` (once per owner).
        """
        if self._closed:
            raise RuntimeError("ThumbnailCache is closed")

        cached = self._images.get(url)
        if cached is not None:
            on_ready(cached)
            return False

        self._waiters.setdefault(url, {})[owner] = on_ready
        if url in self._pending:
            return False

        self.requests_issued += 1
        task = asyncio.get_running_loop().create_task(self._run(url))
        self._pending[url] = task
        return True

    async def _run(self, url: str) -> Optional[bytes]:
        try:
            data = await self._fetch(url)
        except FETCH_ERRORS as exc:
            logger.warning("Thumbnail fetch failed for %s: %s", url, exc)
            self._waiters.pop(url, None)
            return None
        finally:
            self._pending.pop(url, None)

        self._images[url] = data
        waiters = self._waiters.pop(url, {})
        logger.debug("Thumbnail %s ready (%s bytes, %s waiters)", url, len(data), len(waiters))
        for callback in waiters.values():
            callback(data)
        return data

    async def wait(self) -> None:
        """Wait until nothing is in flight, including fetches started by callbacks."""
        while self._pending:
            await asyncio.gather(*list(self._pending.values()))

    async def aclose(self) -> None:
        """Cancel in-flight fetches and drop waiters."""
        self._closed = True
        tasks = list(self._pending.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.debug("Cancelled %s in-flight thumbnail fetches", len(tasks))
        self._pending.clear()
        self._waiters.clear()
