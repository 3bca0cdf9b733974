from __future__ import annotations

import asyncio

import httpx
import pytest

from hotel_catalog.services import CatalogClient
from hotel_catalog.thumbnails import ThumbnailCache


class _ScriptedFetcher:
    """Returns queued results per URL; blocks each call until ``release`` when gated."""

    def __init__(self, *, gated: bool = False) -> None:
        self.calls: list[str] = []
        self.results: dict[str, list[object]] = {}
        self._gate = asyncio.Event()
        if not gated:
            self._gate.set()

    def queue(self, url: str, *results: object) -> None:
        self.results.setdefault(url, []).extend(results)

    def release(self) -> None:
        self._gate.set()

    async def __call__(self, url: str) -> bytes:
        self.calls.append(url)
        await self._gate.wait()
        result = self.results[url].pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def _connect_error(url: str) -> httpx.ConnectError:
    return httpx.ConnectError("boom", request=httpx.Request("GET", url))


@pytest.mark.asyncio
async def test_concurrent_requests_for_same_url_share_one_fetch() -> None:
    fetcher = _ScriptedFetcher(gated=True)
    fetcher.queue("https://img.test/a.jpg", b"A")
    cache = ThumbnailCache(fetcher)
    received: dict[str, bytes] = {}

    started_first = cache.request("https://img.test/a.jpg", lambda data: received.__setitem__("h1", data), owner="h1")
    started_second = cache.request("https://img.test/a.jpg", lambda data: received.__setitem__("h2", data), owner="h2")
    assert (started_first, started_second) == (True, False)
    assert cache.in_flight("https://img.test/a.jpg")

    fetcher.release()
    await cache.wait()

    assert fetcher.calls == ["https://img.test/a.jpg"]
    assert received == {"h1": b"A", "h2": b"A"}
    assert cache.cached("https://img.test/a.jpg") == b"A"
    assert cache.requests_issued == 1


@pytest.mark.asyncio
async def test_cached_bytes_are_delivered_without_network() -> None:
    fetcher = _ScriptedFetcher()
    fetcher.queue("https://img.test/a.jpg", b"A")
    cache = ThumbnailCache(fetcher)
    cache.request("https://img.test/a.jpg", lambda data: None, owner="h1")
    await cache.wait()

    delivered: list[bytes] = []
    assert cache.request("https://img.test/a.jpg", delivered.append, owner="h2") is False
    assert delivered == [b"A"]
    assert len(fetcher.calls) == 1


@pytest.mark.asyncio
async def test_failed_fetch_is_not_cached_and_is_reissued() -> None:
    url = "https://img.test/broken.jpg"
    fetcher = _ScriptedFetcher()
    fetcher.queue(url, _connect_error(url), _connect_error(url), b"finally")
    cache = ThumbnailCache(fetcher)
    delivered: list[bytes] = []

    for _ in range(3):
        cache.request(url, delivered.append, owner="h1")
        await cache.wait()

    assert fetcher.calls == [url, url, url]
    assert delivered == [b"finally"]


@pytest.mark.asyncio
async def test_close_cancels_in_flight_fetches() -> None:
    fetcher = _ScriptedFetcher(gated=True)
    fetcher.queue("https://img.test/a.jpg", b"A")
    cache = ThumbnailCache(fetcher)
    delivered: list[bytes] = []
    cache.request("https://img.test/a.jpg", delivered.append, owner="h1")
    await asyncio.sleep(0)

    await cache.aclose()

    assert cache.closed
    assert cache.pending_count == 0
    assert delivered == []
    with pytest.raises(RuntimeError, match="closed"):
        cache.request("https://img.test/a.jpg", delivered.append, owner="h1")


@pytest.mark.asyncio
async def test_unparseable_url_fails_like_a_network_error_and_is_retried() -> None:
    url = "http://[::1/a.jpg"
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b"never")

    async with CatalogClient(transport=httpx.MockTransport(handler)) as client:
        cache = ThumbnailCache(client.fetch_thumbnail)
        delivered: list[bytes] = []

        assert cache.request(url, delivered.append, owner="h1") is True
        await cache.wait()

        assert not cache.in_flight(url)
        assert cache.pending_count == 0
        assert cache.request(url, delivered.append, owner="h1") is True
        await cache.wait()

    assert delivered == []
    assert seen == []
    assert cache.requests_issued == 2
