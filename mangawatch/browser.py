"""Browser-driven crawling through a pool of WebDriver sessions."""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Any, Protocol

import aiohttp

from .manga import MangaEpisode
from .portal import PortalKind
from .ports import FetchLatestEpCommand

# CSS selectors, outermost first, leading to the latest episode's name.
PORTAL_SELECTORS: dict[PortalKind, tuple[str, ...]] = {
    PortalKind.COMIC_FUZ: ("h3[class^='Chapter_chapter__name']",),
    PortalKind.KADO_COMI: (
        "div[class^='EpisodeThumbnail_titleWrapper']",
        "div[class^='EpisodeThumbnail_title']",
    ),
    PortalKind.YOUNG_MAGAZINE: (".mod-episode-title",),
}

_ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"


class Browser:
    """A remote browser reached through the W3C WebDriver protocol.

    The session is opened on the first command and closed on ``close``
    or when leaving ``async with``.
    """

    def __init__(self, endpoint: str, capabilities: dict[str, Any] | None = None):
        self.endpoint = endpoint.rstrip("/")
        self.capabilities = (
            dict(capabilities) if capabilities is not None else {"browserName": "chrome"}
        )
        self._http: aiohttp.ClientSession | None = None
        self._session_id: str | None = None

    async def __aenter__(self) -> Browser:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _call(self, method: str, path: str, payload: dict | None = None) -> Any:
        if self._http is None:
            self._http = aiohttp.ClientSession()
        async with self._http.request(method, self.endpoint + path, json=payload) as resp:
            data = await resp.json(content_type=None)
            status = resp.status
        value = data.get("value") if isinstance(data, dict) else None
        if status >= 400 or (isinstance(value, dict) and "error" in value):
            err = value if isinstance(value, dict) else {}
            raise RuntimeError(
                f"WebDriver error ({status}): {err.get('error', 'unknown error')}: "
                f"{err.get('message', '')}"
            )
        return value

    async def _session_path(self) -> str:
        if self._session_id is None:
            value = await self._call(
                "POST", "/session", {"capabilities": {"alwaysMatch": self.capabilities}}
            )
            self._session_id = value["sessionId"]
        return f"/session/{self._session_id}"

    async def goto(self, url: str) -> None:
        """Navigate to ``url``."""
        base = await self._session_path()
        await self._call("POST", f"{base}/url", {"url": url})

    async def find_text(self, *selectors: str) -> str:
        """Return the text of the element reached by nested CSS selectors."""
        if not selectors:
            raise ValueError("at least one selector is required")
        base = await self._session_path()
        element: str | None = None
        for selector in selectors:
            scope = f"{base}/element/{element}" if element else base
            value = await self._call(
                "POST", f"{scope}/element", {"using": "css selector", "value": selector}
            )
            element = value[_ELEMENT_KEY]
        return await self._call("GET", f"{base}/element/{element}/text")

    async def close(self) -> None:
        """End the WebDriver session and release the HTTP client."""
        try:
            if self._session_id is not None:
                await self._call("DELETE", f"/session/{self._session_id}")
        finally:
            self._session_id = None
            if self._http is not None:
                await self._http.close()
                self._http = None


class _Crawler(Protocol):
    async def crawl(self, driver: Browser) -> MangaEpisode: ...


class BrowserCrawler:
    """Reads the latest episode from a portal page rendered in a browser."""

    def __init__(
        self, command: FetchLatestEpCommand, selectors: Iterable[str] | None = None
    ):
        self.command = command
        if selectors is None:
            try:
                selectors = PORTAL_SELECTORS[command.portal_kind]
            except KeyError:
                raise ValueError(
                    f"{command.portal_kind} is not crawled with a browser"
                ) from None
        self.selectors = tuple(selectors)

    async def crawl(self, driver: Browser) -> MangaEpisode:
        """Open the crawl URL in ``driver`` and read the episode name."""
        await driver.goto(self.command.crawl_url)
        text = await driver.find_text(*self.selectors)
        return MangaEpisode(text)


class DriverPool:
    """Lends browsers out one caller at a time each."""

    def __init__(self, drivers: Iterable[Browser]):
        self._drivers: deque[Browser] = deque(drivers)
        if not self._drivers:
            raise ValueError("a driver pool needs at least one driver")
        self._available = asyncio.Semaphore(len(self._drivers))

    @asynccontextmanager
    async def lease(self) -> AsyncIterator[Browser]:
        """Borrow a browser for the ``async with`` block, waiting if none is free."""
        async with self._available:
            driver = self._drivers.popleft()
            try:
                yield driver
            finally:
                self._drivers.append(driver)

    async def with_driver(self, crawler: _Crawler) -> MangaEpisode:
        """Run ``crawler`` on a borrowed browser."""
        async with self.lease() as driver:
            return await crawler.crawl(driver)