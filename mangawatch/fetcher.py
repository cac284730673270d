"""Latest-episode fetcher that picks the crawler for each portal."""

from __future__ import annotations

from .browser import PORTAL_SELECTORS, BrowserCrawler, DriverPool
from .manga import MangaEpisode
from .portal import PortalKind
from .ports import FetchLatestEpCommand, LatestEpisodeFetcher
from .rss import RssCrawler


class LatestEpisodeFetcherImpl(LatestEpisodeFetcher):
    """Fetches episodes with a browser or from RSS, depending on the portal.

    RSS portals other than ComicZenon still hold a pooled browser while
    they run, so the pool size bounds how many fetches run at once.
    """

    def __init__(self, pool: DriverPool):
        self._pool = pool

    async def fetch_latest_episode(self, command: FetchLatestEpCommand) -> MangaEpisode:
        if command.portal_kind in PORTAL_SELECTORS:
            return await self._pool.with_driver(BrowserCrawler(command))
        crawler = RssCrawler(command)
        if command.portal_kind is PortalKind.COMIC_ZENON:
            return await crawler.crawl()
        async with self._pool.lease():
            return await crawler.crawl()