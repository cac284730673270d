"""Latest-episode lookup for portals that publish an RSS feed."""

from __future__ import annotations

import asyncio
from xml.etree.ElementTree import ParseError

import aiohttp
from defusedxml import ElementTree
from defusedxml.common import DefusedXmlException

from .manga import MangaEpisode
from .ports import FetchLatestEpCommand
from .portal import PortalKind

# WebAce refuses to serve its feed without a browser-like User-Agent.
WEB_ACE_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:129.0) Gecko/20100101 Firefox/129.0"
)

_USER_AGENTS = {PortalKind.WEB_ACE: WEB_ACE_USER_AGENT}
_MAX_ATTEMPTS = 3


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_latest_title(body: str | bytes) -> str:
    """Return the title of the first item of an RSS 2.0 feed.

    Raises ValueError when the document is not an RSS feed, holds no
    items, or its first item has no title.
    """
    try:
        root = ElementTree.fromstring(body)
    except (ParseError, DefusedXmlException) as exc:
        raise ValueError(f"invalid RSS feed: {exc}") from exc
    if _local_name(root.tag) != "rss":
        raise ValueError("invalid RSS feed: root element is not <rss>")
    channel = root.find("channel")
    if channel is None:
        raise ValueError("invalid RSS feed: missing <channel>")
    item = channel.find("item")
    if item is None:
        raise ValueError("No items found in the RSS feed")
    title = item.find("title")
    if title is None:
        raise ValueError("No title found in the first RSS item")
    return "".join(title.itertext()).strip()


class RssCrawler:
    """Reads the latest episode from a portal's RSS feed."""

    def __init__(self, command: FetchLatestEpCommand, user_agent: str | None = None):
        self.command = command
        self.user_agent = (
            user_agent if user_agent is not None else _USER_AGENTS.get(command.portal_kind)
        )

    async def crawl(self) -> MangaEpisode:
        """Download the feed and return its newest episode."""
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        async with aiohttp.ClientSession(headers=headers) as session:
            body = await self._download(session)
        return MangaEpisode(parse_latest_title(body))

    async def _download(self, session: aiohttp.ClientSession) -> bytes:
        last_error: BaseException | None = None
        for _ in range(_MAX_ATTEMPTS):
            try:
                response = await session.get(self.command.crawl_url)
            except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
                last_error = exc
                continue
            async with response:
                return await response.read()
        raise ConnectionError(
            f"Failed to fetch page after {_MAX_ATTEMPTS} retries: {last_error}"
        ) from last_error