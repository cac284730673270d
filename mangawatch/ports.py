"""Interfaces the use cases depend on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .commands import CreateManga, DeleteManga, UpdateManga
from .events import DetectFetchError, DetectLastEpUpdated
from .manga import Manga, MangaEpisode
from .portal import PortalKind


class MangaRepository(ABC):
    """Persistent store of manga."""

    @abstractmethod
    async def create_manga(self, command: CreateManga) -> None:
        """Store a new manga."""

    @abstractmethod
    async def update_manga(self, command: UpdateManga) -> None:
        """Overwrite an existing manga; fail if it does not exist."""

    @abstractmethod
    async def delete_manga(self, command: DeleteManga) -> None:
        """Remove a manga; fail if it does not exist."""

    @abstractmethod
    async def find_all(self) -> list[Manga]:
        """Return every stored manga."""


@dataclass(frozen=True)
class FetchLatestEpCommand:
    """What a fetcher needs to find the latest episode."""

    crawl_url: str
    portal_kind: PortalKind

    @classmethod
    def from_manga(cls, manga: Manga) -> FetchLatestEpCommand:
        return cls(crawl_url=manga.portal.crawl_url, portal_kind=manga.portal.kind)


class LatestEpisodeFetcher(ABC):
    """Looks up the latest episode on a portal."""

    @abstractmethod
    async def fetch_latest_episode(self, command: FetchLatestEpCommand) -> MangaEpisode:
        """Return the latest episode; raise on failure."""


class Notifier(ABC):
    """Tells users about updates and failures."""

    @abstractmethod
    async def notify_latest_episode(self, event: DetectLastEpUpdated) -> None:
        """Announce a new episode."""

    @abstractmethod
    async def notify_error(self, event: DetectFetchError) -> None:
        """Announce a failed fetch."""