"""Application use cases."""

from __future__ import annotations

from .commands import CreateManga, DeleteManga, UpdateManga
from .events import DetectFetchError, DetectLastEpUpdated
from .manga import Manga
from .ports import FetchLatestEpCommand, LatestEpisodeFetcher, MangaRepository


async def check_update(
    fetcher: LatestEpisodeFetcher, manga: Manga
) -> tuple[DetectLastEpUpdated, Manga] | None:
    """Look for a newer episode of ``manga``.

    Returns the update event and the updated manga, or None when nothing
    changed. Raises DetectFetchError when fetching fails.
    """
    try:
        latest = await fetcher.fetch_latest_episode(FetchLatestEpCommand.from_manga(manga))
    except Exception as exc:
        raise DetectFetchError(manga.title, manga.portal.public_url, str(exc)) from exc

    if not manga.is_updated(latest):
        return None
    updated = manga.update_episode(latest)
    event = DetectLastEpUpdated(
        title=updated.title, url=updated.portal.public_url, episode=latest
    )
    return event, updated


async def create_manga(repo: MangaRepository, command: CreateManga) -> None:
    """Store a new manga."""
    await repo.create_manga(command)


async def update_manga(repo: MangaRepository, command: UpdateManga) -> None:
    """Overwrite an existing manga."""
    await repo.update_manga(command)


async def delete_manga(repo: MangaRepository, command: DeleteManga) -> None:
    """Remove a manga."""
    await repo.delete_manga(command)