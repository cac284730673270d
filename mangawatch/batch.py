"""Batch job that checks every manga and notifies about new episodes."""

from __future__ import annotations

import asyncio
import logging

from .commands import UpdateManga
from .events import DetectFetchError
from .manga import Manga
from .registry import AppRegistry
from .usecases import check_update, update_manga

logger = logging.getLogger(__name__)


async def check_and_notify(registry: AppRegistry, manga: Manga) -> None:
    """Check one manga, announce a new episode and store it.

    A failed fetch is announced through the notifier instead of raised;
    failures of the notifier or the repository are raised.
    """
    notifier = registry.notifier
    try:
        result = await check_update(registry.latest_episode_fetcher, manga)
    except DetectFetchError as event:
        await notifier.notify_error(event)
        return
    if result is None:
        return
    event, updated = result
    await notifier.notify_latest_episode(event)
    await update_manga(registry.manga_repository, UpdateManga.from_manga(updated))


async def run_checks(registry: AppRegistry) -> list[BaseException]:
    """Check every stored manga concurrently.

    Every check runs to completion even if others fail; the failures are
    logged and returned.
    """
    mangas = await registry.manga_repository.find_all()
    logger.info("Found %d mangas to check for updates", len(mangas))
    logger.info("Starting check and notify tasks for all mangas")
    results = await asyncio.gather(
        *(check_and_notify(registry, manga) for manga in mangas),
        return_exceptions=True,
    )
    failures = [result for result in results if isinstance(result, BaseException)]
    for failure in failures:
        logger.error("Error in check and notify task: %s", failure)
    return failures