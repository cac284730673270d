"""The set of services the batch job and the web server share."""

from __future__ import annotations

from dataclasses import dataclass

from .ports import LatestEpisodeFetcher, MangaRepository, Notifier


@dataclass(frozen=True)
class AppRegistry:
    """Holds the repository, fetcher and notifier the application runs on."""

    manga_repository: MangaRepository
    latest_episode_fetcher: LatestEpisodeFetcher
    notifier: Notifier

    def __post_init__(self) -> None:
        for name, expected in (
            ("manga_repository", MangaRepository),
            ("latest_episode_fetcher", LatestEpisodeFetcher),
            ("notifier", Notifier),
        ):
            value = getattr(self, name)
            if not isinstance(value, expected):
                raise TypeError(
                    f"{name} must be a {expected.__name__}, not {type(value).__name__}"
                )