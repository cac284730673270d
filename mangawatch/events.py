"""Domain events raised while checking manga for updates."""

from __future__ import annotations

from dataclasses import dataclass

from .manga import MangaEpisode, MangaTitle


@dataclass(eq=False)
class DetectFetchError(Exception):
    """Fetching the latest episode failed; reported to users like an event."""

    title: MangaTitle
    url: str
    error_message: str

    def __str__(self) -> str:
        return (
            f"Failed to fetch latest episode for manga '{self.title.value}' "
            f"({self.url}): {self.error_message}"
        )


@dataclass(frozen=True)
class DetectLastEpUpdated:
    """A new latest episode was found."""

    title: MangaTitle
    url: str
    episode: MangaEpisode