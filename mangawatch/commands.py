"""Commands that change the stored set of manga."""

from __future__ import annotations

from dataclasses import dataclass

from .manga import Manga, MangaEpisode, MangaId, MangaShortTitle, MangaTitle
from .portal import MangaPortal


@dataclass(frozen=True)
class CreateManga:
    """Register a new manga."""

    title: MangaTitle
    short_title: MangaShortTitle
    portal: MangaPortal


@dataclass(frozen=True)
class DeleteManga:
    """Remove a manga."""

    manga_id: MangaId


@dataclass(frozen=True)
class UpdateManga:
    """Replace every field of an existing manga."""

    manga_id: MangaId
    title: MangaTitle
    short_title: MangaShortTitle
    portal: MangaPortal
    episode: MangaEpisode | None = None

    @classmethod
    def from_manga(cls, manga: Manga) -> UpdateManga:
        """Build the command that stores ``manga`` as it is."""
        return cls(manga.id, manga.title, manga.short_title, manga.portal, manga.episode)