"""JSON request and response bodies of the manga API."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .commands import CreateManga, UpdateManga
from .manga import Manga, MangaEpisode, MangaId, MangaShortTitle, MangaTitle
from .portal import MangaPortal, PortalKind


def _as_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("request body must be a JSON object")
    return data


def _required_str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string or null")
    return value


@dataclass(frozen=True)
class CreateMangaRequest:
    """Body of a request that registers a manga."""

    title: str
    short_title: str
    portal_kind: str
    crawl_url: str
    public_url: str

    @classmethod
    def from_json(cls, data: Any) -> CreateMangaRequest:
        """Read the camelCase JSON object; raise ValueError if malformed."""
        data = _as_mapping(data)
        return cls(
            title=_required_str(data, "title"),
            short_title=_required_str(data, "shortTitle"),
            portal_kind=_required_str(data, "portalKind"),
            crawl_url=_required_str(data, "crawlUrl"),
            public_url=_required_str(data, "publicUrl"),
        )

    def to_command(self) -> CreateManga:
        """Validate the fields and build the command."""
        kind = PortalKind.parse(self.portal_kind)
        portal = MangaPortal.create(kind, self.crawl_url, self.public_url)
        return CreateManga(
            title=MangaTitle(self.title),
            short_title=MangaShortTitle(self.short_title),
            portal=portal,
        )


@dataclass(frozen=True)
class UpdateMangaRequest:
    """Body of a request that overwrites a manga."""

    title: str
    short_title: str
    portal_kind: str
    crawl_url: str
    public_url: str
    episode: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> UpdateMangaRequest:
        """Read the camelCase JSON object; raise ValueError if malformed."""
        data = _as_mapping(data)
        return cls(
            title=_required_str(data, "title"),
            short_title=_required_str(data, "shortTitle"),
            episode=_optional_str(data, "episode"),
            portal_kind=_required_str(data, "portalKind"),
            crawl_url=_required_str(data, "crawlUrl"),
            public_url=_required_str(data, "publicUrl"),
        )

    def to_command(self, manga_id: MangaId) -> UpdateManga:
        """Validate the fields and build the command for ``manga_id``."""
        kind = PortalKind.parse(self.portal_kind)
        title = MangaTitle(self.title)
        short_title = MangaShortTitle(self.short_title)
        episode = MangaEpisode(self.episode) if self.episode is not None else None
        portal = MangaPortal.create(kind, self.crawl_url, self.public_url)
        return UpdateManga(
            manga_id=manga_id,
            title=title,
            short_title=short_title,
            portal=portal,
            episode=episode,
        )


@dataclass(frozen=True)
class MangaResponse:
    """A manga as the API returns it."""

    id: str
    title: str
    short_title: str
    episode: str | None
    portal_kind: str
    crawl_url: str
    public_url: str

    @classmethod
    def from_manga(cls, manga: Manga) -> MangaResponse:
        return cls(
            id=str(manga.id),
            title=manga.title.value,
            short_title=manga.short_title.value,
            episode=manga.episode.value if manga.episode is not None else None,
            portal_kind=str(manga.portal.kind),
            crawl_url=manga.portal.crawl_url,
            public_url=manga.portal.public_url,
        )

    def to_json(self) -> dict[str, Any]:
        """Return the camelCase JSON object."""
        return {
            "id": self.id,
            "title": self.title,
            "shortTitle": self.short_title,
            "episode": self.episode,
            "portalKind": self.portal_kind,
            "crawlUrl": self.crawl_url,
            "publicUrl": self.public_url,
        }