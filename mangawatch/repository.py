"""SQLite storage of manga."""

from __future__ import annotations

import asyncio
import os
import uuid
from dataclasses import dataclass

import aiosqlite

from .commands import CreateManga, DeleteManga, UpdateManga
from .manga import Manga, MangaEpisode, MangaId, MangaShortTitle, MangaTitle
from .portal import MangaPortal, PortalKind, parse_url
from .ports import MangaRepository

_SCHEMA = """
CREATE TABLE IF NOT EXISTS manga (
    manga_id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    short_title TEXT NOT NULL,
    crawl_url TEXT NOT NULL,
    public_url TEXT NOT NULL,
    portal_kind TEXT NOT NULL,
    episode TEXT
)
"""

_NOT_FOUND = "No manga found with the given ID"


@dataclass(frozen=True)
class MangaRow:
    """One row of the manga table."""

    manga_id: uuid.UUID
    title: str
    short_title: str
    portal_kind: str
    crawl_url: str
    public_url: str
    episode: str | None = None

    def to_manga(self) -> Manga:
        """Build the domain object, validating URLs and portal kind."""
        try:
            crawl_url = parse_url(self.crawl_url)
            public_url = parse_url(self.public_url)
        except ValueError as exc:
            raise ValueError(f"Failed to parse URL: {exc}") from exc
        try:
            kind = PortalKind.parse(self.portal_kind)
        except ValueError as exc:
            raise ValueError(f"Failed to parse PortalKind: {exc}") from exc
        portal = MangaPortal.create(kind, crawl_url, public_url)
        episode = MangaEpisode(self.episode) if self.episode is not None else None
        return Manga(
            id=MangaId(self.manga_id),
            title=MangaTitle(self.title),
            short_title=MangaShortTitle(self.short_title),
            portal=portal,
            episode=episode,
        )


class SqliteMangaRepository(MangaRepository):
    """Manga repository in an SQLite database, connected on first use."""

    def __init__(self, database: str | os.PathLike[str]):
        self.database = database
        self._db: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> SqliteMangaRepository:
        await self._connection()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the database connection if it is open."""
        if self._db is not None:
            db, self._db = self._db, None
            await db.close()

    async def _connection(self) -> aiosqlite.Connection:
        async with self._lock:
            if self._db is None:
                db = await aiosqlite.connect(self.database)
                await db.execute(_SCHEMA)
                await db.commit()
                self._db = db
        return self._db

    async def _write(self, sql: str, params: tuple) -> int:
        db = await self._connection()
        async with db.execute(sql, params) as cursor:
            count = cursor.rowcount
        await db.commit()
        return count

    async def create_manga(self, command: CreateManga) -> None:
        await self._write(
            "INSERT INTO manga "
            "(manga_id, title, short_title, crawl_url, public_url, portal_kind) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (
                str(MangaId.generate().value),
                command.title.value,
                command.short_title.value,
                command.portal.crawl_url,
                command.portal.public_url,
                command.portal.kind.value,
            ),
        )

    async def update_manga(self, command: UpdateManga) -> None:
        # A missing episode is stored as the text "NULL", not as SQL NULL.
        episode = command.episode.value if command.episode is not None else "NULL"
        count = await self._write(
            "UPDATE manga SET title = ?, short_title = ?, crawl_url = ?, "
            "public_url = ?, portal_kind = ?, episode = ? WHERE manga_id = ?",
            (
                command.title.value,
                command.short_title.value,
                command.portal.crawl_url,
                command.portal.public_url,
                command.portal.kind.value,
                episode,
                str(command.manga_id.value),
            ),
        )
        if count < 1:
            raise LookupError(_NOT_FOUND)

    async def delete_manga(self, command: DeleteManga) -> None:
        count = await self._write(
            "DELETE FROM manga WHERE manga_id = ?", (str(command.manga_id.value),)
        )
        if count < 1:
            raise LookupError(_NOT_FOUND)

    async def find_all(self) -> list[Manga]:
        db = await self._connection()
        async with db.execute(
            "SELECT manga_id, title, short_title, crawl_url, public_url, "
            "portal_kind, episode FROM manga"
        ) as cursor:
            records = await cursor.fetchall()
        return [
            MangaRow(
                manga_id=uuid.UUID(manga_id),
                title=title,
                short_title=short_title,
                portal_kind=portal_kind,
                crawl_url=crawl_url,
                public_url=public_url,
                episode=episode,
            ).to_manga()
            for manga_id, title, short_title, crawl_url, public_url, portal_kind, episode in records
        ]