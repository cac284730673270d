import dataclasses

import pytest

from mangawatch.commands import CreateManga, DeleteManga, UpdateManga
from mangawatch.manga import Manga, MangaEpisode, MangaId, MangaShortTitle, MangaTitle
from mangawatch.portal import MangaPortal, PortalKind

SAMPLE = Manga(
    MangaId.generate(),
    MangaTitle("Command Title"),
    MangaShortTitle("C"),
    MangaPortal.create(PortalKind.JUMP_PLUS, "https://example.com/rss", "https://example.com/m"),
)


def test_update_from_manga_copies_fields():
    source = SAMPLE.update_episode(MangaEpisode("ep3"))
    command = UpdateManga.from_manga(source)
    copied = (command.manga_id, command.title, command.short_title, command.portal)
    assert copied == (source.id, source.title, source.short_title, source.portal)
    assert command.episode == MangaEpisode("ep3")


def test_update_from_manga_without_episode():
    assert UpdateManga.from_manga(SAMPLE).episode is None


def test_delete_holds_id():
    manga_id = MangaId.generate()
    assert DeleteManga(manga_id).manga_id == manga_id
    assert DeleteManga(manga_id) == DeleteManga(manga_id)


def test_create_fields_and_immutability():
    command = CreateManga(SAMPLE.title, SAMPLE.short_title, SAMPLE.portal)
    assert command.portal.crawl_url == "https://example.com/rss"
    with pytest.raises(dataclasses.FrozenInstanceError):
        command.title = MangaTitle("Other")