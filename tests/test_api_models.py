import pytest

from mangawatch.api_models import CreateMangaRequest, MangaResponse, UpdateMangaRequest
from mangawatch.commands import UpdateManga
from mangawatch.manga import Manga, MangaEpisode, MangaId, MangaShortTitle, MangaTitle
from mangawatch.portal import MangaPortal, PortalKind

CRAWL = "https://example.com/series/rss"
PUBLIC = "https://example.com/series"


def _create_body(**overrides):
    body = {
        "title": "Long Title",
        "shortTitle": "LT",
        "portalKind": "JumpPlus",
        "crawlUrl": CRAWL,
        "publicUrl": PUBLIC,
    }
    body.update(overrides)
    return body


def _manga(episode=None):
    return Manga(
        id=MangaId.generate(),
        title=MangaTitle("Long Title"),
        short_title=MangaShortTitle("LT"),
        portal=MangaPortal.create(PortalKind.JUMP_PLUS, CRAWL, PUBLIC),
        episode=episode,
    )


def test_create_request_builds_command():
    command = CreateMangaRequest.from_json(_create_body()).to_command()
    assert command.title == MangaTitle("Long Title")
    assert command.short_title == MangaShortTitle("LT")
    assert command.portal.kind is PortalKind.JUMP_PLUS
    assert command.portal.crawl_url == CRAWL
    assert command.portal.public_url == PUBLIC


@pytest.mark.parametrize("key", ["title", "shortTitle", "portalKind", "crawlUrl", "publicUrl"])
def test_create_request_requires_every_field(key):
    body = _create_body()
    del body[key]
    with pytest.raises(ValueError, match=key):
        CreateMangaRequest.from_json(body)


def test_create_request_rejects_non_string_field():
    with pytest.raises(ValueError, match="title"):
        CreateMangaRequest.from_json(_create_body(title=3))


def test_create_request_rejects_non_object():
    with pytest.raises(ValueError):
        CreateMangaRequest.from_json(["title"])


def test_unknown_portal_kind_is_rejected():
    request = CreateMangaRequest.from_json(_create_body(portalKind="Nope"))
    with pytest.raises(ValueError, match="Unknown portal kind: Nope"):
        request.to_command()


def test_split_portal_with_equal_urls_is_rejected():
    request = CreateMangaRequest.from_json(_create_body(crawlUrl=PUBLIC))
    with pytest.raises(ValueError, match="must be different"):
        request.to_command()


def test_same_url_portal_with_different_urls_is_rejected():
    request = CreateMangaRequest.from_json(_create_body(portalKind="KadoComi"))
    with pytest.raises(ValueError, match="must be the same"):
        request.to_command()


def test_invalid_url_is_rejected():
    request = CreateMangaRequest.from_json(_create_body(crawlUrl="not a url"))
    with pytest.raises(ValueError):
        request.to_command()


def test_update_request_episode_is_optional():
    request = UpdateMangaRequest.from_json(_create_body())
    assert request.episode is None
    manga_id = MangaId.generate()
    command = request.to_command(manga_id)
    assert command.manga_id == manga_id
    assert command.episode is None


def test_update_request_keeps_episode():
    request = UpdateMangaRequest.from_json(_create_body(episode="Episode 2"))
    command = request.to_command(MangaId.generate())
    assert command.episode == MangaEpisode("Episode 2")


def test_update_request_rejects_empty_episode():
    request = UpdateMangaRequest.from_json(_create_body(episode=""))
    with pytest.raises(ValueError):
        request.to_command(MangaId.generate())


def test_update_request_rejects_non_string_episode():
    with pytest.raises(ValueError, match="episode"):
        UpdateMangaRequest.from_json(_create_body(episode=5))


def test_response_fields():
    manga = _manga(MangaEpisode("Episode 1"))
    body = MangaResponse.from_manga(manga).to_json()
    assert body["id"] == str(manga.id)
    assert body["title"] == "Long Title"
    assert body["shortTitle"] == "LT"
    assert body["episode"] == "Episode 1"
    assert body["portalKind"] == "JumpPlus"
    assert body["crawlUrl"] == CRAWL
    assert body["publicUrl"] == PUBLIC


def test_response_without_episode_is_null():
    assert MangaResponse.from_manga(_manga()).to_json()["episode"] is None


@pytest.mark.parametrize("episode", [None, MangaEpisode("Episode 9")])
def test_response_round_trips_into_update(episode):
    manga = _manga(episode)
    body = MangaResponse.from_manga(manga).to_json()
    command = UpdateMangaRequest.from_json(body).to_command(MangaId.parse(body["id"]))
    assert command == UpdateManga.from_manga(manga)