import pytest

from mangawatch.batch import check_and_notify, run_checks
from mangawatch.manga import Manga, MangaEpisode, MangaId, MangaShortTitle, MangaTitle
from mangawatch.portal import MangaPortal, PortalKind
from mangawatch.ports import LatestEpisodeFetcher, MangaRepository, Notifier
from mangawatch.registry import AppRegistry


class _Repo(MangaRepository):
    def __init__(self, mangas=(), fail_find=False):
        self.mangas = list(mangas)
        self.updates = []
        self.fail_find = fail_find

    async def create_manga(self, command):
        raise RuntimeError("unused")

    async def update_manga(self, command):
        self.updates.append(command)

    async def delete_manga(self, command):
        raise RuntimeError("unused")

    async def find_all(self):
        if self.fail_find:
            raise ConnectionError("database down")
        return list(self.mangas)


class _Fetcher(LatestEpisodeFetcher):
    def __init__(self, results):
        self.results = results

    async def fetch_latest_episode(self, command):
        result = self.results[command.crawl_url]
        if isinstance(result, Exception):
            raise result
        return result


class _Notifier(Notifier):
    def __init__(self, fail_for=()):
        self.updates = []
        self.errors = []
        self.fail_for = set(fail_for)

    async def notify_latest_episode(self, event):
        if event.title.value in self.fail_for:
            raise RuntimeError(f"cannot notify {event.title.value}")
        self.updates.append(event)

    async def notify_error(self, event):
        self.errors.append(event)


def _manga(name, episode=None):
    return Manga(
        id=MangaId.generate(),
        title=MangaTitle(name),
        short_title=MangaShortTitle(name.lower()),
        portal=MangaPortal.create(
            PortalKind.JUMP_PLUS,
            f"https://example.com/{name}/rss",
            f"https://example.com/{name}",
        ),
        episode=episode,
    )


def _registry(mangas, results, notifier=None, fail_find=False):
    repo = _Repo(mangas, fail_find=fail_find)
    notifier = notifier or _Notifier()
    return AppRegistry(repo, _Fetcher(results), notifier), repo, notifier


@pytest.mark.asyncio
async def test_new_episode_is_notified_and_stored():
    manga = _manga("A", MangaEpisode("Ep 1"))
    registry, repo, notifier = _registry(
        [manga], {manga.portal.crawl_url: MangaEpisode("Ep 2")}
    )
    await check_and_notify(registry, manga)
    (event,) = notifier.updates
    assert event.title == manga.title
    assert event.url == manga.portal.public_url
    assert event.episode == MangaEpisode("Ep 2")
    (command,) = repo.updates
    assert command.manga_id == manga.id
    assert command.episode == MangaEpisode("Ep 2")
    assert notifier.errors == []


@pytest.mark.asyncio
async def test_unchanged_episode_does_nothing():
    manga = _manga("A", MangaEpisode("Ep 1"))
    registry, repo, notifier = _registry(
        [manga], {manga.portal.crawl_url: MangaEpisode("Ep 1")}
    )
    await check_and_notify(registry, manga)
    assert (notifier.updates, notifier.errors, repo.updates) == ([], [], [])


@pytest.mark.asyncio
async def test_fetch_failure_is_notified_as_error():
    manga = _manga("A")
    registry, repo, notifier = _registry(
        [manga], {manga.portal.crawl_url: RuntimeError("timeout")}
    )
    await check_and_notify(registry, manga)
    (event,) = notifier.errors
    assert event.title == manga.title
    assert event.error_message == "timeout"
    assert repo.updates == []


@pytest.mark.asyncio
async def test_run_checks_continues_after_failures():
    a, b, c = _manga("A"), _manga("B"), _manga("C", MangaEpisode("Ep 3"))
    registry, repo, notifier = _registry(
        [a, b, c],
        {
            a.portal.crawl_url: MangaEpisode("Ep 1"),
            b.portal.crawl_url: MangaEpisode("Ep 5"),
            c.portal.crawl_url: ValueError("broken feed"),
        },
        notifier=_Notifier(fail_for={"B"}),
    )
    failures = await run_checks(registry)
    assert len(failures) == 1
    assert str(failures[0]) == "cannot notify B"
    assert [event.title for event in notifier.updates] == [a.title]
    assert [command.manga_id for command in repo.updates] == [a.id]
    assert [event.title for event in notifier.errors] == [c.title]


@pytest.mark.asyncio
async def test_run_checks_with_no_manga():
    registry, repo, notifier = _registry([], {})
    assert await run_checks(registry) == []
    assert notifier.updates == []


@pytest.mark.asyncio
async def test_run_checks_propagates_repository_failure():
    registry, _, _ = _registry([], {}, fail_find=True)
    with pytest.raises(ConnectionError, match="database down"):
        await run_checks(registry)