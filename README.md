# mangawatch

mangawatch keeps track of manga series published on a number of web portals
and tells you when a new episode appears.

For each stored series it fetches the latest episode, either from the
portal's RSS feed or by reading the series page in a remote browser, and
compares it with the episode it last saw. When they differ it sends a
notification (to standard output or to a Discord channel) and stores the new
episode. A failed fetch is reported as a notification too, so broken
crawlers are noticed quickly.

It is an asyncio library: every fetch, notification and storage call is a
coroutine.

## Supported portals

`mangawatch.portal.PortalKind` names the portals:

| Kind            | Source of the latest episode | Crawl and public URL |
|-----------------|------------------------------|----------------------|
| `WebAce`        | RSS feed                     | must differ          |
| `KimiComi`      | RSS feed                     | must differ          |
| `KadoComi`      | series page in a browser     | must be the same     |
| `TonarinoYJ`    | RSS feed                     | must differ          |
| `HerosWeb`      | RSS feed                     | must differ          |
| `JumpPlus`      | RSS feed                     | must differ          |
| `YoungMagazine` | series page in a browser     | must be the same     |
| `ComicDays`     | RSS feed                     | must differ          |
| `ComicFuz`      | series page in a browser     | must be the same     |
| `ComicZenon`    | RSS feed                     | must differ          |

The *crawl URL* is where the latest episode is read from; the *public URL*
is the link sent in notifications.

## Describing a series

```python
from mangawatch.manga import Manga, MangaId, MangaShortTitle, MangaTitle
from mangawatch.portal import MangaPortal, PortalKind

portal = MangaPortal.create(
    PortalKind.parse("JumpPlus"),
    "https://feeds.example.com/series/1.rss",
    "https://comics.example.com/series/1",
)
print(portal.kind, portal.crawl_url, portal.public_url)

manga = Manga(MangaId.generate(), MangaTitle("Example Series"),
              MangaShortTitle("example"), portal)
```

`MangaPortal.create` normalises both URLs with `parse_url` and raises
`ValueError` when they do not fit the portal (the same URL twice for a
feed-based portal, or two different URLs for a page-based one).
`PortalKind.parse` raises `ValueError` for an unknown name, and
`MangaEpisode("")` raises `ValueError` because an episode name cannot be
empty. `MangaId.parse` accepts a UUID in any usual form; `str(MangaId)` gives
its 32 lower-case hex digits.

## Pieces of the application

- `mangawatch.repository.SqliteMangaRepository(path)` stores series in an
  SQLite file, creating the table on first use. It can be used with
  `async with` and closed with `close()`. Updating or deleting an unknown id
  raises `LookupError`.
- `mangawatch.fetcher.LatestEpisodeFetcherImpl(pool)` fetches the latest
  episode: page-based portals with `mangawatch.browser.BrowserCrawler`, feed
  portals with `mangawatch.rss.RssCrawler` (three download attempts; WebAce
  is sent a browser-like User-Agent). `pool` is a
  `mangawatch.browser.DriverPool` of `mangawatch.browser.Browser` objects,
  each talking to a W3C WebDriver endpoint such as a chromedriver. Every
  fetch except ComicZenon holds one browser from the pool while it runs.
- `mangawatch.notifiers.StdOutNotifier()` prints updates to standard output
  and errors to standard error;
  `mangawatch.notifiers.DiscordNotifier(channel_id, err_channel_id, token)`
  posts them to two Discord channels through a bot token.
- `mangawatch.registry.AppRegistry(manga_repository, latest_episode_fetcher,
  notifier)` bundles the three services.

```python
import asyncio
from mangawatch.browser import Browser, DriverPool
from mangawatch.fetcher import LatestEpisodeFetcherImpl
from mangawatch.notifiers import StdOutNotifier
from mangawatch.registry import AppRegistry
from mangawatch.repository import SqliteMangaRepository
from mangawatch.batch import run_checks

async def main():
    pool = DriverPool([Browser("http://localhost:4444")])
    async with SqliteMangaRepository("manga.db") as repo:
        registry = AppRegistry(repo, LatestEpisodeFetcherImpl(pool), StdOutNotifier())
        failures = await run_checks(registry)

asyncio.run(main())
```

## Checking for updates

`mangawatch.usecases.check_update(fetcher, manga)` returns `None` when the
episode is unchanged, or a `DetectLastEpUpdated` event together with the
updated `Manga`. A series without a known episode always counts as updated.
If fetching fails it raises `mangawatch.events.DetectFetchError`, which
carries the title, the public URL and the error message.

`mangawatch.batch.check_and_notify(registry, manga)` checks one series,
notifies and stores the new episode, and sends a failed fetch to the
notifier's `notify_error`. `mangawatch.batch.run_checks(registry)` does this
for every stored series concurrently, lets every check finish, logs the
failed ones and returns their exceptions.

## HTTP API

`mangawatch.web.create_app(registry)` builds an aiohttp application, and
`await mangawatch.web.serve(registry, host="127.0.0.1", port=8000)` serves it
until cancelled.

| Method   | Path                 | Action                   | Success |
|----------|----------------------|--------------------------|---------|
| `POST`   | `/mangas`            | register a series        | 201     |
| `GET`    | `/mangas`            | list all series          | 200     |
| `PUT`    | `/mangas/{manga_id}` | replace a series' data   | 200     |
| `DELETE` | `/mangas/{manga_id}` | remove a series          | 200     |

Bodies use camelCase JSON keys:

```json
{
  "title": "Example Series",
  "shortTitle": "example",
  "portalKind": "JumpPlus",
  "crawlUrl": "https://feeds.example.com/series/1.rss",
  "publicUrl": "https://comics.example.com/series/1"
}
```

Updates take an optional `"episode"` key; listed series also carry `"id"`
and `"episode"`. A body that is not sent as `application/json` gets 415,
unreadable JSON gets 400, missing or mistyped fields get 422, and a malformed
`manga_id` gets 400. Any other failure, including an unknown portal kind,
URLs that do not fit the portal, or an unknown id, is answered with 500 and
the error message as the body.

## Logging

`mangawatch.logsetup.init_logger()` logs INFO and above to standard output
with local RFC 3339 timestamps, level, file name and line number. Calling it
a second time raises `RuntimeError`.

## What it does not do

- There is no command-line program: the batch job and the server are started
  from your own code, as above.
- It does not read configuration from the environment or from files; you
  build the repository, fetcher, notifier and `AppRegistry` yourself.
- Storage is SQLite only.