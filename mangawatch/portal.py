"""Portals that publish manga and the URLs used to reach them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from operator import attrgetter
from urllib.parse import urlsplit, urlunsplit


class PortalKind(Enum):
    """The web portals a manga can be published on."""

    WEB_ACE = "WebAce"
    KIMI_COMI = "KimiComi"
    KADO_COMI = "KadoComi"
    TONARINO_YJ = "TonarinoYJ"
    HEROS_WEB = "HerosWeb"
    JUMP_PLUS = "JumpPlus"
    YOUNG_MAGAZINE = "YoungMagazine"
    COMIC_DAYS = "ComicDays"
    COMIC_FUZ = "ComicFuz"
    COMIC_ZENON = "ComicZenon"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> PortalKind:
        """Return the kind whose name is exactly ``text``."""
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown portal kind: {text}") from None


# Portals whose crawl URL is the page readers open.
_SAME_URL_KINDS = frozenset(
    {PortalKind.KADO_COMI, PortalKind.YOUNG_MAGAZINE, PortalKind.COMIC_FUZ}
)

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}


def parse_url(text: str) -> str:
    """Validate an absolute URL and return it in normalised form.

    Scheme and host are lower-cased, default ports dropped and an empty
    path of a web URL becomes ``/``.
    """
    if not isinstance(text, str):
        raise ValueError(f"invalid URL: {text!r}")
    text = text.strip()
    scheme, sep, _ = text.partition(":")
    if not sep or not _SCHEME_RE.fullmatch(scheme):
        raise ValueError(f"invalid URL: {text!r}")
    scheme = scheme.lower()
    if scheme not in _DEFAULT_PORTS:
        return scheme + text[len(scheme):]

    parts = urlsplit(text)
    host = parts.hostname
    if not host or any(ch.isspace() for ch in text):
        raise ValueError(f"invalid URL: {text!r}")
    try:
        port = parts.port
    except ValueError as exc:
        raise ValueError(f"invalid URL: {text!r}") from exc

    userinfo, at, _ = parts.netloc.rpartition("@")
    netloc = f"[{host}]" if ":" in host else host
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    if at:
        netloc = f"{userinfo}@{netloc}"
    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))


@dataclass(frozen=True)
class SameUrl:
    """A portal page that is both crawled and read."""

    url: str

    crawl_url = property(attrgetter("url"))
    public_url = crawl_url


@dataclass(frozen=True)
class SplitUrl:
    """A portal with a separate crawl URL, such as an RSS feed."""

    crawl: str
    public: str

    crawl_url = property(attrgetter("crawl"))
    public_url = property(attrgetter("public"))

    def __post_init__(self) -> None:
        if self.crawl == self.public:
            raise ValueError(
                f"Crawl URL and Public URL must be different: {self.crawl}"
            )


@dataclass(frozen=True)
class MangaPortal:
    """Where a manga is published and how it is reached."""

    kind: PortalKind
    urls: SameUrl | SplitUrl

    def __post_init__(self) -> None:
        if not isinstance(self.kind, PortalKind):
            raise TypeError(f"kind must be a PortalKind, not {self.kind!r}")
        expected = SameUrl if self.kind in _SAME_URL_KINDS else SplitUrl
        if not isinstance(self.urls, expected):
            raise TypeError(f"{self.kind} requires {expected.__name__}")

    @property
    def crawl_url(self) -> str:
        """URL the crawler fetches."""
        return self.urls.crawl_url

    @property
    def public_url(self) -> str:
        """URL a reader opens."""
        return self.urls.public_url

    @classmethod
    def create(cls, kind: PortalKind, crawl: str, public: str) -> MangaPortal:
        """Build a portal, checking the URL rules of ``kind``."""
        crawl = parse_url(crawl)
        public = parse_url(public)
        if kind not in _SAME_URL_KINDS:
            return cls(kind, SplitUrl(crawl, public))
        if crawl != public:
            raise ValueError(
                f"For {kind}, crawl URL and public URL must be the same: "
                f"{crawl}, {public}"
            )
        return cls(kind, SameUrl(crawl))