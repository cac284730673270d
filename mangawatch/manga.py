"""Manga aggregate and its value objects."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .portal import MangaPortal


@dataclass(frozen=True)
class _Text:
    """A piece of text with a meaning of its own."""

    value: str

    def __str__(self) -> str:
        return self.value


class MangaTitle(_Text):
    """Full title of a manga."""


class MangaShortTitle(_Text):
    """Short title of a manga."""


class MangaEpisode(_Text):
    """Name of an episode as shown on the portal; never empty."""

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Episode cannot be empty")


@dataclass(frozen=True)
class MangaId:
    """Identifier of a manga, backed by a UUID."""

    value: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def generate(cls) -> MangaId:
        """Return a new random identifier."""
        return cls(uuid.uuid4())

    @classmethod
    def parse(cls, text: str) -> MangaId:
        """Parse a UUID in simple, hyphenated, braced or URN form."""
        try:
            return cls(uuid.UUID(text))
        except (ValueError, TypeError, AttributeError) as exc:
            raise ValueError(f"invalid manga id: {text!r}") from exc

    def __str__(self) -> str:
        return self.value.hex


@dataclass(frozen=True)
class Manga:
    """A manga tracked for new episodes."""

    id: MangaId
    title: MangaTitle
    short_title: MangaShortTitle
    portal: MangaPortal
    episode: MangaEpisode | None = None

    def is_updated(self, latest_ep: MangaEpisode) -> bool:
        """Whether ``latest_ep`` differs from the known episode.

        A manga without a known episode always counts as updated.
        """
        return self.episode is None or latest_ep != self.episode

    def update_episode(self, latest_ep: MangaEpisode) -> Manga:
        """Return a copy of this manga with ``latest_ep`` as its episode."""
        return replace(self, episode=latest_ep)