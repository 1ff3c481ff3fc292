from __future__ import annotations

"""
Data models for Torrent Ranker.

Short, sweet, and wearing a plaster. Just enough structure to keep the
classifier and the ranker from tripping over each other.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, FrozenSet, Optional, Union


class MediaType(str, Enum):
    """What grouping of media a torrent contains."""

    MOVIE = "movie"
    SEASON = "season"
    EPISODE = "episode"


@dataclass(frozen=True)
class Movie:
    """No numbering at all: a feature film."""

    media_type: ClassVar[MediaType] = MediaType.MOVIE


@dataclass(frozen=True)
class Season:
    """A whole season of a show."""

    season: int

    media_type: ClassVar[MediaType] = MediaType.SEASON


@dataclass(frozen=True)
class Episode:
    """A single episode of a show."""

    season: int
    episode: int

    media_type: ClassVar[MediaType] = MediaType.EPISODE


Numbering = Union[Movie, Season, Episode]


@dataclass(frozen=True)
class ToFetch:
    """A piece of media somebody asked for, ready to be searched."""

    imdb_id: str
    title: str = ""
    numbering: Numbering = Movie()

    @property
    def media_type(self) -> MediaType:
        return self.numbering.media_type


@dataclass(frozen=True)
class Candidate:
    """The facts the ranker looks at when judging a torrent."""

    media_type: MediaType
    quality: str
    tags: FrozenSet[str]
    seeders: int
    bytes: int


@dataclass(frozen=True)
class TorrentInfo(Candidate):
    """A classified search result, charming as me."""

    numbering: Numbering = Movie()
    tracker: str = "<unknown>"
    url: str = ""
    title: str = ""

    @property
    def season(self) -> Optional[int]:
        return getattr(self.numbering, "season", None)

    @property
    def episode(self) -> Optional[int]:
        return getattr(self.numbering, "episode", None)
