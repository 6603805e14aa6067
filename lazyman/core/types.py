"""Core data types.

Dataclasses shared by providers, consumers and the API layer.
Schedule types (Game, Team, Feed) are frozen: a cached game list is shared
between concurrent requests and must never be mutated.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

NO_FEED_ID = "nofeed"
NO_FEED_TYPE = "No Feed Available"


@dataclass(frozen=True)
class Team:
    """A team as listed in the schedule."""

    name: str | None = None
    abbreviation: str | None = None


@dataclass(frozen=True)
class Feed:
    """A broadcast feed (home, away, national, ...) for a game."""

    id: str
    feed_type: str
    call_letters: str = ""

    @property
    def display_name(self) -> str:
        if self.call_letters:
            return f"{self.call_letters} ({self.feed_type})"
        return self.feed_type


NO_FEED = Feed(id=NO_FEED_ID, feed_type=NO_FEED_TYPE, call_letters="")


@dataclass(frozen=True)
class Game:
    """A scheduled game with its broadcast feeds."""

    id: int
    home_team: Team
    away_team: Team
    start_time: datetime | None = None
    state: str | None = None
    feeds: tuple[Feed, ...] = ()

    @property
    def name(self) -> str:
        return f"{self.home_team.name} vs {self.away_team.name}"

    @property
    def is_final(self) -> bool:
        return self.state == "Final"

    def get_feed(self, feed_id: str) -> Feed | None:
        for feed in self.feeds:
            if feed.id == feed_id:
                return feed
        return None


@dataclass(frozen=True)
class Quality:
    """A selectable stream quality.

    path_template holds one `{}` placeholder for the stream variant
    ("slide" for live, "complete-trimmed" for finished games).
    """

    key: str
    title: str
    path_template: str
    bitrate: int

    def file_for(self, variant: str) -> str:
        return self.path_template.format(variant)


# =============================================================================
# Stream resolution results
# =============================================================================


@dataclass(frozen=True)
class StreamReady:
    """Upstream returned a usable playlist URL."""

    raw_url: str


@dataclass(frozen=True)
class StreamPending:
    """Upstream says the stream is not live yet."""

    message: str


@dataclass(frozen=True)
class StreamExpired:
    """Upstream returned a URL whose embedded expiry has passed."""

    message: str


StreamResult = StreamReady | StreamPending | StreamExpired


# =============================================================================
# Catalog nodes
# =============================================================================


class ItemKind(str, Enum):
    FOLDER = "folder"
    MEDIA = "media"


class ContentType(str, Enum):
    CLIP = "clip"
    MOVIE = "movie"


class MediaType(str, Enum):
    PHOTO = "photo"
    VIDEO = "video"


@dataclass
class ChannelItem:
    """A node in the browse hierarchy."""

    id: str | None
    name: str
    kind: ItemKind = ItemKind.FOLDER
    content_type: ContentType | None = None
    media_type: MediaType | None = None
    is_live_stream: bool = False


@dataclass
class MediaSource:
    """A playable source for a quality node."""

    path: str
    id: str
    bitrate: int
    protocol: str = "http"
    supports_probing: bool = False
