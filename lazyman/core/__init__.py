"""Core types and interfaces."""

from lazyman.core.exceptions import (
    LazyManError,
    OperationCancelled,
    ScheduleResponseError,
    StreamResponseError,
    UnsupportedLeagueError,
)
from lazyman.core.interfaces import HostProbe, ScheduleSource, StreamSource
from lazyman.core.leagues import FEED_QUALITIES, normalize_league, require_league
from lazyman.core.types import (
    NO_FEED,
    ChannelItem,
    ContentType,
    Feed,
    Game,
    ItemKind,
    MediaSource,
    MediaType,
    Quality,
    StreamExpired,
    StreamPending,
    StreamReady,
    StreamResult,
    Team,
)

__all__ = [
    "ChannelItem",
    "ContentType",
    "FEED_QUALITIES",
    "Feed",
    "Game",
    "HostProbe",
    "ItemKind",
    "LazyManError",
    "MediaSource",
    "MediaType",
    "NO_FEED",
    "OperationCancelled",
    "Quality",
    "ScheduleResponseError",
    "ScheduleSource",
    "StreamExpired",
    "StreamPending",
    "StreamReady",
    "StreamResponseError",
    "StreamResult",
    "StreamSource",
    "Team",
    "UnsupportedLeagueError",
    "normalize_league",
    "require_league",
]
