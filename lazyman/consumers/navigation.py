"""Channel navigation.

Resolves navigation keys into child nodes and playable media.

Key format: {league}_{date}_{gameId}_{feedId}_{quality}

    ""                          ROOT     leagues (+ DNS error folders)
    nhl                         LEAGUE   last N days
    nhl_20240101                DATE     games
    nhl_20240101_662            GAME     feeds
    nhl_20240101_662_1234       FEED     qualities (after a stream probe)
    nhl_20240101_662_1234_450   QUALITY  media source (resolve_media only)

Empty segments are dropped before counting. Anything that does not resolve
(unknown league, bad date, missing game/feed, unknown quality, too many
segments) yields an empty list rather than an exception.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import IntEnum

from lazyman.config import DAYS_BACK
from lazyman.consumers.schedule_cache import ScheduleCache
from lazyman.consumers.stream_resolver import StreamResolver
from lazyman.core import (
    FEED_QUALITIES,
    ChannelItem,
    ContentType,
    Feed,
    Game,
    HostProbe,
    ItemKind,
    MediaSource,
    MediaType,
    Quality,
    StreamReady,
    StreamResponseError,
    normalize_league,
)
from lazyman.core.leagues import LEAGUE_FOLDERS, PING_TEST_HOSTS

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "_"
DATE_FORMAT = "%Y%m%d"

NO_FEEDS_FOUND = "No feeds found"
VARIANT_FINAL = "complete-trimmed"
VARIANT_LIVE = "slide"


class NavLevel(IntEnum):
    """Navigation depth, valued by segment count."""

    ROOT = 0
    LEAGUE = 1
    DATE = 2
    GAME = 3
    FEED = 4
    QUALITY = 5


@dataclass(frozen=True)
class NavKey:
    """A parsed navigation key."""

    level: NavLevel
    segments: tuple[str, ...]

    @property
    def league(self) -> str | None:
        return self.segments[0] if self.level >= NavLevel.LEAGUE else None

    @property
    def date_key(self) -> str | None:
        return self.segments[1] if self.level >= NavLevel.DATE else None

    @property
    def game_key(self) -> str | None:
        return self.segments[2] if self.level >= NavLevel.GAME else None

    @property
    def feed_id(self) -> str | None:
        return self.segments[3] if self.level >= NavLevel.FEED else None

    @property
    def quality_key(self) -> str | None:
        return self.segments[4] if self.level >= NavLevel.QUALITY else None

    @property
    def game_date(self) -> date | None:
        return parse_date_key(self.date_key)

    @property
    def game_id(self) -> int | None:
        key = self.game_key
        if key is None or not (key.isascii() and key.isdigit()):
            return None
        return int(key)


def make_key(*segments: object) -> str:
    return KEY_SEPARATOR.join(str(s) for s in segments)


def parse_key(key: str | None) -> NavKey | None:
    """Split a navigation key into its level and segments.

    Returns None when the segment count is outside 0-5.

    Examples:
        >>> parse_key("nhl__20240101").level
        <NavLevel.DATE: 2>
        >>> parse_key("a_b_c_d_e_f") is None
        True
    """
    segments = tuple(s for s in (key or "").split(KEY_SEPARATOR) if s)
    try:
        level = NavLevel(len(segments))
    except ValueError:
        return None
    return NavKey(level=level, segments=segments)


def parse_date_key(value: str | None) -> date | None:
    """Parse a yyyyMMdd date segment; None if malformed."""
    if not value or len(value) != 8 or not value.isdigit():
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def find_game(games: Iterable[Game] | None, game_id: int | None) -> Game | None:
    """First game with a matching id.

    Duplicate ids are logged; the first one in list order wins.
    """
    if not games or game_id is None:
        return None
    matches = [g for g in games if g.id == game_id]
    if len(matches) > 1:
        logger.warning(
            "[NAV] %d games share id %d, using the first", len(matches), game_id
        )
    return matches[0] if matches else None


def rewrite_stream_url(raw_url: str, quality: Quality, is_final: bool) -> str:
    """Point a master playlist URL at a specific quality playlist.

    Everything after the last "/" is replaced with the quality's file; its
    placeholder becomes "complete-trimmed" for finished games, else "slide".

    Raises:
        StreamResponseError: raw_url has no "/" to anchor the rewrite
    """
    last_slash = raw_url.rfind("/")
    if last_slash < 0:
        raise StreamResponseError(f"Stream URL has no path: {raw_url!r}")

    variant = VARIANT_FINAL if is_final else VARIANT_LIVE
    return raw_url[:last_slash] + "/" + quality.file_for(variant)


class NavigationResolver:
    """Maps navigation keys to catalog nodes and media sources.

    Args:
        schedule_cache: Cached game lists
        stream_resolver: Playlist URL resolution
        host_probe: DNS equivalence check for the root listing (None skips it)
        today: Current local date provider (injectable for tests)
        days_back: Number of date folders per league
    """

    def __init__(
        self,
        schedule_cache: ScheduleCache,
        stream_resolver: StreamResolver,
        host_probe: HostProbe | None = None,
        today: Callable[[], date] = date.today,
        days_back: int | None = None,
        probe_hosts: tuple[str, ...] = PING_TEST_HOSTS,
    ):
        self._schedule = schedule_cache
        self._streams = stream_resolver
        self._probe = host_probe
        self._today = today
        self._days_back = days_back if days_back is not None else DAYS_BACK
        self._probe_hosts = probe_hosts

    # =========================================================================
    # Public API
    # =========================================================================

    def list_children(
        self,
        key: str | None,
        cancel_event: threading.Event | None = None,
    ) -> list[ChannelItem]:
        """List the child nodes of a navigation key."""
        logger.debug("[NAV] Listing children of %r", key)

        nav = parse_key(key)
        if nav is None:
            return []

        if nav.level == NavLevel.ROOT:
            return self._league_folders()
        if nav.level == NavLevel.LEAGUE:
            return self._date_folders(nav)
        if nav.level == NavLevel.DATE:
            return self._game_folders(nav, cancel_event)
        if nav.level == NavLevel.GAME:
            return self._feed_folders(nav, cancel_event)
        if nav.level == NavLevel.FEED:
            return self._quality_items(nav, cancel_event)
        if nav.level == NavLevel.QUALITY:
            # Leaf: playback goes through resolve_media
            return []
        raise AssertionError(f"unhandled navigation level {nav.level!r}")

    def resolve_media(
        self,
        key: str | None,
        cancel_event: threading.Event | None = None,
    ) -> list[MediaSource]:
        """Resolve a quality key into its single media source.

        The stream URL is looked up again here rather than reused from the
        listing, since the feed may have gone live or expired in between.

        Returns:
            One MediaSource, or an empty list if the key does not resolve
        """
        nav = parse_key(key)
        if nav is None or nav.level != NavLevel.QUALITY:
            return []

        quality = FEED_QUALITIES.get(nav.quality_key)
        if quality is None:
            logger.debug("[NAV] Unknown quality %r", nav.quality_key)
            return []

        located = self._locate(nav, cancel_event)
        if located is None:
            return []
        game, feed = located

        result = self._streams.resolve(
            nav.league, nav.game_date, feed.id, cancel_event=cancel_event
        )
        if not isinstance(result, StreamReady):
            logger.warning("[NAV] Stream for %s no longer playable: %s", key, result.message)
            return []

        path = rewrite_stream_url(result.raw_url, quality, game.is_final)
        logger.debug("[NAV] Resolved %s -> %s", key, path)

        return [
            MediaSource(
                path=path,
                id=key,
                bitrate=quality.bitrate,
                protocol="http",
                supports_probing=False,
            )
        ]

    # =========================================================================
    # Levels
    # =========================================================================

    def _league_folders(self) -> list[ChannelItem]:
        items = []
        if self._probe is not None:
            for host in self._probe_hosts:
                if not self._probe.is_match(host):
                    logger.warning("[NAV] %s does not resolve to the playlist host", host)
                    items.append(ChannelItem(id=host, name=f"{host} IP ERROR"))

        items.extend(ChannelItem(id=league_id, name=name) for league_id, name in LEAGUE_FOLDERS)
        return items

    def _date_folders(self, nav: NavKey) -> list[ChannelItem]:
        if normalize_league(nav.league) is None:
            return []

        today = self._today()
        items = []
        for offset in range(self._days_back):
            day = today - timedelta(days=offset)
            items.append(
                ChannelItem(
                    id=make_key(nav.league, day.strftime(DATE_FORMAT)),
                    name=day.isoformat(),
                )
            )
        return items

    def _game_folders(
        self, nav: NavKey, cancel_event: threading.Event | None
    ) -> list[ChannelItem]:
        games = self._games_for(nav, cancel_event)
        if not games:
            return []

        return [
            ChannelItem(id=make_key(nav.league, nav.date_key, game.id), name=game.name)
            for game in games
        ]

    def _feed_folders(
        self, nav: NavKey, cancel_event: threading.Event | None
    ) -> list[ChannelItem]:
        if normalize_league(nav.league) is None or nav.game_date is None:
            return []

        game = find_game(self._games_for(nav, cancel_event), nav.game_id)
        if game is None:
            return [ChannelItem(id=None, name=NO_FEEDS_FOUND, kind=ItemKind.MEDIA)]

        return [
            ChannelItem(
                id=make_key(nav.league, nav.date_key, nav.game_key, feed.id),
                name=feed.display_name,
            )
            for feed in game.feeds
        ]

    def _quality_items(
        self, nav: NavKey, cancel_event: threading.Event | None
    ) -> list[ChannelItem]:
        located = self._locate(nav, cancel_event)
        if located is None:
            return []
        _, feed = located

        result = self._streams.resolve(
            nav.league, nav.game_date, feed.id, cancel_event=cancel_event
        )
        if not isinstance(result, StreamReady):
            return [
                ChannelItem(
                    id=make_key(nav.league, nav.date_key, nav.game_key, feed.id, "null", "null"),
                    name=result.message,
                    kind=ItemKind.MEDIA,
                    content_type=ContentType.CLIP,
                    media_type=MediaType.PHOTO,
                )
            ]

        return [
            ChannelItem(
                id=make_key(nav.league, nav.date_key, nav.game_key, feed.id, quality.key),
                name=quality.title,
                kind=ItemKind.MEDIA,
                content_type=ContentType.MOVIE,
                media_type=MediaType.VIDEO,
                is_live_stream=True,
            )
            for quality in FEED_QUALITIES.values()
        ]

    # =========================================================================
    # Lookups
    # =========================================================================

    def _games_for(
        self, nav: NavKey, cancel_event: threading.Event | None
    ) -> list[Game] | None:
        """Cached games for the key's league and date; None if either is invalid."""
        if normalize_league(nav.league) is None:
            return None
        game_date = nav.game_date
        if game_date is None:
            return None
        return self._schedule.get_games(nav.league, game_date, cancel_event=cancel_event)

    def _locate(
        self, nav: NavKey, cancel_event: threading.Event | None
    ) -> tuple[Game, Feed] | None:
        game = find_game(self._games_for(nav, cancel_event), nav.game_id)
        if game is None:
            return None
        feed = game.get_feed(nav.feed_id)
        if feed is None:
            return None
        return game, feed
