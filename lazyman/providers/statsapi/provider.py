"""Stats API schedule provider.

Fetches schedule data from the stats API and normalizes it into Game/Feed
dataclasses. Implements ScheduleSource.
"""

import logging
from datetime import date, datetime

from lazyman.core import NO_FEED, Feed, Game, ScheduleSource, Team
from lazyman.providers.statsapi.client import StatsApiClient

logger = logging.getLogger(__name__)


class StatsApiProvider(ScheduleSource):
    """Stats API implementation of ScheduleSource (NHL and MLB)."""

    def __init__(self, client: StatsApiClient | None = None):
        self._client = client or StatsApiClient()

    def get_games(self, league: str, game_date: date) -> list[Game]:
        data = self._client.get_schedule(league, game_date)
        games = parse_schedule(data)
        logger.debug("[STATSAPI] Parsed %d games for %s on %s", len(games), league, game_date)
        return games

    def close(self) -> None:
        self._client.close()


def parse_schedule(data: dict) -> list[Game]:
    """Parse a schedule payload (dates -> games) into Games.

    Games without a gamePk are skipped.
    """
    games = []
    for day in data.get("dates") or []:
        for raw in day.get("games") or []:
            game = _parse_game(raw)
            if game:
                games.append(game)
    return games


def _parse_game(raw: dict) -> Game | None:
    game_pk = raw.get("gamePk")
    if game_pk is None:
        logger.debug("[STATSAPI] Skipping game without gamePk")
        return None

    teams = raw.get("teams") or {}
    status = raw.get("status") or {}

    return Game(
        id=int(game_pk),
        start_time=_parse_datetime(raw.get("gameDate")),
        home_team=_parse_team(teams.get("home")),
        away_team=_parse_team(teams.get("away")),
        state=status.get("detailedState"),
        feeds=_parse_feeds(raw),
    )


def _parse_team(side: dict | None) -> Team:
    team = (side or {}).get("team") or {}
    return Team(name=team.get("name"), abbreviation=team.get("abbreviation"))


def _parse_feeds(raw: dict) -> tuple[Feed, ...]:
    """Flatten content.media.epg[].items[] into feeds.

    A game without any broadcast item gets the single "nofeed" placeholder.
    """
    epg_list = ((raw.get("content") or {}).get("media") or {}).get("epg") or []

    feeds = []
    for epg in epg_list:
        title = epg.get("title")
        for item in epg.get("items") or []:
            feed_id = item.get("mediaPlaybackId") or item.get("id")
            if feed_id is None:
                continue
            feeds.append(
                Feed(
                    id=str(feed_id),
                    feed_type=f"{title} - {item.get('mediaFeedType')}",
                    call_letters=item.get("callLetters") or "",
                )
            )

    return tuple(feeds) if feeds else (NO_FEED,)


def _parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO8601 timestamp ("2024-01-01T00:00:00Z")."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("[STATSAPI] Unparseable gameDate: %s", value)
        return None
