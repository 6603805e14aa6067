"""Shared fakes for channel tests."""

from datetime import date

import pytest

from lazyman.core import (
    NO_FEED,
    Feed,
    Game,
    HostProbe,
    ScheduleSource,
    StreamSource,
    Team,
)


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeScheduleSource(ScheduleSource):
    """Returns canned games and counts calls per (league, date)."""

    def __init__(self, games: list[Game] | None = None, error: Exception | None = None):
        self.games = games if games is not None else []
        self.error = error
        self.calls: list[tuple[str, date]] = []

    def get_games(self, league: str, game_date: date) -> list[Game]:
        self.calls.append((league, game_date))
        if self.error:
            raise self.error
        # New list per call, like a fresh upstream fetch
        return list(self.games)


class FakeStreamSource(StreamSource):
    """Returns a canned playlist response."""

    def __init__(self, response: str = "", error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[tuple[str, date, str, str]] = []

    def get_playlist(self, league: str, game_date: date, feed_id: str, cdn: str) -> str:
        self.calls.append((league, game_date, feed_id, cdn))
        if self.error:
            raise self.error
        return self.response


class FakeProbe(HostProbe):
    """Reports every host in `failing` as not matching."""

    def __init__(self, failing: set[str] | None = None):
        self.failing = failing or set()
        self.checked: list[str] = []

    def is_match(self, host: str) -> bool:
        self.checked.append(host)
        return host not in self.failing


def make_game(
    game_id: int = 662,
    home: str = "Boston Bruins",
    away: str = "Toronto Maple Leafs",
    state: str = "Live",
    feeds: tuple[Feed, ...] | None = None,
) -> Game:
    return Game(
        id=game_id,
        home_team=Team(name=home, abbreviation=home[:3].upper()),
        away_team=Team(name=away, abbreviation=away[:3].upper()),
        state=state,
        feeds=feeds if feeds is not None else (NO_FEED,),
    )


@pytest.fixture
def clock():
    return FakeClock()
