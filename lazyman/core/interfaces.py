"""Interfaces for upstream collaborators.

Consumers depend on these, never on concrete HTTP clients, so tests can
hand in fakes.
"""

from abc import ABC, abstractmethod
from datetime import date

from lazyman.core.types import Game


class ScheduleSource(ABC):
    """Returns the games (with feeds) for a league on a date."""

    @abstractmethod
    def get_games(self, league: str, game_date: date) -> list[Game]:
        """Fetch games for a league and date.

        Raises:
            UnsupportedLeagueError: league is not NHL or MLB
            httpx.HTTPError: upstream unreachable or non-2xx
        """
        ...


class StreamSource(ABC):
    """Returns the raw playlist response for a feed."""

    @abstractmethod
    def get_playlist(self, league: str, game_date: date, feed_id: str, cdn: str) -> str:
        """Fetch the raw text answer of the playlist host."""
        ...


class HostProbe(ABC):
    """Checks whether a host resolves to the same address as the playlist host."""

    @abstractmethod
    def is_match(self, host: str) -> bool: ...
