"""Per (league, date) game list cache.

Game lists are fetched from the ScheduleSource on demand and kept for a
short TTL (60s by default) so browsing a day's games, feeds and qualities
does not hit the stats API on every click.

Concurrent misses for the same key may each fetch; set_if_absent makes sure
only one list is kept and every caller gets that list.
"""

import logging
import threading
from datetime import date

from lazyman.config import CACHE_TTL
from lazyman.core import Game, OperationCancelled, ScheduleSource, require_league
from lazyman.utilities.cache import TTLCache, make_cache_key

logger = logging.getLogger(__name__)


class ScheduleCache:
    """Caches ScheduleSource results per league and day.

    Args:
        source: Upstream schedule source
        cache: Backing TTLCache (shared with the sweeper)
        ttl_seconds: Entry lifetime
    """

    def __init__(
        self,
        source: ScheduleSource,
        cache: TTLCache | None = None,
        ttl_seconds: float | None = None,
    ):
        self._source = source
        self._cache = cache if cache is not None else TTLCache()
        self._ttl = ttl_seconds if ttl_seconds is not None else CACHE_TTL

    @property
    def cache(self) -> TTLCache:
        return self._cache

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get_games(
        self,
        league: str,
        game_date: date,
        cancel_event: threading.Event | None = None,
    ) -> list[Game]:
        """Get the games for a league on a date.

        Args:
            league: nhl or mlb (any case)
            game_date: Day to list
            cancel_event: Set by the caller to abandon the request

        Returns:
            Game list (shared; do not mutate)

        Raises:
            UnsupportedLeagueError: league is not NHL or MLB
            OperationCancelled: cancel_event was set; nothing was cached
            Anything the ScheduleSource raises, unchanged
        """
        code = require_league(league)
        cache_key = make_cache_key(code, game_date.strftime("%Y%m%d"))

        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug("[SCHEDULE] Cache hit: %s", cache_key)
            return cached

        logger.debug("[SCHEDULE] Cache miss: %s", cache_key)
        _check_cancelled(cancel_event, cache_key)

        games = self._source.get_games(code, game_date)

        _check_cancelled(cancel_event, cache_key)
        return self._cache.set_if_absent(cache_key, games, self._ttl)

    def invalidate(self, league: str, game_date: date) -> bool:
        """Drop the cached list for a league and day."""
        code = require_league(league)
        return self._cache.delete(make_cache_key(code, game_date.strftime("%Y%m%d")))

    def clear(self) -> None:
        self._cache.clear()

    def stats(self) -> dict:
        return self._cache.stats()


def _check_cancelled(cancel_event: threading.Event | None, what: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelled(f"Schedule lookup cancelled: {what}")
