"""Stats API HTTP client.

Handles raw HTTP requests to the NHL and MLB schedule endpoints.
No data transformation - just fetch and return JSON.

Errors are not swallowed: transport failures and non-2xx answers raise
httpx errors, undecodable bodies raise ScheduleResponseError.
"""

import logging
import threading
from datetime import date

import httpx

from lazyman.config import HTTP_TIMEOUT
from lazyman.core.exceptions import ScheduleResponseError
from lazyman.core.leagues import MLB, NHL, require_league

logger = logging.getLogger(__name__)

NHL_SCHEDULE_URL = "https://statsapi.web.nhl.com/api/v1/schedule"
MLB_SCHEDULE_URL = "https://statsapi.mlb.com/api/v1/schedule"

# Expansions that pull teams, linescore and the broadcast EPG into one response
NHL_EXPAND = "schedule.teams,schedule.linescore,schedule.game.content.media.epg"
MLB_HYDRATE = "team,linescore,game(content(summary,media(epg)))"


def build_schedule_request(league: str, game_date: date) -> tuple[str, dict]:
    """Get (url, params) for a league's schedule on a date."""
    code = require_league(league)
    day = game_date.strftime("%Y-%m-%d")

    if code == NHL:
        return NHL_SCHEDULE_URL, {
            "startDate": day,
            "endDate": day,
            "expand": NHL_EXPAND,
        }
    if code == MLB:
        return MLB_SCHEDULE_URL, {
            "sportId": 1,
            "startDate": day,
            "endDate": day,
            "hydrate": MLB_HYDRATE,
            "language": "en",
        }
    raise AssertionError(f"unhandled league {code}")


class StatsApiClient:
    """Low-level stats API client."""

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self._timeout = timeout if timeout is not None else HTTP_TIMEOUT
        self._transport = transport
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                # Double-check after acquiring lock
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._timeout,
                        transport=self._transport,
                        limits=httpx.Limits(max_connections=20, max_keepalive_connections=20),
                    )
        return self._client

    def get_schedule(self, league: str, game_date: date) -> dict:
        """Fetch the raw schedule payload.

        Args:
            league: nhl or mlb (any case)
            game_date: Day to fetch

        Returns:
            Decoded JSON object

        Raises:
            UnsupportedLeagueError: league is not NHL or MLB
            httpx.HTTPError: transport failure or non-2xx status
            ScheduleResponseError: body is not a JSON object
        """
        url, params = build_schedule_request(league, game_date)
        logger.debug("[STATSAPI] Getting games from %s %s", url, params["startDate"])

        response = self._get_client().get(url, params=params)
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise ScheduleResponseError(f"Invalid schedule JSON from {url}: {e}") from e

        if not isinstance(data, dict):
            raise ScheduleResponseError(f"Unexpected schedule payload from {url}")
        return data

    def close(self) -> None:
        """Close the HTTP client."""
        with self._lock:
            if self._client:
                self._client.close()
                self._client = None
