"""Playlist host HTTP client.

Asks https://{host}/getM3U8.php for the master playlist URL of a feed.
The answer is plain text: either a URL or a human-readable message such as
"Not available yet". Interpretation is left to StreamResolver.

Implements StreamSource.
"""

import logging
import threading
from datetime import date

import httpx

from lazyman.config import HTTP_TIMEOUT, M3U8_HOST
from lazyman.core import StreamSource

logger = logging.getLogger(__name__)

PLAYLIST_PATH = "/getM3U8.php"


class PowerSportsClient(StreamSource):
    """Low-level playlist host client.

    Args:
        host: Playlist host name (defaults to LAZYMAN_M3U8_HOST)
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        host: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self._host = host or M3U8_HOST
        self._timeout = timeout if timeout is not None else HTTP_TIMEOUT
        self._transport = transport
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    @property
    def host(self) -> str:
        return self._host

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._timeout,
                        transport=self._transport,
                    )
        return self._client

    def playlist_url(self) -> str:
        return f"https://{self._host}{PLAYLIST_PATH}"

    def get_playlist(self, league: str, game_date: date, feed_id: str, cdn: str) -> str:
        """Fetch the raw playlist answer for a feed.

        Raises:
            httpx.HTTPError: transport failure or non-2xx status
        """
        params = {
            "league": league,
            "date": game_date.strftime("%Y-%m-%d"),
            "id": feed_id,
            "cdn": cdn,
        }
        response = self._get_client().get(self.playlist_url(), params=params)
        response.raise_for_status()

        text = response.text.strip()
        logger.debug("[M3U8] Response for %s/%s: %s", league, feed_id, text)
        return text

    def close(self) -> None:
        """Close the HTTP client."""
        with self._lock:
            if self._client:
                self._client.close()
                self._client = None
