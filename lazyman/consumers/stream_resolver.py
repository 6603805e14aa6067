"""Stream URL resolution.

Asks the playlist host for a feed's URL and classifies the answer:

- contains "not" (any case), e.g. "Not available yet" -> StreamPending
- carries an "exp=<unix seconds>~" token in the past -> StreamExpired
- anything else -> StreamReady with the raw text
"""

import logging
import re
import threading
import time
from collections.abc import Callable
from datetime import date

from lazyman.config import CDN
from lazyman.core import (
    OperationCancelled,
    StreamExpired,
    StreamPending,
    StreamReady,
    StreamResponseError,
    StreamResult,
    StreamSource,
)

logger = logging.getLogger(__name__)

PENDING_MARKER = "not"
EXPIRY_MARKER = "exp="
_EXPIRY_MARKER_RE = re.compile(re.escape(EXPIRY_MARKER), re.IGNORECASE)
EXPIRY_TERMINATOR = "~"
EXPIRED_MESSAGE = "Stream URL is expired"


def parse_expiry(response: str) -> int | None:
    """Extract the unix-seconds expiry embedded in a playlist URL.

    The token is the text between "exp=" (any case) and the next "~".
    Without a "~" the token runs to the end of the string.

    Returns:
        Expiry timestamp, or None if the response has no "exp=" token

    Raises:
        StreamResponseError: token is empty or not all digits

    Examples:
        >>> parse_expiry("http://h/p.m3u8?exp=1700000000~acl=/*")
        1700000000
        >>> parse_expiry("http://h/p.m3u8") is None
        True
    """
    # Positions come from the original text; lower() can change its length
    match = _EXPIRY_MARKER_RE.search(response)
    if match is None:
        return None

    start = match.end()
    end = response.find(EXPIRY_TERMINATOR, start)
    if end < 0:
        end = len(response)

    token = response[start:end]
    if not (token.isascii() and token.isdigit()):
        raise StreamResponseError(f"Unparseable stream expiry: {token!r}")
    return int(token)


class StreamResolver:
    """Resolves feed ids to playlist URLs via a StreamSource.

    Args:
        source: Playlist host client
        cdn: Default CDN tag
        clock: Wall-clock time source in unix seconds (injectable for tests)
    """

    def __init__(
        self,
        source: StreamSource,
        cdn: str | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self._source = source
        self._cdn = cdn or CDN
        self._clock = clock

    def resolve(
        self,
        league: str,
        game_date: date,
        feed_id: str,
        cdn: str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> StreamResult:
        """Resolve and classify the playlist URL for a feed.

        Raises:
            OperationCancelled: cancel_event was set while the request ran
            StreamResponseError: expiry token present but not numeric
            Anything the StreamSource raises, unchanged
        """
        response = self._source.get_playlist(league, game_date, feed_id, cdn or self._cdn)

        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelled(f"Stream lookup cancelled: {league}/{feed_id}")

        return self.classify(response)

    def classify(self, response: str) -> StreamResult:
        """Classify a raw playlist host answer."""
        # stream not ready yet
        if PENDING_MARKER in response.lower():
            logger.warning("[M3U8] Stream not available: %s", response)
            return StreamPending(response)

        expires_on = parse_expiry(response)
        if expires_on is not None and expires_on < int(self._clock()):
            logger.warning("[M3U8] %s (exp=%d)", EXPIRED_MESSAGE, expires_on)
            return StreamExpired(EXPIRED_MESSAGE)

        return StreamReady(response)
