"""In-memory TTL cache.

Entries are stored as (value, expires_at) pairs. Expiry is checked on every
read, so a stale value is never returned even if no sweep has run (e.g. after
the process was suspended). CacheSweeper optionally purges expired entries in
the background to bound memory.

Thread-safe: a single lock guards the underlying dict.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


def make_cache_key(*parts: Any) -> str:
    """Build a cache key by joining parts with underscores.

    >>> make_cache_key("nhl", "20240101")
    'nhl_20240101'
    """
    return "_".join(str(p) for p in parts)


@dataclass
class _Entry:
    value: Any
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class TTLCache:
    """Thread-safe dict with per-entry time-to-live.

    Args:
        clock: Time source in seconds (injectable for tests). Defaults to
            time.time, which keeps advancing while the host is suspended.
    """

    def __init__(self, clock: Callable[[], float] | None = None):
        self._clock = clock or time.time
        self._data: dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str) -> Any | None:
        """Get a value, or None if absent or expired.

        An expired entry found here is evicted.
        """
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                self._misses += 1
                return None
            if not entry.is_valid(self._clock()):
                del self._data[key]
                self._evictions += 1
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store a value for ttl seconds, replacing any existing entry."""
        with self._lock:
            self._data[key] = _Entry(value, self._clock() + ttl)

    def set_if_absent(self, key: str, value: Any, ttl: float) -> Any:
        """Store a value unless a valid entry already exists.

        Returns:
            The value now held for key: the existing one if it was still
            valid, otherwise the one just stored.
        """
        with self._lock:
            now = self._clock()
            entry = self._data.get(key)
            if entry is not None and entry.is_valid(now):
                return entry.value
            self._data[key] = _Entry(value, now + ttl)
            return value

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._data.clear()

    def purge_expired(self) -> int:
        """Evict every entry that is expired right now.

        Only entries found expired under the lock are removed, so an entry
        written after its predecessor expired is never dropped.

        Returns:
            Number of entries evicted
        """
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._data.items() if not e.is_valid(now)]
            for key in expired:
                del self._data[key]
            self._evictions += len(expired)
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._data.get(key)
            return entry is not None and entry.is_valid(self._clock())

    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            return {
                "size": len(self._data),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }


class CacheSweeper:
    """Background thread that periodically purges expired cache entries.

    Usage:
        sweeper = CacheSweeper(cache, interval_seconds=30)
        sweeper.start()
        # ... application runs ...
        sweeper.stop()
    """

    def __init__(self, cache: TTLCache, interval_seconds: float = 30.0):
        self._cache = cache
        self._interval = interval_seconds
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Start sweeping.

        Returns:
            True if started, False if already running or disabled (interval <= 0)
        """
        if self.is_running:
            logger.warning("[CACHE] Sweeper already running")
            return False
        if self._interval <= 0:
            logger.info("[CACHE] Sweeper disabled (interval=%s)", self._interval)
            return False

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            name="cache-sweeper",
            daemon=True,
        )
        self._thread.start()
        logger.info("[CACHE] Sweeper started (interval: %ss)", self._interval)
        return True

    def stop(self, timeout: float = 5.0) -> bool:
        """Stop sweeping.

        Returns:
            True if stopped, False if the thread did not exit within timeout
        """
        if not self.is_running:
            return True

        self._stop_event.set()
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning("[CACHE] Sweeper thread did not stop in time")
            return False

        self._thread = None
        logger.info("[CACHE] Sweeper stopped")
        return True

    def _run_loop(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                evicted = self._cache.purge_expired()
                if evicted:
                    logger.debug("[CACHE] Swept %d expired entries", evicted)
            except Exception as e:
                logger.exception("[CACHE] Sweep failed: %s", e)
