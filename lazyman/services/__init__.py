"""Service wiring.

Builds the navigation stack from settings. The API layer and any embedding
host use create_channel() instead of constructing the pieces by hand.
"""

import logging
from dataclasses import dataclass

from lazyman.config import Settings, get_settings
from lazyman.consumers import NavigationResolver, ScheduleCache, StreamResolver
from lazyman.providers.powersports import PowerSportsClient
from lazyman.providers.statsapi import StatsApiClient, StatsApiProvider
from lazyman.utilities.cache import CacheSweeper, TTLCache
from lazyman.utilities.ping_test import PingTest

logger = logging.getLogger(__name__)


@dataclass
class Channel:
    """The assembled channel and the resources it owns."""

    navigator: NavigationResolver
    schedule_cache: ScheduleCache
    sweeper: CacheSweeper
    stats_client: StatsApiClient
    playlist_client: PowerSportsClient

    def start(self) -> None:
        self.sweeper.start()

    def close(self) -> None:
        """Stop the sweeper and close HTTP clients."""
        self.sweeper.stop()
        self.stats_client.close()
        self.playlist_client.close()


def create_channel(settings: Settings | None = None) -> Channel:
    """Build a Channel wired to the real upstream services."""
    settings = settings or get_settings()

    stats_client = StatsApiClient(timeout=settings.http_timeout)
    playlist_client = PowerSportsClient(host=settings.m3u8_host, timeout=settings.http_timeout)

    cache = TTLCache()
    schedule_cache = ScheduleCache(
        StatsApiProvider(stats_client),
        cache=cache,
        ttl_seconds=settings.cache_ttl,
    )
    navigator = NavigationResolver(
        schedule_cache=schedule_cache,
        stream_resolver=StreamResolver(playlist_client, cdn=settings.cdn),
        host_probe=PingTest(settings.m3u8_host),
        days_back=settings.days_back,
    )

    logger.debug(
        "[CHANNEL] Created (host=%s, cdn=%s, ttl=%ss)",
        settings.m3u8_host,
        settings.cdn,
        settings.cache_ttl,
    )

    return Channel(
        navigator=navigator,
        schedule_cache=schedule_cache,
        sweeper=CacheSweeper(cache, interval_seconds=settings.sweep_interval),
        stats_client=stats_client,
        playlist_client=playlist_client,
    )


__all__ = ["Channel", "create_channel"]
