"""Consumers - schedule cache, stream resolution, navigation."""

from lazyman.consumers.navigation import (
    NavigationResolver,
    NavKey,
    NavLevel,
    parse_key,
    rewrite_stream_url,
)
from lazyman.consumers.schedule_cache import ScheduleCache
from lazyman.consumers.stream_resolver import StreamResolver, parse_expiry

__all__ = [
    "NavKey",
    "NavLevel",
    "NavigationResolver",
    "ScheduleCache",
    "StreamResolver",
    "parse_expiry",
    "parse_key",
    "rewrite_stream_url",
]
