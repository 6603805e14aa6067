"""Utilities - TTL cache, DNS probe, logging."""

from lazyman.utilities.cache import CacheSweeper, TTLCache, make_cache_key
from lazyman.utilities.logging import setup_logging
from lazyman.utilities.ping_test import PingTest

__all__ = [
    "CacheSweeper",
    "PingTest",
    "TTLCache",
    "make_cache_key",
    "setup_logging",
]
