"""NHL and MLB stats API provider.

Both leagues expose the same schedule schema, so one client and one parser
serve both.
"""

from lazyman.providers.statsapi.client import StatsApiClient
from lazyman.providers.statsapi.provider import StatsApiProvider

__all__ = ["StatsApiClient", "StatsApiProvider"]
