"""Runtime configuration.

Configuration via environment variables:
    LAZYMAN_M3U8_HOST: Playlist host serving getM3U8.php (default: freesports.ddns.net)
    LAZYMAN_CDN: CDN tag passed to the playlist host (default: l3c)
    LAZYMAN_CACHE_TTL: Schedule cache lifetime in seconds (default: 60)
    LAZYMAN_SWEEP_INTERVAL: Seconds between expired-entry sweeps, 0 disables (default: 30)
    LAZYMAN_HTTP_TIMEOUT: Upstream request timeout in seconds (default: 10)
    LAZYMAN_DAYS_BACK: Number of date folders listed per league (default: 5)
"""

import os
from dataclasses import dataclass

# CDN tags understood by the playlist host
# l3c = Level 3, akc = Akamai
CDN_LEVEL3 = "l3c"
CDN_AKAMAI = "akc"

M3U8_HOST = os.environ.get("LAZYMAN_M3U8_HOST", "freesports.ddns.net")
CDN = os.environ.get("LAZYMAN_CDN", CDN_LEVEL3)
CACHE_TTL = float(os.environ.get("LAZYMAN_CACHE_TTL", 60))
SWEEP_INTERVAL = float(os.environ.get("LAZYMAN_SWEEP_INTERVAL", 30))
HTTP_TIMEOUT = float(os.environ.get("LAZYMAN_HTTP_TIMEOUT", 10.0))
DAYS_BACK = int(os.environ.get("LAZYMAN_DAYS_BACK", 5))


@dataclass
class Settings:
    """Channel settings."""

    m3u8_host: str = M3U8_HOST
    cdn: str = CDN
    cache_ttl: float = CACHE_TTL
    sweep_interval: float = SWEEP_INTERVAL
    http_timeout: float = HTTP_TIMEOUT
    days_back: int = DAYS_BACK


def get_settings() -> Settings:
    """Get settings built from the environment."""
    return Settings()
