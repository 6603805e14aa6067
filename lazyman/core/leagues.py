"""Supported leagues and stream qualities.

Both tables are process-wide constants.
"""

from types import MappingProxyType

from lazyman.core.exceptions import UnsupportedLeagueError
from lazyman.core.types import Quality

NHL = "nhl"
MLB = "mlb"

# (folder id, display name) in root listing order.
# Folder ids keep the casing the channel has always used.
LEAGUE_FOLDERS: tuple[tuple[str, str], ...] = (
    ("nhl", "NHL"),
    ("MLB", "MLB"),
)

SUPPORTED_LEAGUES = frozenset({NHL, MLB})

# Hosts whose DNS answer must match the playlist host for playback to work
PING_TEST_HOSTS: tuple[str, ...] = (
    "mf.svc.nhl.com",
    "mlb-ws-mf.media.mlb.com",
    "playback.svcs.mlb.com",
)

FEED_QUALITIES: MappingProxyType[str, Quality] = MappingProxyType(
    {
        q.key: q
        for q in (
            Quality("450", "216p", "450K/450_{}.m3u8", 450_000),
            Quality("800", "288p", "800k/800_{}.m3u8", 800_000),
            Quality("1200", "360p", "1200K/1200_{}.m3u8", 1_200_000),
            Quality("1800", "504p", "1800K/1800_{}.m3u8", 1_800_000),
            Quality("2500", "540p", "2500K/2500_{}.m3u8", 2_500_000),
            Quality("3500", "720p", "3500K/3500_{}.m3u8", 3_500_000),
            Quality("5600", "720p 60fps", "5600K/5600_{}.m3u8", 5_600_000),
        )
    }
)


def normalize_league(league: str | None) -> str | None:
    """Map a league string to its canonical lowercase code.

    Matching is case-insensitive ("MLB" and "mlb" are the same league).
    Returns None for anything unsupported.

    Examples:
        >>> normalize_league("MLB")
        'mlb'
        >>> normalize_league("nba") is None
        True
    """
    if not league:
        return None
    code = league.strip().lower()
    return code if code in SUPPORTED_LEAGUES else None


def require_league(league: str) -> str:
    """Like normalize_league, but raise for unsupported leagues."""
    code = normalize_league(league)
    if code is None:
        raise UnsupportedLeagueError(league)
    return code
