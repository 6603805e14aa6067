"""Exceptions raised by the channel core.

Lookup misses inside the hierarchy are not exceptions; they surface as
empty results. Everything here propagates to the caller.
"""


class LazyManError(Exception):
    """Base class for channel errors."""


class UnsupportedLeagueError(LazyManError, ValueError):
    """A league other than NHL/MLB reached a schedule lookup."""

    def __init__(self, league: str):
        super().__init__(f"Unknown league: {league}")
        self.league = league


class StreamResponseError(LazyManError):
    """The playlist host returned text that could not be interpreted."""


class ScheduleResponseError(LazyManError):
    """The stats API returned a payload that could not be interpreted."""


class OperationCancelled(LazyManError):
    """The caller cancelled the request while upstream I/O was in flight."""
