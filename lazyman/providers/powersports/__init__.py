"""Playlist host (getM3U8.php) provider."""

from lazyman.providers.powersports.client import PowerSportsClient

__all__ = ["PowerSportsClient"]
