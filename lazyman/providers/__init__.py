"""Upstream data providers.

statsapi: NHL/MLB schedule with broadcast feeds
powersports: playlist (m3u8) URL resolution
"""
