"""Schedule cache endpoints.

- GET /cache/status - Get cache statistics
- POST /cache/clear - Drop all cached schedules
"""

import logging

from fastapi import APIRouter, Depends

from lazyman.api.deps import get_channel
from lazyman.api.models import CacheStatusResponse
from lazyman.services import Channel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cache")


@router.get("/status", response_model=CacheStatusResponse)
def get_cache_status(channel: Channel = Depends(get_channel)) -> CacheStatusResponse:
    """Get schedule cache statistics."""
    stats = channel.schedule_cache.stats()
    return CacheStatusResponse(
        **stats,
        ttl_seconds=channel.schedule_cache.ttl_seconds,
        sweeper_running=channel.sweeper.is_running,
    )


@router.post("/clear")
def clear_cache(channel: Channel = Depends(get_channel)) -> dict:
    """Drop all cached schedules. The next browse refetches from upstream."""
    size = channel.schedule_cache.stats()["size"]
    channel.schedule_cache.clear()
    logger.info("[API] Cleared schedule cache (%d entries)", size)
    return {"status": "cleared", "entries": size}
