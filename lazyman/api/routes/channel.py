"""Channel browsing endpoints.

- GET /channel/items?folder_id= - List children of a folder
- GET /channel/media/{item_id} - Resolve a quality item to its stream
- GET /channel/qualities - List the quality table
"""

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query

from lazyman.api.deps import get_channel
from lazyman.api.models import (
    ChannelItemResponse,
    ChannelItemsResponse,
    MediaInfoResponse,
    MediaSourceResponse,
    QualityResponse,
)
from lazyman.core import FEED_QUALITIES, LazyManError
from lazyman.services import Channel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/channel")


def _upstream_error(e: Exception) -> HTTPException:
    logger.warning("[API] Upstream failure: %s", e)
    return HTTPException(status_code=502, detail=f"Upstream error: {e}")


@router.get("/items", response_model=ChannelItemsResponse)
def list_items(
    folder_id: str = Query("", description="Navigation key, empty for the root"),
    channel: Channel = Depends(get_channel),
) -> ChannelItemsResponse:
    """List the children of a folder."""
    try:
        items = channel.navigator.list_children(folder_id)
    except (httpx.HTTPError, LazyManError) as e:
        raise _upstream_error(e) from e

    return ChannelItemsResponse(
        items=[ChannelItemResponse.model_validate(item) for item in items],
        total_record_count=len(items),
    )


@router.get("/media/{item_id}", response_model=MediaInfoResponse)
def get_media_info(
    item_id: str,
    channel: Channel = Depends(get_channel),
) -> MediaInfoResponse:
    """Resolve a quality item to its playable stream."""
    try:
        sources = channel.navigator.resolve_media(item_id)
    except (httpx.HTTPError, LazyManError) as e:
        raise _upstream_error(e) from e

    return MediaInfoResponse(
        sources=[MediaSourceResponse.model_validate(source) for source in sources]
    )


@router.get("/qualities", response_model=list[QualityResponse])
def list_qualities() -> list[QualityResponse]:
    """List selectable qualities in display order."""
    return [QualityResponse.model_validate(q) for q in FEED_QUALITIES.values()]
