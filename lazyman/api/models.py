"""Pydantic models for API responses."""

from pydantic import BaseModel, ConfigDict

from lazyman.core import ContentType, ItemKind, MediaType

# =============================================================================
# Channel
# =============================================================================


class ChannelItemResponse(BaseModel):
    """A node in the browse hierarchy."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None
    name: str
    kind: ItemKind
    content_type: ContentType | None = None
    media_type: MediaType | None = None
    is_live_stream: bool = False


class ChannelItemsResponse(BaseModel):
    """Children of a folder."""

    items: list[ChannelItemResponse]
    total_record_count: int


class MediaSourceResponse(BaseModel):
    """A playable source."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    path: str
    protocol: str
    bitrate: int
    supports_probing: bool


class MediaInfoResponse(BaseModel):
    """Sources for a quality item (zero or one)."""

    sources: list[MediaSourceResponse]


class QualityResponse(BaseModel):
    """A selectable stream quality."""

    model_config = ConfigDict(from_attributes=True)

    key: str
    title: str
    bitrate: int


# =============================================================================
# Cache
# =============================================================================


class CacheStatusResponse(BaseModel):
    """Schedule cache statistics."""

    size: int
    hits: int
    misses: int
    evictions: int
    ttl_seconds: float
    sweeper_running: bool
