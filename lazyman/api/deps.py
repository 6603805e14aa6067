"""FastAPI dependencies."""

from fastapi import HTTPException, Request

from lazyman.services import Channel


def get_channel(request: Request) -> Channel:
    """The Channel built by the app lifespan."""
    channel = getattr(request.app.state, "channel", None)
    if channel is None:
        raise HTTPException(status_code=503, detail="Channel not initialized")
    return channel
