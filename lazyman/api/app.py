"""FastAPI application.

The lifespan builds the Channel, starts the cache sweeper and closes
upstream clients on shutdown. Tests pass a prebuilt Channel to create_app.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from lazyman import __version__
from lazyman.api.routes import cache, channel
from lazyman.services import Channel, create_channel
from lazyman.utilities.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(channel_instance: Channel | None = None) -> FastAPI:
    """Create the API app.

    Args:
        channel_instance: Prebuilt Channel; built from the environment if None
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        ch = channel_instance or create_channel()
        app.state.channel = ch
        ch.start()
        logger.info("[API] LazyMan channel %s started", __version__)
        yield
        ch.close()
        app.state.channel = None
        logger.info("[API] LazyMan channel stopped")

    app = FastAPI(title="LazyMan", version=__version__, lifespan=lifespan)
    app.include_router(channel.router)
    app.include_router(cache.router)
    return app
