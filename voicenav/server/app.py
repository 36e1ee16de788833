"""FastAPI application factory for VoiceNav.

``create_app()`` is the single entry point used by the CLI and ``uvicorn``
alike. The engine is started and stopped by the app lifespan.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from voicenav import __version__
from voicenav.engine import VoiceNavEngine
from voicenav.server.routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the speech channel and synthesizer on startup, close them on shutdown."""
    engine: VoiceNavEngine = app.state.engine
    logger.info("VoiceNav server starting up")
    await engine.start()
    try:
        yield
    finally:
        logger.info("VoiceNav server shutting down")
        await engine.stop()


def create_app(engine: VoiceNavEngine | None = None) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    The returned app has:
    * ``app.state.engine`` -- the :class:`VoiceNavEngine` instance
    * The ``/health``, ``/status``, ``/toggle``, ``/context``, ``/command``,
      ``/commands``, ``/notices`` and ``/navigations`` routes
    """
    app = FastAPI(
        title="VoiceNav",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.engine = engine or VoiceNavEngine()
    app.include_router(router)

    logger.info("FastAPI app created")
    return app
