"""Run the HTTP listener and the startup search in a fixed order.

Order: listen → fetch → settle → open browser. The fetch only starts once
uvicorn reports that it is accepting connections.
"""

import asyncio
import contextlib
import logging

import uvicorn
from fastapi import FastAPI

from src.core.config import ServerConfig
from src.pipeline.startup import StartupFetch

logger = logging.getLogger(__name__)

STARTUP_POLL_S = 0.05


def build_server(app: FastAPI, config: ServerConfig) -> uvicorn.Server:
    # log_config=None keeps uvicorn's loggers on the root handler from setup_logging
    return uvicorn.Server(
        uvicorn.Config(app, host=config.host, port=config.port, log_config=None),
    )


async def wait_until_listening(server: uvicorn.Server, serving: "asyncio.Task[None]") -> bool:
    """Return True once the server is listening, False if it stopped first."""
    while not server.started:
        if serving.done():
            return False
        await asyncio.sleep(STARTUP_POLL_S)
    return True


async def serve(server: uvicorn.Server, startup: StartupFetch, config: ServerConfig) -> None:
    """Serve until shutdown; the startup search runs once the socket is bound."""
    serving = asyncio.create_task(server.serve())

    if not await wait_until_listening(server, serving):
        logger.error("Server stopped before it started listening; skipping search")
        await serving
        return

    logger.info("Server running on %s", config.base_url)
    fetch = asyncio.create_task(startup.run())
    try:
        await serving
    finally:
        if not fetch.done():
            logger.info("Server stopped while the search was running; cancelling it")
            fetch.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await fetch
