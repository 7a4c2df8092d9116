"""
Frontend request processor.

Serves the ASGI application with uvicorn on a listener bound by the
controller, inside its own event loop on the thread that calls ``run``.
"""

import asyncio
import logging
import socket
import threading
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from hcpfrontend.common.app_setup import add_standard_health_routes
from hcpfrontend.common.exception_handlers import register_exception_handlers
from hcpfrontend.frontend.config import Settings
from hcpfrontend.frontend.constants import PROGRAM_NAME, get_version
from hcpfrontend.frontend.database import DatabaseClient
from hcpfrontend.ocm.base import ClusterServiceClientSpec

logger = logging.getLogger(__name__)


def create_app(
    cs_client: ClusterServiceClientSpec,
    db_client: Optional[DatabaseClient],
    settings: Settings,
) -> FastAPI:
    """Build the frontend ASGI application around the injected clients."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Serving {PROGRAM_NAME} in region {settings.region or '<unset>'}")
        yield
        logger.info(f"Shutting down {PROGRAM_NAME} application")
        # Pooled connections belong to this event loop
        close = getattr(cs_client, "close", None)
        if close is not None:
            await close()

    app = FastAPI(
        title=PROGRAM_NAME,
        version=get_version(),
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
    )
    app.state.cs_client = cs_client
    app.state.db_client = db_client
    app.state.region = settings.region

    register_exception_handlers(app)

    def components():
        return {"clusters_service": type(cs_client).__name__}

    add_standard_health_routes(
        app,
        app_name=PROGRAM_NAME,
        app_version=get_version(),
        region=settings.region,
        components=components,
    )
    return app


class Frontend:
    def __init__(
        self,
        *,
        listener: socket.socket,
        cs_client: ClusterServiceClientSpec,
        db_client: Optional[DatabaseClient],
        settings: Settings,
    ):
        self.listener = listener
        self.cs_client = cs_client
        self.db_client = db_client
        self.settings = settings
        self.app = create_app(cs_client, db_client, settings)
        self._done = threading.Event()

    def run(self, stop: threading.Event) -> None:
        """
        Serve until ``stop`` is set and every in-flight request has finished.

        Completion is reported to ``join`` only after the server has returned.
        """
        try:
            asyncio.run(self._serve(stop))
        except Exception as e:
            logger.error(f"Frontend processor failed: {e}")
            raise
        finally:
            logger.info("Frontend processor finished")
            self._done.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Block until ``run`` has returned. Returns False on timeout."""
        return self._done.wait(timeout)

    async def _serve(self, stop: threading.Event):
        config = uvicorn.Config(
            self.app,
            lifespan="on",
            log_config=None,
            log_level=self.settings.log_level.lower(),
        )
        server = uvicorn.Server(config)
        watcher = asyncio.create_task(self._watch_stop(stop, server))

        host, port = self.listener.getsockname()[:2]
        logger.info(f"Listening on {host}:{port}")
        try:
            await server.serve(sockets=[self.listener])
        finally:
            watcher.cancel()

    async def _watch_stop(self, stop: threading.Event, server: uvicorn.Server):
        while not stop.is_set():
            await asyncio.sleep(self.settings.stop_poll_interval_seconds)

        logger.info("Stop requested, draining in-flight requests")
        # uvicorn stops accepting and waits for open requests before returning
        server.should_exit = True
