"""
Web Server Module for Clave.

This module provides the WebServer class that creates and manages the
FastAPI application and registers the catalog routes.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clave import __version__
from clave.web.routes.api import register_api_routes

if TYPE_CHECKING:
    from clave.core.catalog import Catalog

logger = logging.getLogger(__name__)


class WebServer:
    """
    FastAPI-based web server for Clave.

    Serves the JSON API consumed by the site's album and player pages.
    """

    def __init__(self, catalog: Catalog) -> None:
        """
        Initialize the WebServer.

        Args:
            catalog: Catalog facade backing every endpoint
        """
        self.catalog = catalog

        # Create FastAPI app
        self.app = FastAPI(
            title="Clave",
            description="Catalog API for albums and players",
            version=__version__,
        )

        # Pages are served from a different origin
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET"],
            allow_headers=["*"],
        )

        # Server state
        self._server: uvicorn.Server | None = None
        self._serve_task: asyncio.Task[None] | None = None
        self._host = "0.0.0.0"
        self._port = 9000

        # Register routes
        self._register_routes()

    def _register_routes(self) -> None:
        """Register all routes with the FastAPI app."""

        # Health check
        @self.app.get("/health")
        async def health_check() -> dict[str, str]:
            """Health check endpoint."""
            return {"status": "ok", "server": "clave"}

        register_api_routes(self.app, catalog=self.catalog)

    async def start(self, host: str = "0.0.0.0", port: int = 9000) -> None:
        """
        Start the web server.

        Args:
            host: Host address to bind to
            port: Port to listen on
        """
        self._host = host
        self._port = port

        config = uvicorn.Config(
            self.app,
            host=host,
            port=port,
            log_level="warning",
            access_log=False,
        )
        self._server = uvicorn.Server(config)

        # Serve in background
        self._serve_task = asyncio.create_task(self._server.serve())

        logger.info("Web server started on http://%s:%d", host, port)

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server is not None:
            self._server.should_exit = True
            self._server = None

        if self._serve_task is not None:
            await self._serve_task
            self._serve_task = None

        logger.info("Web server stopped")

    @property
    def port(self) -> int:
        """Get the server port."""
        return self._port

    @property
    def host(self) -> str:
        """Get the server host."""
        return self._host
