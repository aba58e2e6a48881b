"""
Clave Catalog Server - Main Server Module

This module contains the ClaveServer class that wires the data source client,
the catalog facade and the web server together and manages their lifecycle.
"""

from __future__ import annotations

import asyncio
import logging
import signal

from clave.config import Settings, get_settings
from clave.core.catalog import Catalog
from clave.source import CatalogClient
from clave.web.server import WebServer

logger = logging.getLogger(__name__)


class ClaveServer:
    """
    Main server that coordinates all components.

    The server manages:
    - CatalogClient: HTTP connection pool to the catalog worker
    - Catalog: normalization/resolution facade (no state between requests)
    - WebServer: FastAPI app served by uvicorn
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        """
        Initialize the server.

        Args:
            host: Host address to bind to (defaults to settings).
            port: HTTP port (defaults to settings).
            settings: Settings to use. If None, the global settings are loaded.
        """
        self.settings = settings or get_settings()
        self.host = host or self.settings.web_host
        self.port = port or self.settings.web_port

        self.client = CatalogClient(
            self.settings.data_source_url,
            timeout=self.settings.request_timeout,
        )
        self.catalog = Catalog(self.client, asset_base_url=self.settings.asset_base_url)
        self.web_server = WebServer(catalog=self.catalog)

        # Server state
        self._running = False
        self._shutdown_event: asyncio.Event | None = None

    async def start(self) -> None:
        """Start all server components."""
        logger.info("Starting Clave server on %s:%d", self.host, self.port)
        logger.info("Catalog source: %s", self.settings.data_source_url)

        self._running = True
        self._shutdown_event = asyncio.Event()

        await self.web_server.start(host=self.host, port=self.port)

        logger.info("Clave server started successfully")

    async def stop(self) -> None:
        """Stop all server components gracefully."""
        if not self._running:
            return

        logger.info("Stopping Clave server...")
        self._running = False

        # Stop accepting requests before closing the upstream pool
        await self.web_server.stop()
        await self.client.close()

        if self._shutdown_event:
            self._shutdown_event.set()

        logger.info("Clave server stopped")

    async def run(self) -> None:
        """
        Run the server until shutdown is requested.

        This method starts all components and waits for a shutdown signal
        (SIGINT or SIGTERM).
        """
        await self.start()

        # Set up signal handlers for graceful shutdown
        loop = asyncio.get_running_loop()

        def handle_signal() -> None:
            logger.info("Received shutdown signal")
            if self._shutdown_event:
                self._shutdown_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, handle_signal)
            except NotImplementedError:
                # Signal handlers not supported on Windows
                pass

        # Wait for shutdown
        if self._shutdown_event:
            await self._shutdown_event.wait()

        await self.stop()

    @property
    def is_running(self) -> bool:
        """Check if the server is currently running."""
        return self._running
