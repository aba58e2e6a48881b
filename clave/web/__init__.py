"""
Clave Web Layer.

This package provides the HTTP/REST layer for Clave: a FastAPI application
exposing the catalog to the site's album and player pages.

Components:
- WebServer: FastAPI application with all routes
"""

from clave.web.server import WebServer

__all__ = [
    "WebServer",
]
