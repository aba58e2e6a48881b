"""
Catalog data source.

Async HTTP access to the catalog worker. Everything above this package sees
only raw records and the error types exported here.
"""

from clave.source.client import (
    AlbumPage,
    CatalogClient,
    SourceError,
    SourceResponseError,
    SourceUnavailableError,
)

__all__ = [
    "AlbumPage",
    "CatalogClient",
    "SourceError",
    "SourceResponseError",
    "SourceUnavailableError",
]
