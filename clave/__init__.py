"""
Clave - catalog normalization and resolution for the American Clave site.

Clave turns the loosely typed records of the catalog worker (albums, players,
tracks) into canonical shapes, resolves human-facing slugs back to entities,
builds cover-art URLs from catalog numbers and partitions the catalog into
its editorial groups. A small FastAPI app exposes the result as JSON.
"""

__version__ = "0.1.0"
__author__ = "Clave Contributors"

from clave.server import ClaveServer

__all__ = ["ClaveServer", "__version__"]
