"""
Core domain package.

This package holds the catalog normalization and resolution logic: slugs,
polymorphic field decoding, catalog numbers, editorial grouping and entity
resolution. It knows nothing about HTTP; the data source is injected.

Exports stay minimal; consumers should import from the specific module they
need (e.g. `clave.core.slugs`).
"""

from __future__ import annotations

__all__: list[str] = [
    "CoreError",
    "NotFoundError",
]


class CoreError(Exception):
    """Base class for core-layer exceptions."""


class NotFoundError(CoreError):
    """Raised when an entity (album/player) cannot be resolved."""
