"""
REST API Routes for Clave.

Provides the JSON endpoints the site's pages call:
- /api/albums: Album listing, grouped listing, album detail, album players
- /api/players: Roster, player profile, player albums

Data source failures surface as 502; unresolved slugs/ids as 404.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, HTTPException

from clave.core import NotFoundError
from clave.source import SourceError
from clave.web.serializers import to_dict, to_list

if TYPE_CHECKING:
    from clave.core.catalog import Catalog

logger = logging.getLogger(__name__)

router = APIRouter(tags=["api"])

# Reference set during route registration
_catalog: Catalog | None = None


def register_api_routes(app, catalog: Catalog) -> None:
    """
    Register API routes with the FastAPI app.

    Args:
        app: FastAPI application instance
        catalog: Catalog facade used by every endpoint
    """
    global _catalog
    _catalog = catalog
    app.include_router(router)


def _require_catalog() -> Catalog:
    if _catalog is None:
        raise HTTPException(status_code=503, detail="Server not initialized")
    return _catalog


def _source_failure(what: str, error: SourceError) -> HTTPException:
    logger.error("Failed to fetch %s: %s", what, error)
    return HTTPException(status_code=502, detail=f"Failed to fetch {what}")


# =============================================================================
# Album Endpoints
# =============================================================================


@router.get("/api/albums")
async def list_albums(purchasable: bool = False, q: str = "") -> dict[str, Any]:
    """List albums, optionally only purchasable ones or those matching `q`."""
    catalog = _require_catalog()
    try:
        albums = await catalog.list_albums(q, purchasable_only=purchasable)
    except SourceError as e:
        raise _source_failure("albums", e) from e

    return {"count": len(albums), "albums": to_list(albums)}


@router.get("/api/albums/groups")
async def album_groups() -> dict[str, Any]:
    """Albums partitioned into editorial groups (ungrouped albums last, id 0)."""
    catalog = _require_catalog()
    try:
        groups = await catalog.grouped_albums()
    except SourceError as e:
        raise _source_failure("albums", e) from e

    return {"count": len(groups), "groups": to_list(groups)}


@router.get("/api/albums/{token}")
async def get_album(token: str) -> dict[str, Any]:
    """Album detail by numeric id or title slug."""
    catalog = _require_catalog()
    try:
        detail = await catalog.album_detail(token)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail="Album not found") from e
    except SourceError as e:
        raise _source_failure("album", e) from e

    return to_dict(detail)


@router.get("/api/albums/{token}/players")
async def get_album_players(token: str) -> dict[str, Any]:
    """Players on an album, one entry per player."""
    catalog = _require_catalog()
    try:
        players = await catalog.album_players(token)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail="Album not found") from e
    except SourceError as e:
        raise _source_failure("players for album", e) from e

    return {"count": len(players), "players": to_list(players)}


# =============================================================================
# Player Endpoints
# =============================================================================


@router.get("/api/players")
async def list_players(q: str = "") -> dict[str, Any]:
    """Roster: core players in editorial order, then everyone else by name."""
    catalog = _require_catalog()
    try:
        roster = await catalog.list_players(q)
    except SourceError as e:
        raise _source_failure("players", e) from e

    return {
        "count": len(roster.core) + len(roster.others),
        "core": to_list(roster.core),
        "others": to_list(roster.others),
    }


@router.get("/api/players/{slug}")
async def get_player(slug: str) -> dict[str, Any]:
    """Player profile by name slug."""
    catalog = _require_catalog()
    try:
        detail = await catalog.player_detail(slug)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail="Player not found") from e
    except SourceError as e:
        raise _source_failure("player", e) from e

    return to_dict(detail)


@router.get("/api/players/{slug}/albums")
async def get_player_albums(slug: str) -> dict[str, Any]:
    """Albums a player appears on."""
    catalog = _require_catalog()
    try:
        albums = await catalog.player_albums(slug)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail="Player not found") from e
    except SourceError as e:
        raise _source_failure("albums for player", e) from e

    return {"count": len(albums), "albums": to_list(albums)}
