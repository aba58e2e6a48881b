"""
HTTP client for the catalog worker API.

The worker exposes the catalog tables as JSON:

- GET /albums                      all albums
- GET /albums/{id}                 one album (wrapped in a one-element list)
- GET /albums/{id}/player-songs    player/song junction rows
- GET /album_page/{id}             {"album": {...}, "players": [...]}
- GET /players                     all players, each with nested albums

There is no slug endpoint; slug lookups fetch the collection and match
locally (see `clave.core.resolver`).

Records are returned as received. Field decoding is the caller's job.
Transport failures and unexpected statuses are raised, never swallowed,
and nothing is retried here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any

import httpx

logger = logging.getLogger(__name__)

RawRecord = dict[str, Any]


class SourceError(RuntimeError):
    """Base error for catalog data source failures."""


class SourceUnavailableError(SourceError):
    """Raised when the data source cannot be reached."""


class SourceResponseError(SourceError):
    """Raised when the data source answers with an unexpected status or body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True, slots=True)
class AlbumPage:
    """Album plus one row per player per song on it."""

    album: RawRecord
    players: list[RawRecord] = field(default_factory=list)


class CatalogClient:
    """
    Async client for the catalog worker.

    Use as an async context manager, or call `close()` when done:

        async with CatalogClient(settings.data_source_url) as client:
            albums = await client.fetch_albums()
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Worker base URL (no trailing slash needed).
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> CatalogClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, *, allow_missing: bool = False) -> Any:
        """
        GET a path and decode the JSON body.

        Returns None for 404 when `allow_missing` is set.
        """
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as e:
            logger.error("Catalog source request %s failed: %s", path, e)
            raise SourceUnavailableError(f"Catalog source unreachable for {path}: {e}") from e

        if response.status_code == 404 and allow_missing:
            return None
        if response.is_error:
            logger.error("Catalog source returned %d for %s", response.status_code, path)
            raise SourceResponseError(
                f"Catalog source returned {response.status_code} for {path}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise SourceResponseError(f"Catalog source returned invalid JSON for {path}") from e

    @staticmethod
    def _records(data: Any, path: str) -> list[RawRecord]:
        if not isinstance(data, list):
            raise SourceResponseError(f"Expected a list from {path}, got {type(data).__name__}")
        return [item for item in data if isinstance(item, dict)]

    async def fetch_albums(self) -> list[RawRecord]:
        """Fetch all albums."""
        return self._records(await self._get("/albums"), "/albums")

    async def fetch_players(self) -> list[RawRecord]:
        """Fetch all players."""
        return self._records(await self._get("/players"), "/players")

    async def fetch_album_by_id(self, album_id: int) -> RawRecord | None:
        """Fetch one album, or None if the worker has no such id."""
        data = await self._get(f"/albums/{album_id}", allow_missing=True)
        # The worker wraps single rows in a list
        if isinstance(data, list):
            data = data[0] if data else None
        if data is not None and not isinstance(data, dict):
            raise SourceResponseError(f"Unexpected album payload for id {album_id}")
        return data

    async def fetch_album_page(self, album_id: int) -> AlbumPage | None:
        """Fetch the album page (album + player/song rows), or None if missing."""
        data = await self._get(f"/album_page/{album_id}", allow_missing=True)
        if data is None:
            return None
        if not isinstance(data, dict):
            raise SourceResponseError(f"Unexpected album page payload for id {album_id}")

        album = data.get("album")
        players = data.get("players")
        return AlbumPage(
            album=album if isinstance(album, dict) else {},
            players=[row for row in players if isinstance(row, dict)] if isinstance(players, list) else [],
        )

    async def fetch_player_songs(self, album_id: int) -> list[RawRecord]:
        """Fetch player/song junction rows for an album ([] if the album is missing)."""
        path = f"/albums/{album_id}/player-songs"
        data = await self._get(path, allow_missing=True)
        if data is None:
            return []
        return self._records(data, path)
