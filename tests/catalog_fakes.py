"""
In-memory catalog source and sample records shaped like the worker's data.

Records deliberately mix encodings (JSON strings, native lists, bare strings)
the way the real catalog does.
"""

from __future__ import annotations

from typing import Any

from clave.source import AlbumPage, SourceUnavailableError

ASSET_BASE = "https://assets.test"


class FakeCatalogSource:
    """In-memory stand-in for CatalogClient."""

    def __init__(
        self,
        albums: list[dict[str, Any]] | None = None,
        players: list[dict[str, Any]] | None = None,
        pages: dict[int, AlbumPage] | None = None,
        songs: dict[int, list[dict[str, Any]]] | None = None,
        *,
        fail: bool = False,
    ) -> None:
        self.albums = albums or []
        self.players = players or []
        self.pages = pages or {}
        self.songs = songs or {}
        self.fail = fail
        self.calls: list[tuple[str, Any]] = []

    def _check(self) -> None:
        if self.fail:
            raise SourceUnavailableError("catalog worker unreachable")

    async def fetch_albums(self) -> list[dict[str, Any]]:
        self.calls.append(("fetch_albums", None))
        self._check()
        # Listing rows carry fewer fields than the detail endpoint
        return [{k: v for k, v in a.items() if k not in ("tracklist", "track_list")} for a in self.albums]

    async def fetch_album_by_id(self, album_id: int) -> dict[str, Any] | None:
        self.calls.append(("fetch_album_by_id", album_id))
        self._check()
        for album in self.albums:
            if album.get("id") == album_id:
                return dict(album)
        return None

    async def fetch_album_page(self, album_id: int) -> AlbumPage | None:
        self.calls.append(("fetch_album_page", album_id))
        self._check()
        return self.pages.get(album_id)

    async def fetch_player_songs(self, album_id: int) -> list[dict[str, Any]]:
        self.calls.append(("fetch_player_songs", album_id))
        self._check()
        return [dict(row) for row in self.songs.get(album_id, [])]

    async def fetch_players(self) -> list[dict[str, Any]]:
        self.calls.append(("fetch_players", None))
        self._check()
        return [dict(p) for p in self.players]


ALBUMS: list[dict[str, Any]] = [
    {
        "id": 4,
        "title": "Tango: Zero Hour",
        "artist": "Astor Piazzolla",
        "catno": "AMCL 1013",
        "tracklist": '["Tanguedia III", "Milonga del Angel", "Concierto para Quinteto"]',
        "availableForPurchase": True,
        "price": "18.00",
    },
    {
        "id": 7,
        "title": "Desire Develops an Edge",
        "by": "Kip Hanrahan",
        "catno": "AMCL 1009LP/1008EP",
        "track_list": [
            {"number": 1, "title": "Early Meaning", "duration": "4:12"},
            {"position": 2, "name": "Heart on My Sleeve"},
        ],
        "availableForPurchase": 0,
    },
    {
        "id": 9,
        "title": "21 Broken Melodies at Once",
        "artist": "Alfredo Triff",
        "catno": "SJR LP36",
        "tracklist": "not json",
    },
    {
        "id": 12,
        "title": "Something Else Entirely",
        "artist": "Unknown Ensemble",
    },
]

PLAYERS: list[dict[str, Any]] = [
    {"id": 1, "name": "Jack Bruce", "pictures": '["/players/jack1.jpg", "/players/jack2.jpg"]', "albums": []},
    {
        "id": 2,
        "name": "Astor Piazzolla",
        "pictures": ["/players/astor.jpg"],
        "bio": '<div><p class="pullquote">Composer &amp; bandoneonist.<br/>Buenos Aires.</p></div>',
        "birthdate": "1921",
        "deathdate": "1992",
        "albums": [{"id": 4, "title": "Tango: Zero Hour", "role": "bandoneon"}],
    },
    {"id": 3, "name": "Zeke Adams", "pictures": "/players/zeke.jpg"},
    {"id": 5, "name": "Andy Gonzalez", "pictures": None},
]

PAGES: dict[int, AlbumPage] = {
    4: AlbumPage(
        album={"id": 4, "title": "Tango: Zero Hour"},
        players=[
            {"id": 2, "name": "Astor Piazzolla", "role": "bandoneon", "pictures": '["/p/astor.jpg"]', "song_name": "Tanguedia III"},
            {"id": 2, "name": "Astor Piazzolla", "role": "composer", "song_name": "Milonga del Angel"},
            {"id": 6, "name": "Fernando Suarez Paz", "role": "violin", "song_name": "Tanguedia III"},
        ],
    ),
    12: AlbumPage(
        album={"id": 12, "title": "Something Else Entirely"},
        players=[
            {"id": 8, "name": "Someone", "role": "drums", "song_name": "Opening"},
            {"id": 8, "name": "Someone", "role": "percussion", "song_name": "Closing"},
        ],
    ),
}

# Junction rows for albums without a page view
PLAYER_SONGS: dict[int, list[dict[str, Any]]] = {
    7: [
        {"id": 70, "player_id": 5, "name": "Andy Gonzalez", "role": "bass", "song_name": "Early Meaning"},
        {"id": 71, "player_id": 5, "name": "Andy Gonzalez", "role": "arranger", "song_name": "Heart on My Sleeve"},
        {"id": 72, "player_id": 1, "name": "Jack Bruce", "role": "vocals", "song_name": "Early Meaning"},
    ],
}
