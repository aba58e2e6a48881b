"""
Catalog facade.

`Catalog` answers the questions the site's pages ask (album listing, grouped
listing, album detail, roster, player profile) by composing the pure helpers
in this package over a data source. It returns frozen view dataclasses; the
web layer only serializes them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Protocol

from clave.core import NotFoundError
from clave.core.catno import all_cover_urls, front_cover_url
from clave.core.fields import CanonicalTrack, album_tracklist, normalize_pictures, primary_picture
from clave.core.groups import ALBUM_GROUPS, UNGROUPED_ID, AlbumGroup, assign_to_groups, entity_artist
from clave.core.players import filter_players, format_life_dates, is_core_player, nested_albums, split_roster
from clave.core.resolver import (
    PlayerAppearance,
    RawRecord,
    merge_player_appearances,
    resolve_album_by_slug_or_id,
    resolve_player_by_slug,
    tracklist_from_song_names,
)
from clave.core.slugs import to_slug
from clave.core.text import extract_bio_from_html

if TYPE_CHECKING:
    from clave.source.client import AlbumPage

logger = logging.getLogger(__name__)

UNGROUPED_NAME = "More from the catalog"


class CatalogSource(Protocol):
    """What the facade needs from the data source."""

    async def fetch_albums(self) -> list[RawRecord]: ...

    async def fetch_album_by_id(self, album_id: int) -> RawRecord | None: ...

    async def fetch_album_page(self, album_id: int) -> AlbumPage | None: ...

    async def fetch_player_songs(self, album_id: int) -> list[RawRecord]: ...

    async def fetch_players(self) -> list[RawRecord]: ...


@dataclass(frozen=True, slots=True)
class AlbumSummary:
    id: int | None
    title: str
    slug: str
    artist: str | None
    catno: str | None
    cover_url: str | None
    available_for_purchase: bool = False
    price: float | None = None


@dataclass(frozen=True, slots=True)
class AlbumGroupView:
    id: int
    name: str
    albums: tuple[AlbumSummary, ...]


@dataclass(frozen=True, slots=True)
class AlbumDetail:
    """Everything the album page renders."""

    id: int | None
    title: str
    slug: str
    artist: str | None
    catno: str | None
    dates: str | None
    tracklist: tuple[CanonicalTrack, ...]
    players: tuple[PlayerAppearance, ...]
    cover_urls: tuple[str, ...]
    pictures: tuple[str, ...]
    available_for_purchase: bool = False
    price: float | None = None
    buy_link: str | None = None


@dataclass(frozen=True, slots=True)
class PlayerSummary:
    id: int | None
    name: str
    slug: str
    role: str | None
    picture: str | None
    album_titles: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PlayerAlbum:
    """An album as listed on a player's profile."""

    id: int | None
    title: str
    slug: str
    role: str | None = None


@dataclass(frozen=True, slots=True)
class PlayerDetail:
    """Everything the player profile renders."""

    id: int | None
    name: str
    slug: str
    is_core: bool
    role: str | None
    pictures: tuple[str, ...]
    picture: str | None
    bio: str
    life_dates: str | None
    website: str | None
    albums: tuple[PlayerAlbum, ...]


@dataclass(frozen=True, slots=True)
class Roster:
    core: tuple[PlayerSummary, ...]
    others: tuple[PlayerSummary, ...]


def _text(record: Mapping[str, Any], key: str) -> str | None:
    value = record.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _int(record: Mapping[str, Any], key: str) -> int | None:
    value = record.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _price(record: Mapping[str, Any]) -> float | None:
    value = record.get("price")
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def is_purchasable(album: Mapping[str, Any]) -> bool:
    # D1 stores booleans as 0/1
    flag = album.get("availableForPurchase")
    return flag is True or flag == 1 or (isinstance(flag, str) and flag.lower() == "true")


class Catalog:
    """
    High-level facade over the catalog data source.

    All methods are read-only projections; nothing is cached between calls.
    Data source errors propagate unchanged.
    """

    def __init__(self, source: CatalogSource, *, asset_base_url: str | None = None) -> None:
        self._source = source
        self._asset_base_url = asset_base_url

    @property
    def source(self) -> CatalogSource:
        return self._source

    # -------------------------------------------------------------------------
    # Albums
    # -------------------------------------------------------------------------

    def _album_summary(self, album: Mapping[str, Any]) -> AlbumSummary:
        title = _text(album, "title") or ""
        catno = _text(album, "catno")
        return AlbumSummary(
            id=_int(album, "id"),
            title=title,
            slug=to_slug(title),
            artist=entity_artist(album) or None,
            catno=catno,
            cover_url=front_cover_url(catno, self._asset_base_url) if catno else None,
            available_for_purchase=is_purchasable(album),
            price=_price(album),
        )

    async def list_albums(self, query: str = "", *, purchasable_only: bool = False) -> list[AlbumSummary]:
        """
        List albums, optionally filtered.

        Args:
            query: Case-insensitive substring matched against "title artist".
            purchasable_only: Keep only albums flagged availableForPurchase.
        """
        albums = await self._source.fetch_albums()
        needle = query.strip().lower()

        result: list[AlbumSummary] = []
        for album in albums:
            if purchasable_only and not is_purchasable(album):
                continue
            if needle:
                searchable = f"{album.get('title') or ''} {entity_artist(album)}".lower()
                if needle not in searchable:
                    continue
            result.append(self._album_summary(album))
        return result

    async def grouped_albums(self, groups: tuple[AlbumGroup, ...] = ALBUM_GROUPS) -> list[AlbumGroupView]:
        """All albums partitioned into editorial groups, ungrouped last."""
        albums = await self._source.fetch_albums()
        buckets = assign_to_groups(albums, groups)
        names = {group.id: group.name for group in groups}

        return [
            AlbumGroupView(
                id=group_id,
                name=UNGROUPED_NAME if group_id == UNGROUPED_ID else names[group_id],
                albums=tuple(self._album_summary(album) for album in members),
            )
            for group_id, members in buckets.items()
        ]

    async def album_detail(self, token: str) -> AlbumDetail:
        """
        Build the album page for a path token (numeric id or title slug).

        Raises:
            NotFoundError: If no album matches the token.
        """
        album = await resolve_album_by_slug_or_id(token, self._source)
        if album is None:
            raise NotFoundError(f"Album not found: {token}")

        album_id = _int(album, "id")
        page = await self._source.fetch_album_page(album_id) if album_id is not None else None
        page_title: str | None = None
        if page is None:
            # Older albums have junction rows but no page view
            rows = await self._source.fetch_player_songs(album_id) if album_id is not None else []
            logger.info("No album page for album %s; using %d player-song rows", album_id, len(rows))
        else:
            rows = page.players
            page_title = _text(page.album, "title")

        title = page_title or _text(album, "title") or ""
        tracklist = album_tracklist(album) or tracklist_from_song_names(rows)
        catno = _text(album, "catno")

        return AlbumDetail(
            id=album_id,
            title=title,
            slug=to_slug(title),
            artist=entity_artist(album) or None,
            catno=catno,
            dates=_text(album, "dates"),
            tracklist=tuple(tracklist),
            players=tuple(merge_player_appearances(rows)),
            cover_urls=tuple(all_cover_urls(catno, self._asset_base_url)) if catno else (),
            pictures=tuple(normalize_pictures(album.get("pictures"))),
            available_for_purchase=is_purchasable(album),
            price=_price(album),
            buy_link=_text(album, "buyLink"),
        )

    async def album_players(self, token: str) -> list[PlayerAppearance]:
        """Merged players of an album."""
        detail = await self.album_detail(token)
        return list(detail.players)

    # -------------------------------------------------------------------------
    # Players
    # -------------------------------------------------------------------------

    @staticmethod
    def _player_summary(player: Mapping[str, Any]) -> PlayerSummary:
        name = _text(player, "name") or ""
        return PlayerSummary(
            id=_int(player, "id"),
            name=name,
            slug=to_slug(name),
            role=_text(player, "role"),
            picture=primary_picture(normalize_pictures(player.get("pictures"))),
            album_titles=tuple(filter(None, (_text(album, "title") for album in nested_albums(player)))),
        )

    async def list_players(self, query: str = "") -> Roster:
        """Players matching `query`, core players first in editorial order."""
        players = await self._source.fetch_players()
        summaries = [self._player_summary(p) for p in filter_players(players, query)]
        core, others = split_roster(summaries)
        return Roster(core=tuple(core), others=tuple(others))

    async def _resolve_player(self, slug: str) -> RawRecord:
        player = await resolve_player_by_slug(slug, self._source)
        if player is None:
            raise NotFoundError(f"Player not found: {slug}")
        return player

    @staticmethod
    def _player_albums(player: Mapping[str, Any]) -> tuple[PlayerAlbum, ...]:
        albums = []
        for album in nested_albums(player):
            title = _text(album, "title") or ""
            albums.append(PlayerAlbum(id=_int(album, "id"), title=title, slug=to_slug(title), role=_text(album, "role")))
        return tuple(albums)

    async def player_detail(self, slug: str) -> PlayerDetail:
        """
        Build the player profile for a name slug.

        Raises:
            NotFoundError: If no player matches the slug.
        """
        player = await self._resolve_player(slug)
        name = _text(player, "name") or ""
        pictures = normalize_pictures(player.get("pictures"))

        return PlayerDetail(
            id=_int(player, "id"),
            name=name,
            slug=to_slug(name),
            is_core=is_core_player(name),
            role=_text(player, "role"),
            pictures=tuple(pictures),
            picture=primary_picture(pictures),
            bio=extract_bio_from_html(_text(player, "bio")),
            life_dates=format_life_dates(_text(player, "birthdate"), _text(player, "deathdate")),
            website=_text(player, "website"),
            albums=self._player_albums(player),
        )

    async def player_albums(self, slug: str) -> list[PlayerAlbum]:
        """Albums a player appears on, as nested in the player record."""
        player = await self._resolve_player(slug)
        return list(self._player_albums(player))
