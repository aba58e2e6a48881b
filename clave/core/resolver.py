"""
Entity resolution over raw catalog records.

Two jobs:
- turn a path token (numeric id or title slug) into an album record
- collapse album-page junction rows (one row per player per song) into one
  appearance per player

No network code lives here; the data source is passed in and only needs to
satisfy the small protocols below, so everything can be tested with
in-memory fixtures.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Protocol

from clave.core.fields import CanonicalTrack, normalize_pictures, primary_picture
from clave.core.slugs import name_field, resolve_by_slug

logger = logging.getLogger(__name__)

RawRecord = dict[str, Any]

_ALBUM_ID = re.compile(r"[0-9]+")


class AlbumSource(Protocol):
    async def fetch_albums(self) -> list[RawRecord]: ...

    async def fetch_album_by_id(self, album_id: int) -> RawRecord | None: ...


class PlayerSource(Protocol):
    async def fetch_players(self) -> list[RawRecord]: ...


@dataclass(frozen=True, slots=True)
class PlayerAppearance:
    """A player on an album, merged across all of their junction rows."""

    id: int | None
    name: str
    role: str | None = None
    picture: str | None = None


def parse_album_id(token: str) -> int | None:
    """
    Parse a path token as an album id.

    The whole token must be digits: "21-broken-melodies-at-once" is a slug,
    not album 21.
    """
    token = token.strip()
    if _ALBUM_ID.fullmatch(token):
        return int(token)
    return None


def _record_id(record: Mapping[str, Any]) -> int | None:
    value = record.get("id")
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _ALBUM_ID.fullmatch(value.strip()):
        return int(value.strip())
    return None


async def resolve_album_by_slug_or_id(token: str, source: AlbumSource) -> RawRecord | None:
    """
    Resolve an album path token to the full album record.

    Numeric tokens are fetched by id. Anything else is matched against the
    slugs of all album titles, and the match is then fetched by id; the two
    calls are sequential. Data source errors propagate.

    Returns:
        The album record, or None if nothing matches.
    """
    album_id = parse_album_id(token)
    if album_id is not None:
        return await source.fetch_album_by_id(album_id)

    albums = await source.fetch_albums()
    matched = resolve_by_slug(albums, token, name_of=name_field("title"))
    if matched is None:
        logger.info("Album not found for slug %r (%d albums searched)", token, len(albums))
        return None

    matched_id = _record_id(matched)
    if matched_id is None:
        logger.warning("Album %r matched slug %r but has no id", matched.get("title"), token)
        return None

    return await source.fetch_album_by_id(matched_id)


async def resolve_player_by_slug(slug: str, source: PlayerSource) -> RawRecord | None:
    """Resolve a player path segment to the player record, or None."""
    players = await source.fetch_players()
    player = resolve_by_slug(players, slug, name_of=name_field("name"))
    if player is None:
        logger.info("Player not found for slug %r", slug)
    return player


def _player_id(row: Mapping[str, Any]) -> int | None:
    # album_page rows carry the player id as `id`; player_songs rows as `player_id`
    if row.get("player_id") is not None:
        return _record_id({"id": row["player_id"]})
    return _record_id(row)


def _appearance_key(row: Mapping[str, Any]) -> tuple[str, Any] | None:
    player_id = _player_id(row)
    if player_id is not None:
        return ("id", player_id)
    name = row.get("name")
    if isinstance(name, str) and name:
        return ("name", name)
    return None


def merge_player_appearances(rows: Iterable[Mapping[str, Any]]) -> list[PlayerAppearance]:
    """
    Merge junction rows into one appearance per player.

    Rows are grouped by player id, or by raw name for rows without an id.
    Groups keep first-seen order. Within a group the first non-empty role and
    the first primary picture win; later rows only fill values that are
    still unset.
    """
    merged: dict[tuple[str, Any], PlayerAppearance] = {}

    for row in rows:
        key = _appearance_key(row)
        if key is None:
            logger.debug("Skipping junction row without player id or name")
            continue

        name = row.get("name") if isinstance(row.get("name"), str) else ""
        role = str(row["role"]) if row.get("role") else None
        picture = primary_picture(normalize_pictures(row.get("pictures")))

        current = merged.get(key)
        if current is None:
            merged[key] = PlayerAppearance(
                id=key[1] if key[0] == "id" else None,
                name=name,
                role=role,
                picture=picture,
            )
            continue

        merged[key] = replace(
            current,
            name=current.name or name,
            role=current.role if current.role is not None else role,
            picture=current.picture if current.picture is not None else picture,
        )

    return list(merged.values())


def tracklist_from_song_names(rows: Iterable[Mapping[str, Any]]) -> list[CanonicalTrack]:
    """Build a tracklist from the distinct `song_name` values of junction rows."""
    seen: dict[str, None] = {}
    for row in rows:
        song = row.get("song_name")
        if isinstance(song, str) and song.strip():
            seen.setdefault(song, None)
    return [CanonicalTrack(position=index, title=title) for index, title in enumerate(seen, start=1)]
