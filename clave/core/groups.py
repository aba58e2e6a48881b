"""
Editorial album groups for the catalog listing page.

The groups are curated by hand and versioned with the code: changing the table
is a code change, and the same albums may land in different buckets afterwards.

Matching is deliberately loose. Both the album and the group entry are
normalized (upper-case, single spaces, punctuation removed) and an album
matches an entry if artist and title each match either exactly or by
substring in one direction or the other. The two fields do not need to match
at the same tier.

Assignment is first-wins: groups are tried in declared order and entries
within a group in declared order. Albums matching nothing go to bucket 0.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNGROUPED_ID = 0

_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[^\w\s]", re.ASCII)


@dataclass(frozen=True, slots=True)
class GroupEntry:
    """One curated (artist, title) pair."""

    artist: str
    title: str


@dataclass(frozen=True, slots=True)
class AlbumGroup:
    """A curated editorial section of the catalog."""

    id: int
    name: str
    albums: tuple[GroupEntry, ...]


def _group(group_id: int, *albums: tuple[str, str]) -> AlbumGroup:
    return AlbumGroup(
        id=group_id,
        name=f"Group {group_id}",
        albums=tuple(GroupEntry(artist=artist, title=title) for artist, title in albums),
    )


ALBUM_GROUPS: tuple[AlbumGroup, ...] = (
    _group(
        1,
        ("JERRY GONZALEZ", "YA YO ME CURÀ"),
        ("TEO MACERO", "TEO"),
        ("MILTON CARDONA", "BEMBE"),
        ("MILTON CARDONA", "CAMBUCHA (CARMEN)"),
    ),
    _group(
        2,
        ("KIP HANRAHAN", "DRAWN FROM MEMORY (GREATEST HITS, OR WHATEVER... KIP ON CAMPUS)"),
        ("KIP HANRAHAN", "BEAUTIFUL SCARS"),
        ("KIP HANRAHAN", "AT HOME IN ANGER, which could also be called IMPERFECT, Happily"),
    ),
    _group(
        3,
        ("KIP HANRAHAN", "coup de tete"),
        ("KIP HANRAHAN", "DESIRE DEVELOPS AN EDGE"),
        ("KIP HANRAHAN", "VERTICAL'S CURRENCY"),
    ),
    _group(
        4,
        ("KIP HANRAHAN", "A THOUSAND NIGHTS AND A NIGHT (1-RED NIGHTS)"),
        ("KIP HANRAHAN", "A THOUSAND NIGHTS AND A NIGHT (SHADOW NIGHTS -1)"),
        ("KIP HANRAHAN", "A THOUSAND NIGHTS AND A NIGHT (SHADOW NIGHTS 2)"),
    ),
    _group(
        5,
        ("KIP HANRAHAN", "A FEW SHORT NOTES FOR THE END RUN"),
        ("KIP HANRAHAN", "DAYS AND NIGHTS OF BLUE LUCK INVERTED"),
        ("KIP HANRAHAN", "TENDERNESS"),
        ("KIP HANRAHAN", "EXOTICA"),
        ("KIP HANRAHAN", "ALL ROADS ARE MADE OF THE FLESH"),
    ),
    _group(
        6,
        ("KIP HANRAHAN", "original music from the soundtrack to PINERO"),
    ),
    _group(
        7,
        ("ASTOR PIAZZOLLA", "TANGO: ZERO HOUR"),
        ("ASTOR PIAZZOLLA", "THE ROUGH DANCER AND THE CYCLICAL NIGHT (Tango Apasionado)"),
        ("ASTOR PIAZZOLLA", "LA CAMORRA: THE SOLITUDE OF PASSIONATE PROVOCATION"),
        ("SILVANA DELUIGI", "YO!"),
    ),
    _group(
        8,
        ("PAUL HAINES", "DARN IT!"),
        ("PIRI THOMAS", "EVERY CHILD IS BORN A POET"),
    ),
    _group(
        9,
        ("ALFREDO TRIFF", "21 BROKEN MELODIES AT ONCE"),
        ("DEEP RUMBA", "THIS NIGHT BECOMES A RUMBA"),
        ("DEEP RUMBA", "A CALM IN THE FIRE OF DANCES"),
        ("RUMBA PROFUNDA", "ALTA EN LA FIEBRE DE LA RUMBA"),
        ("HORACIO EL NEGRO HERNANDEZ AND ROBBY AMEEN", "ROBBY & NEGRO AT THE THIRD WORLD WAR"),
        ("CONJURE", "MUSIC FOR THE TEXTS OF ISHMAEL REED"),
        ("CONJURE", "CAB CALLOWAY STANDS IN FOR THE MOON"),
        ("CONJURE", "BAD MOUTH"),
    ),
    _group(
        10,
        ("DNA", "A TASTE OF DNA"),
        ("DNA", "I WAS BORN, BUT..."),
        ("AMERICAN CLAVE", "ANTHOLOGY"),
    ),
    _group(
        11,
        ("DZIGA VERTOV", "ENTHUSIASM!"),
    ),
)


def normalize_for_match(text: str | None) -> str:
    """
    Normalize a title or artist for group matching.

    Upper-cases, trims, collapses whitespace, then strips anything that is not
    an ASCII word character or space ("Tango: Zero Hour" -> "TANGO ZERO HOUR").
    """
    if not text:
        return ""
    normalized = text.upper().strip()
    normalized = _WHITESPACE.sub(" ", normalized)
    return _PUNCTUATION.sub("", normalized)


def _field(entity: Any, name: str) -> str:
    if isinstance(entity, Mapping):
        value = entity.get(name)
    else:
        value = getattr(entity, name, None)
    return value if isinstance(value, str) else ""


def entity_artist(entity: Any) -> str:
    """Artist of an album record: `artist`, falling back to `by`."""
    return _field(entity, "artist") or _field(entity, "by")


def _contains_either_way(a: str, b: str) -> bool:
    return a in b or b in a


def matches(entity: Any, entry: GroupEntry) -> bool:
    """
    Check whether an album record matches a curated group entry.

    Exact tier: artist and title both equal after normalization.
    Partial tier: artist and title each contained in the other, in either
    direction. An album with no title never matches.
    """
    album_artist = normalize_for_match(entity_artist(entity))
    album_title = normalize_for_match(_field(entity, "title"))
    if not album_title:
        return False

    group_artist = normalize_for_match(entry.artist)
    group_title = normalize_for_match(entry.title)

    if album_artist == group_artist and album_title == group_title:
        return True

    return _contains_either_way(album_artist, group_artist) and _contains_either_way(album_title, group_title)


def first_matching_group(entity: Any, groups: Iterable[AlbumGroup] = ALBUM_GROUPS) -> AlbumGroup | None:
    """Return the first group (declared order) with an entry matching `entity`."""
    for group in groups:
        for entry in group.albums:
            if matches(entity, entry):
                return group
    return None


def assign_to_groups(
    entities: Iterable[T],
    groups: Iterable[AlbumGroup] = ALBUM_GROUPS,
) -> dict[int, list[T]]:
    """
    Partition albums into editorial groups.

    Returns:
        Mapping of group id to albums in input order. Every declared group
        is present (possibly empty); bucket 0 is added after them when at
        least one album matched no group. Each album appears exactly once.
    """
    groups = tuple(groups)
    grouped: dict[int, list[T]] = {group.id: [] for group in groups}
    ungrouped: list[T] = []

    for entity in entities:
        group = first_matching_group(entity, groups)
        if group is None:
            ungrouped.append(entity)
        else:
            grouped[group.id].append(entity)

    if ungrouped:
        logger.debug("%d albums matched no group", len(ungrouped))
        grouped[UNGROUPED_ID] = ungrouped

    return grouped

