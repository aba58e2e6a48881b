"""
Player roster helpers.

The players page lists the label's core players first, in a fixed editorial
order, followed by everyone else alphabetically. Only core players get a
full profile page.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence, TypeVar

T = TypeVar("T")

# Display priority; matching is case-insensitive
CORE_PLAYER_ORDER: tuple[str, ...] = (
    "Alfredo Triff",
    "Andy Gonzalez",
    "Astor Piazzolla",
    "Charles Neville",
    "Don Pullen",
    "Fernando Saunders",
    'Horacio "El Negro" Hernandez',
    "Ishmael Reed",
    "Jack Bruce",
    "Milton Cardona",
    '"Puntilla" Orlando Rios',
    "Robby Ameen",
    "Silvana DeLuigi",
)

_CORE_INDEX: dict[str, int] = {name.lower(): index for index, name in enumerate(CORE_PLAYER_ORDER)}


def _name(player: Any) -> str:
    if isinstance(player, Mapping):
        value = player.get("name")
    else:
        value = getattr(player, "name", None)
    return value if isinstance(value, str) else ""


def core_player_index(name: str) -> int | None:
    """Priority of a core player, or None for everyone else."""
    return _CORE_INDEX.get(name.lower())


def is_core_player(name: str) -> bool:
    return core_player_index(name) is not None


def filter_players(players: Iterable[T], query: str = "") -> list[T]:
    """Case-insensitive substring filter on player names."""
    needle = query.strip().lower()
    if not needle:
        return list(players)
    return [player for player in players if needle in _name(player).lower()]


def split_roster(players: Iterable[T]) -> tuple[list[T], list[T]]:
    """
    Split players into (core, others).

    Core players are ordered by CORE_PLAYER_ORDER, others by name
    (case-insensitive). Both sorts are stable.
    """
    core: list[T] = []
    others: list[T] = []
    for player in players:
        if is_core_player(_name(player)):
            core.append(player)
        else:
            others.append(player)

    core.sort(key=lambda p: core_player_index(_name(p)) or 0)
    others.sort(key=lambda p: _name(p).lower())
    return core, others


def format_life_dates(birthdate: str | None, deathdate: str | None) -> str | None:
    """Render a birth/death date pair for a profile header."""
    if birthdate and deathdate:
        return f"{birthdate} - {deathdate}"
    if birthdate:
        return f"Born {birthdate}"
    if deathdate:
        return f"Died {deathdate}"
    return None


def nested_albums(player: Mapping[str, Any]) -> Sequence[Mapping[str, Any]]:
    """Albums embedded in a player record by the catalog worker."""
    albums = player.get("albums")
    if not isinstance(albums, list):
        return []
    return [album for album in albums if isinstance(album, Mapping)]
