"""
URL slugs for albums and players.

The catalog has no stable slug column, so slugs are derived from display names
and resolved back by scanning the collection. Resolution is tiered:

1. exact slug equality
2. case-insensitive equality (slugs are lowercase already; kept for
   hand-typed URLs)
3. hyphen-insensitive equality ("jackbruce" finds "jack-bruce")

Within a tier the first candidate in input order wins. Two names can collapse
to the same slug; the first one listed upstream is the one that routes.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, Mapping, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Word characters are ASCII only; whitespace is any Unicode space (NBSP included)
_NOT_SLUG_CHARS = re.compile(r"[^A-Za-z0-9_\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def to_slug(text: str | None) -> str:
    """
    Convert a display name to a URL slug.

    "Astor Piazzolla" -> "astor-piazzolla", "DARN IT!" -> "darn-it".
    Idempotent: to_slug(to_slug(x)) == to_slug(x).
    """
    if not text:
        return ""
    slug = text.lower()
    slug = _NOT_SLUG_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def name_field(field: str) -> Callable[[Any], str | None]:
    """Return a getter reading `field` from a mapping record."""

    def getter(record: Any) -> str | None:
        if isinstance(record, Mapping):
            value = record.get(field)
        else:
            value = getattr(record, field, None)
        return value if isinstance(value, str) else None

    return getter


def exact_slug_match(candidate_slug: str, target: str) -> bool:
    return candidate_slug == target


def casefold_slug_match(candidate_slug: str, target: str) -> bool:
    return candidate_slug.lower() == target.lower()


def hyphenless_slug_match(candidate_slug: str, target: str) -> bool:
    return candidate_slug.lower().replace("-", "") == target.lower().replace("-", "")


# Tried in order; the first tier with any match decides.
SLUG_MATCH_TIERS: tuple[Callable[[str, str], bool], ...] = (
    exact_slug_match,
    casefold_slug_match,
    hyphenless_slug_match,
)


def resolve_by_slug(
    candidates: Iterable[T],
    target_slug: str,
    name_of: Callable[[T], str | None] = name_field("name"),
) -> T | None:
    """
    Find the candidate whose name slugifies to `target_slug`.

    Args:
        candidates: Records to search, in upstream order.
        target_slug: Path segment as received (already URL-decoded).
        name_of: Extracts the display name from a candidate. Candidates
            without a name are never matched.

    Returns:
        The first match of the first tier that matches anything, else None.
    """
    slugged: list[tuple[T, str]] = []
    for candidate in candidates:
        name = name_of(candidate)
        if name is None:
            continue
        slugged.append((candidate, to_slug(name)))

    for tier in SLUG_MATCH_TIERS:
        for candidate, candidate_slug in slugged:
            if tier(candidate_slug, target_slug):
                if tier is not exact_slug_match:
                    logger.debug("Slug %r resolved by %s", target_slug, tier.__name__)
                return candidate

    logger.debug("No candidate for slug %r among %d records", target_slug, len(slugged))
    return None
