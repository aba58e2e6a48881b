"""
Catalog numbers and cover-art URLs.

Cover scans live in the asset bucket under a flat naming convention:

    {catno}_{position}_cropped.jpg

where `catno` is a 4-digit key starting with "10" (AMCL 1004 -> 1004,
SJR LP36 -> 1036) and `position` is one of front, back, inside&back, 1, 2, ...

Catalog strings in the database are free-form, so the key is derived from
their digit runs. URLs are built without checking that the object exists;
the presentation layer handles missing images.
"""

from __future__ import annotations

import logging
import re

from clave.config import get_settings

logger = logging.getLogger(__name__)

CATNO_PREFIX = "10"
INSIDE_BACK_POSITION = "inside&back"

STANDARD_COVER_POSITIONS: tuple[str, ...] = (
    "front",
    "back",
    INSIDE_BACK_POSITION,
    "1",
    "2",
    "3",
    "4",
    "5",
    "6",
)

_DIGIT_RUNS = re.compile(r"[0-9]+")
_WHITESPACE = re.compile(r"\s+")


def _pick_digit_run(runs: list[str]) -> str:
    """
    Choose the run to build a key from when no 10xx run exists.

    The first 2-3 digit run wins outright; otherwise the longest run
    (earliest among equals).
    """
    best = runs[0]
    for run in runs:
        if 2 <= len(run) <= 3:
            return run
        if len(run) > len(best):
            best = run
    return best


def extract_canonical_catno(raw: str | None) -> str | None:
    """
    Derive the asset key from a free-form catalog number.

    Examples:
        "AMCL 1004"          -> "1004"
        "AMCL 1009LP/1008EP" -> "1009"
        "SJR LP36"           -> "1036"
        "36"                 -> "1036"
        "no digits here"     -> None
    """
    if not raw:
        return None

    runs = _DIGIT_RUNS.findall(raw)
    if not runs:
        return None

    for run in runs:
        if len(run) == 4 and run.startswith(CATNO_PREFIX):
            return run

    run = _pick_digit_run(runs)
    if len(run) == 4:
        return run
    return f"{CATNO_PREFIX}{run.zfill(2)}"


def _safe_position(position: str) -> str:
    # inside&back is stored with the ampersand in the bucket
    if position == INSIDE_BACK_POSITION:
        return position
    return _WHITESPACE.sub("", position)


def build_cover_url(catalog_raw: str | None, position: str, base_url: str | None = None) -> str:
    """
    Build the cover-art URL for a catalog number and position.

    Falls back to the raw catalog string (whitespace removed) when no key can
    be derived; such URLs are a best guess and may not resolve.

    Args:
        catalog_raw: Catalog number as stored on the album (e.g. "AMCL 1004").
        position: Cover position (front, back, inside&back, 1, 2, ...).
        base_url: Bucket base URL. Defaults to the configured asset base URL.
    """
    if base_url is None:
        base_url = get_settings().asset_base_url
    base_url = base_url.rstrip("/")
    safe_position = _safe_position(position)

    catno = extract_canonical_catno(catalog_raw)
    if catno is None:
        logger.warning("Could not extract numeric catalog number from %r", catalog_raw)
        catno = _WHITESPACE.sub("", catalog_raw or "")

    url = f"{base_url}/{catno}_{safe_position}_cropped.jpg"
    logger.debug("Cover URL for %r/%r: %s", catalog_raw, position, url)
    return url


def all_cover_urls(catalog_raw: str | None, base_url: str | None = None) -> list[str]:
    """URLs for every standard cover position, in display order."""
    return [build_cover_url(catalog_raw, position, base_url) for position in STANDARD_COVER_POSITIONS]


def front_cover_url(catalog_raw: str | None, base_url: str | None = None) -> str:
    return build_cover_url(catalog_raw, "front", base_url)
