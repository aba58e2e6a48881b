"""
Decoding of polymorphic catalog fields.

The catalog worker returns BLOB-backed columns inconsistently: the same field
may arrive as a JSON-encoded string, an already decoded list, a bare string,
bytes, or not at all. Every raw value first goes through `classify()`, and
each normalizer is then a single dispatch on the resulting kind.

Malformed data never raises out of this module; it degrades to an empty
container so the page can still render a "none available" state.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Sequence

logger = logging.getLogger(__name__)

UNKNOWN_TRACK_TITLE = "Unknown Track"

# Album fields that may carry the tracklist, in precedence order
TRACKLIST_FIELDS = ("tracklist", "track_list")


class FieldKind(Enum):
    """Shape of a raw field value."""

    EMPTY = "empty"
    JSON_ENCODED = "json_encoded"
    NATIVE_ARRAY = "native_array"
    NATIVE_SCALAR = "native_scalar"


@dataclass(frozen=True, slots=True)
class Field:
    """A classified raw value. `value` is the text for JSON_ENCODED."""

    kind: FieldKind
    value: Any = None


@dataclass(frozen=True, slots=True)
class CanonicalTrack:
    """One tracklist entry, 1-based."""

    position: int
    title: str
    duration: str | None = None


def classify(raw: Any) -> Field:
    """Classify a raw field value into one of the FieldKind variants."""
    if raw is None:
        return Field(FieldKind.EMPTY)

    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Undecodable bytes field (%d bytes)", len(raw))
            return Field(FieldKind.EMPTY)

    if isinstance(raw, str):
        if not raw.strip():
            return Field(FieldKind.EMPTY)
        return Field(FieldKind.JSON_ENCODED, raw)

    if isinstance(raw, (list, tuple)):
        return Field(FieldKind.NATIVE_ARRAY, list(raw))

    return Field(FieldKind.NATIVE_SCALAR, raw)


_UNPARSED = object()


def _parse_json(text: str) -> Any:
    """Parse JSON text, returning the `_UNPARSED` sentinel on failure."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.debug("Field is not valid JSON: %s", e)
        return _UNPARSED


# =============================================================================
# Tracklists
# =============================================================================


def _coerce_position(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 1 else None
    if isinstance(value, float) and value.is_integer():
        return int(value) if value >= 1 else None
    if isinstance(value, str) and value.strip().isdigit():
        position = int(value.strip())
        return position if position >= 1 else None
    return None


def _first_present(item: Mapping[str, Any], *keys: str) -> Any:
    """Nullish-coalesce over keys: first value that is not None."""
    for key in keys:
        value = item.get(key)
        if value is not None:
            return value
    return None


def _track_from_item(item: Any, index: int) -> CanonicalTrack | None:
    default_position = index + 1

    if isinstance(item, str):
        title = item if item.strip() else UNKNOWN_TRACK_TITLE
        return CanonicalTrack(position=default_position, title=title)

    if isinstance(item, Mapping):
        position = _coerce_position(_first_present(item, "number", "position"))
        title = _first_present(item, "title", "name")
        title = str(title).strip() if title is not None else ""
        duration = item.get("duration")
        return CanonicalTrack(
            position=position or default_position,
            title=title or UNKNOWN_TRACK_TITLE,
            duration=str(duration) if duration not in (None, "") else None,
        )

    logger.debug("Skipping tracklist item %d of type %s", default_position, type(item).__name__)
    return None


def _tracks_from_items(items: Sequence[Any]) -> list[CanonicalTrack]:
    tracks: list[CanonicalTrack] = []
    for index, item in enumerate(items):
        track = _track_from_item(item, index)
        if track is not None:
            tracks.append(track)
    return tracks


def normalize_tracklist(raw: Any) -> list[CanonicalTrack]:
    """
    Decode a raw tracklist field.

    Accepts a JSON string, a list of titles, a list of track objects
    (`number`/`position`, `title`/`name`, `duration`), or nothing. Strings
    become tracks numbered by list position.
    """
    field = classify(raw)

    if field.kind is FieldKind.EMPTY:
        return []
    if field.kind is FieldKind.JSON_ENCODED:
        parsed = _parse_json(field.value)
        if parsed is _UNPARSED or isinstance(parsed, str):
            return []
        return normalize_tracklist(parsed)
    if field.kind is FieldKind.NATIVE_ARRAY:
        return _tracks_from_items(field.value)
    # NATIVE_SCALAR
    return []


def album_tracklist(record: Mapping[str, Any]) -> list[CanonicalTrack]:
    """Tracklist of an album record, trying each known field in order."""
    for name in TRACKLIST_FIELDS:
        tracks = normalize_tracklist(record.get(name))
        if tracks:
            return tracks
    return []


# =============================================================================
# Pictures
# =============================================================================


def _picture_strings(items: Sequence[Any]) -> list[str]:
    return [item for item in items if isinstance(item, str) and item.strip()]


def normalize_pictures(raw: Any) -> list[str]:
    """
    Decode a raw pictures field into an ordered list of URLs/paths.

    A JSON array yields its string items, a JSON string yields one item, and
    text that is not JSON at all is taken as a single path.
    """
    field = classify(raw)

    if field.kind is FieldKind.EMPTY:
        return []
    if field.kind is FieldKind.JSON_ENCODED:
        parsed = _parse_json(field.value)
        if parsed is _UNPARSED:
            return [field.value]
        if isinstance(parsed, str):
            return [parsed] if parsed.strip() else []
        if isinstance(parsed, list):
            return _picture_strings(parsed)
        return []
    if field.kind is FieldKind.NATIVE_ARRAY:
        return _picture_strings(field.value)
    # NATIVE_SCALAR
    return []


def primary_picture(pictures: Sequence[str]) -> str | None:
    """The first picture is the primary one."""
    return pictures[0] if pictures else None
