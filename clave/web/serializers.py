"""Conversion of core view objects to JSON-ready structures."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import Any


def to_dict(row: Any) -> dict[str, Any]:
    """
    Convert a row (dict or dataclass) to a dictionary.

    Tuples inside dataclasses (tracklists, players, ...) come out as lists.

    Args:
        row: Either a dict or a dataclass instance

    Returns:
        Dictionary representation
    """
    if isinstance(row, dict):
        return row
    if is_dataclass(row) and not isinstance(row, type):
        return _lists(asdict(row))
    raise TypeError(f"Cannot serialize {type(row).__name__}")


def _lists(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _lists(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_lists(item) for item in value]
    return value


def to_list(rows: Any) -> list[dict[str, Any]]:
    return [to_dict(row) for row in rows]
