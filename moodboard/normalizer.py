"""
normalizer.py — Snap free-text attribute values onto the option catalogs.

Matching order for one value:
  1. case-insensitive exact match        → that catalog entry
  2. case-insensitive substring match,
     either direction, in catalog order  → first such entry
  3. nothing matched                     → the value, unchanged

A value is never rejected or blanked; raw text beats losing information.
"""

from __future__ import annotations

from typing import Iterable

from .catalog import BUDGETS, MOODS, PALETTES, ROOM_TYPES, SCOPES, STYLES, TIMEFRAMES
from .records import AttributeRecord, DesignHints


def normalize(value: str, catalog: Iterable[str]) -> str:
    needle = (value or "").strip().lower()
    if not needle:
        return value

    options = list(catalog)
    for option in options:
        if option.lower() == needle:
            return option

    for option in options:
        hay = option.lower()
        if hay in needle or needle in hay:
            return option

    return value


def normalize_record(record: AttributeRecord) -> AttributeRecord:
    """Normalize the four catalog-backed fields of a record."""
    return record.replace(
        room_type=normalize(record.room_type, ROOM_TYPES),
        aesthetic_style=normalize(record.aesthetic_style, STYLES),
        color_palette=normalize(record.color_palette, PALETTES),
        theme_mood=normalize(record.theme_mood, MOODS),
    )


def normalize_hints(hints: DesignHints) -> DesignHints:
    """Normalize every catalog-backed form field, project context included."""
    return hints.model_copy(update={
        "room_type": normalize(hints.room_type, ROOM_TYPES),
        "style": normalize(hints.style, STYLES),
        "color_palette": normalize(hints.color_palette, PALETTES),
        "mood": normalize(hints.mood, MOODS),
        "budget": normalize(hints.budget, BUDGETS),
        "renovation_scope": normalize(hints.renovation_scope, SCOPES),
        "timeframe": normalize(hints.timeframe, TIMEFRAMES),
    })
