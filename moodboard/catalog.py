"""
catalog.py — Canonical option vocabularies shared with the form UI.

These lists are used to snap free text onto a known option when a reasonable
match exists. They never reject a value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class OptionCatalog:
    name: str
    options: Tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        return iter(self.options)


ROOM_TYPES = OptionCatalog("RoomType", (
    "Living room",
    "Bedroom",
    "Kitchen",
    "Dining",
    "Bathroom",
    "Kids room",
    "Home office / Study",
    "Balcony / Outdoor",
    "Foyer",
    "Walk-in wardrobe",
))

STYLES = OptionCatalog("Style", (
    "Modern / Contemporary",
    "Minimalist",
    "Scandinavian",
    "Boho",
    "Industrial",
    "Japandi",
    "Luxury",
    "Rustic",
    "Traditional / Indian",
    "Mediterranean",
    "Art Deco",
    "Eclectic",
    "Farmhouse",
))

MOODS = OptionCatalog("Mood", (
    "Cozy",
    "Calm",
    "Elegant",
    "Vibrant",
    "Earthy",
    "Airy",
    "Bold",
    "Sophisticated",
    "Minimal",
    "Playful",
))

PALETTES = OptionCatalog("Palette", (
    "Warm neutrals (beige, sand, cream)",
    "Cool neutrals (grey, white, charcoal)",
    "Earthy tones (olive, terracotta, rust)",
    "Soft pastels (blush, sage, powder blue)",
    "Monochrome (black, white, greys)",
    "Bold accents (navy, emerald, amber)",
    "Muted jewel tones",
    "Soft coastal (seafoam, sand, white)",
    "High contrast (dark wood + light walls)",
    "Colorful mixed palette (playful, multi-color)",
))

# Project context — only shown in the form, never extracted from images
BUDGETS = OptionCatalog("Budget", ("Low (affordable)", "Medium", "Premium", "Luxury"))
SCOPES = OptionCatalog("Scope", ("Full makeover", "Partial upgrade", "Furnishing-only"))
TIMEFRAMES = OptionCatalog("Timeframe", ("Urgent", "Flexible", "Phased execution"))
