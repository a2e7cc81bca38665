"""
records.py — Canonical design-attribute data model.

  AttributeRecord  — the structured description of a space. Always fully
                     materialized: every field is a string, "" when unknown.
  DesignHints      — what the user typed / picked in the form.
  StyleOverrides   — the subset a caller may force when regenerating.

Records are frozen. Stages build new records instead of mutating.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _as_text(value: Any) -> str:
    # Anything that is not a string (numbers, lists, null) carries no usable text.
    return value if isinstance(value, str) else ""


class _FrozenStrings(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_to_str(cls, value: Any) -> str:
        return _as_text(value)


# ── AttributeRecord ──────────────────────────────────────────────────────────

class AttributeRecord(_FrozenStrings):
    room_type: str = Field(default="", description="Bathroom, living room, balcony, ...")
    aesthetic_style: str = Field(default="", description="Modern, Scandinavian, boho, ...")
    theme_mood: str = Field(default="", description="Cozy, airy, dramatic, ...")
    color_palette: str = Field(default="", description="Main colors seen or wanted")
    material_preferences: str = Field(default="", description="Woods, metals, stones, tiles, fabrics")
    texture_preferences: str = Field(default="", description="Matte, glossy, linen, velvet, boucle, ...")
    furniture_preferences: str = Field(default="", description="Sofa style, chairs, tables, cabinets, ...")
    decor_preferences: str = Field(default="", description="Plants, mirrors, vases, art, accessories")
    lighting_preferences: str = Field(default="", description="Pendant, sconce, natural light, ...")
    notes: str = Field(default="", description="Special features, patterns, layout hints")
    summary: str = Field(default="", description="Short 1-2 sentence description of the space")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AttributeRecord":
        """Build from camelCase or snake_case keys; unknown keys are dropped."""
        return cls.model_validate(dict(data))

    def to_wire(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)

    def replace(self, **changes: str) -> "AttributeRecord":
        return self.model_validate({**self.model_dump(), **changes})

    def is_empty(self) -> bool:
        return not any(v.strip() for v in self.model_dump().values())


ATTRIBUTE_FIELDS = tuple(AttributeRecord.model_fields)


# ── DesignHints ──────────────────────────────────────────────────────────────

class DesignHints(_FrozenStrings):
    """User-supplied form fields. Design attributes plus project context."""

    room_type: str = ""
    style: str = ""
    color_palette: str = ""
    materials: str = ""
    textures: str = ""
    mood: str = ""
    furniture: str = ""
    decor: str = ""
    lighting: str = ""
    technology: str = ""
    notes: str = Field(default="", alias="imageLinks")   # "Extra notes / links"

    # Project context — passed through, never extracted from the image
    budget: str = ""
    renovation_scope: str = ""
    timeframe: str = ""

    def as_record(self) -> AttributeRecord:
        """The design-attribute subset, keyed the way AttributeRecord names it."""
        return AttributeRecord(
            room_type=self.room_type,
            aesthetic_style=self.style,
            theme_mood=self.mood,
            color_palette=self.color_palette,
            material_preferences=self.materials,
            texture_preferences=self.textures,
            furniture_preferences=self.furniture,
            decor_preferences=self.decor,
            lighting_preferences=self.lighting,
            notes=self.notes,
        )

    def to_wire(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


# ── StyleOverrides ───────────────────────────────────────────────────────────

class StyleOverrides(_FrozenStrings):
    """Regeneration overrides. Empty means "use current"."""

    aesthetic_style: str = ""
    color_palette: str = ""
    theme_mood: str = ""

    @classmethod
    def from_wire(cls, data: Optional[Mapping[str, Any]]) -> "StyleOverrides":
        if not data:
            return cls()
        return cls(
            aesthetic_style=_as_text(data.get("style")),
            color_palette=_as_text(data.get("colorPaletteOverride")),
            theme_mood=_as_text(data.get("moodOverride")),
        )

    def as_record(self) -> AttributeRecord:
        return AttributeRecord(
            aesthetic_style=self.aesthetic_style,
            color_palette=self.color_palette,
            theme_mood=self.theme_mood,
        )

    def is_empty(self) -> bool:
        return not (self.aesthetic_style.strip() or self.color_palette.strip() or self.theme_mood.strip())
