"""
resolver.py — Merge extracted, hinted and overridden attribute values.

Per field, highest precedence first:

  non-empty override  →  non-empty extracted  →  non-empty user hint  →  ""

Extraction wins once it produced something, but an explicit user hint is
never erased when extraction came back empty for that field.
"""

from __future__ import annotations

from typing import Optional

from .records import ATTRIBUTE_FIELDS, AttributeRecord


def pick(*candidates: Optional[str]) -> str:
    """First candidate with visible text, stripped; "" when none has any."""
    for value in candidates:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def merge(
    extracted: AttributeRecord,
    hints: AttributeRecord,
    overrides: Optional[AttributeRecord] = None,
) -> AttributeRecord:
    overrides = overrides or AttributeRecord()
    return AttributeRecord(**{
        name: pick(
            getattr(overrides, name),
            getattr(extracted, name),
            getattr(hints, name),
        )
        for name in ATTRIBUTE_FIELDS
    })
