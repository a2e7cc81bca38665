"""
synthesizer.py — Render an AttributeRecord into the moodboard image prompt.

The directive is assembled from an ordered list of fragments:

  [OPENING]      dense collage brief
  [ATTRIBUTES]   one line per non-empty field
  [LAYOUT]       composition / collage rules
  [SCENE]        room-type constraint         (only when room type is set)
  [HEADING]      style-name heading           (only when style is set)
  [CHECKLIST]    what the board must include
  [FINISH]       background + overall aesthetic
  [FORBIDDEN]    logos, brand marks, watermarks

A fragment that resolves to None is dropped. Nothing is ever rendered as a
blank or placeholder line, and the same record always yields the same text.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from .records import AttributeRecord


class Directive(str):
    """Final instruction string handed to the image model."""


# (label, field) in listing order
ATTRIBUTE_LABELS: Tuple[Tuple[str, str], ...] = (
    ("Room Type", "room_type"),
    ("Aesthetic Style", "aesthetic_style"),
    ("Theme / Mood", "theme_mood"),
    ("Color Palette", "color_palette"),
    ("Materials", "material_preferences"),
    ("Textures", "texture_preferences"),
    ("Furniture", "furniture_preferences"),
    ("Decor", "decor_preferences"),
    ("Lighting", "lighting_preferences"),
    ("Notes", "notes"),
)

OPENING = (
    "Create a high-resolution interior design moodboard in a dense collage style with "
    "overlapping images, torn paper edges, pinned swatches, taped corners, textured "
    "backgrounds, and no empty space. Use the following extracted design inputs:"
)

LAYOUT_RULES = (
    "Arrange fabric swatches, material tiles, inspiration photos, lighting samples, sketches, "
    "and palette strips in a cohesive, magazine-style moodboard layout. Use soft shadows and "
    "overlapping composition to match high-end interior design collage boards.",
    "Create a tightly packed, high-resolution interior design moodboard with NO empty space "
    "and a fully overlapping collage layout.",
    "Ensure every element (photos, material samples, fabric swatches, color palette strips, "
    "lighting references, decor items, sketches, and annotations) is arranged closely together "
    "with natural overlap.",
    "Use tape pieces, pins, torn-paper edges, soft shadows, and layered textures to achieve an "
    "authentic designer collage aesthetic.",
    "Avoid placing objects separately or floating; instead, make items touch, overlap, or cluster "
    "organically. Fill the entire canvas so there are ZERO blank gaps or unused areas.",
    "The background should be warm, soft, textured paper.",
    "Use: torn paper edges, taped corners, fabric swatches, material tiles, color palette strips, "
    "clear and sharp labels, small caption tags near key items, soft shadows, aesthetic layering, "
    "and editorial layout styling. All text and labels must be high-resolution, **very sharp and "
    "readable**, with solid high-contrast fonts (no cursive scribbles, no faux handwriting, no blur). "
    "Make all text at least medium size so it is legible even when the image is scaled down. "
    "Do NOT display objects isolated on white; always embed them into a collage composition. "
    "Avoid large empty spaces; fill the canvas with a balanced, natural collage.",
)

CHECKLIST = (
    "Include:",
    "- Color palette section",
    "- Fabric swatches section",
    "- 2–4 room inspiration photos",
    "- Material tiles (stone, wood, metal)",
    "- Key furniture elements",
    "- Lighting samples",
    "- Sketch / line drawing element",
    "- Labels or annotations for each key element (colors, fabrics, materials, furniture, "
    "lighting) using neat, consistent, high-contrast typography (simple sans-serif or minimal "
    "serif), not decorative cursive. Text must be **pin-sharp**, not fuzzy or pixelated.",
    "- 2–4 short summary text blocks placed inside the collage (for example, describing the "
    "overall mood, key design goals, or styling notes). These summaries should be only 1–2 short "
    "lines each, with bold, clean, easy-to-read type. Do NOT render these summaries as illegible "
    "or warped text.",
    "- Natural overlapping composition",
)

FINISH = (
    "Background: soft beige, warm off-white, textured paper.",
    "Overall aesthetic: polished, warm, curated, magazine-layout, interior-designer style.",
)

FORBIDDEN = (
    "Do NOT add any logos, brand marks, or watermarks inside the generated image. "
    "Focus purely on the interior design collage.",
    "Match the density, compactness, and overlapping style of high-end interior designer "
    "moodboards. Make the whole composition visually rich, full, cohesive, and intentionally layered.",
)


# ── Fragment predicates ──────────────────────────────────────────────────────

def attribute_line(label: str, value: str) -> Optional[str]:
    """`Label: value`, or None when the value is blank."""
    value = (value or "").strip()
    if not value:
        return None
    return f"{label}: {value}"


def attribute_lines(record: AttributeRecord) -> List[Optional[str]]:
    return [attribute_line(label, getattr(record, name)) for label, name in ATTRIBUTE_LABELS]


def scene_constraint(room_type: str) -> Optional[str]:
    room_type = (room_type or "").strip()
    if not room_type:
        return None
    return (
        f'Room type for this moodboard: "{room_type}". Only show this room type. '
        f'The entire moodboard must clearly depict {room_type.lower()} scenes and elements. '
        "Do NOT show unrelated interior room types like living rooms, dining rooms, or bedrooms "
        "unless they are this room type."
    )


def heading_instruction(style: str) -> Optional[str]:
    style = (style or "").strip()
    if not style:
        return None
    return (
        f'Moodboard Style (heading text on the moodboard): "{style}". Place this style name as a '
        "clear, elegant heading on the moodboard (similar to a magazine title), e.g. top-left or "
        "top-center, integrated with the collage design."
    )


Fragment = Callable[[AttributeRecord], Sequence[Optional[str]]]

FRAGMENTS: Tuple[Fragment, ...] = (
    lambda r: (OPENING,),
    attribute_lines,
    lambda r: LAYOUT_RULES,
    lambda r: (scene_constraint(r.room_type),),
    lambda r: (heading_instruction(r.aesthetic_style),),
    lambda r: CHECKLIST,
    lambda r: FINISH,
    lambda r: FORBIDDEN,
)


def fragments(record: AttributeRecord) -> List[str]:
    """Every line that will appear in the directive, in order."""
    lines: List[str] = []
    for fragment in FRAGMENTS:
        lines.extend(line for line in fragment(record) if line)
    return lines


def synthesize(record: AttributeRecord) -> Directive:
    return Directive("\n".join(fragments(record)))
