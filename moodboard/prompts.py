"""
prompts.py — Instructions sent to the text model for attribute extraction.
"""

from __future__ import annotations

from typing import List

from .records import DesignHints

# ── Image-only analysis ──────────────────────────────────────────────────────

ANALYSIS_PROMPT = """\
You are an expert interior designer and visual interpreter. Analyze the user's uploaded reference image in extreme detail. Extract room type, interior style, mood, color palette, materials, textures, furniture elements, decor items, and lighting style. Then output ONLY the following JSON:

{
  "roomType": "",
  "aestheticStyle": "",
  "themeMood": "",
  "colorPalette": "",
  "materialPreferences": "",
  "texturePreferences": "",
  "furniturePreferences": "",
  "decorPreferences": "",
  "lightingPreferences": "",
  "notes": ""
}

Ensure the response always contains valid JSON. Do not add explanations or comments. Only output the JSON object itself."""


# ── Combined image + form summary ────────────────────────────────────────────

SUMMARY_PROMPT = """\
You are an expert interior designer and visual interpreter. Analyze the user's uploaded reference image in extreme detail. You will also receive optional user-provided text fields (room type, style, etc.). Your job is to combine the IMAGE and TEXT and convert everything into structured form data.

Extract the following attributes from the image (using the user text only as a hint, but never contradicting what you clearly see):

- Room type (bathroom, living room, bedroom, dining room, office, kitchen, etc.)
- Aesthetic style (modern, contemporary, Scandinavian, minimalist, luxury, industrial, boho, coastal, farmhouse, transitional, etc.)
- Theme or mood (cozy, airy, dramatic, calm, warm, bold, elegant, natural, etc.)
- Color palette (list the main colors seen)
- Material preferences (wood type, metals, stones, tiles, upholstery, fabrics)
- Texture preferences (matte, glossy, rough, linen, velvet, boucle, etc.)
- Furniture preferences (sofa style, chair type, tables, cabinets, bathtub style, etc.)
- Decor preferences (plants, mirrors, lamps, vases, art, accessories)
- Lighting style (pendant, wall sconce, natural light, warm lighting, etc.)
- Additional notes (special features, patterns, layout hints)

If no image is attached, derive the attributes from the text fields alone.

Return ONLY a single JSON object with this exact shape and property names:
{
  "summary": "Short 1-2 sentence description of the overall design and feeling of the space.",
  "roomType": "string",
  "aestheticStyle": "string",
  "themeMood": "string",
  "colorPalette": "string",
  "materialPreferences": "string",
  "texturePreferences": "string",
  "furniturePreferences": "string",
  "decorPreferences": "string",
  "lightingPreferences": "string",
  "notes": "any extra observations, constraints, or suggestions from the image and text"
}

Do not add explanations or comments. Only output the JSON object itself."""


def hint_context(hints: DesignHints) -> str:
    """Render the user's form fields as the hint block under the schema prompt."""
    lines: List[str] = [
        "User-provided fields (these are hints, may be refined by image analysis):",
        f"Room type: {hints.room_type}",
        f"Style: {hints.style}",
        f"Color palette: {hints.color_palette}",
        f"Materials: {hints.materials}",
        f"Textures: {hints.textures}",
        f"Mood: {hints.mood}",
        f"Furniture needs: {hints.furniture}",
        f"Decor: {hints.decor}",
        f"Lighting: {hints.lighting}",
        f"Tech/Smart features: {hints.technology}",
        f"Budget: {hints.budget}",
        f"Scope: {hints.renovation_scope}",
        f"Timeframe: {hints.timeframe}",
        f"Extra notes/Links: {hints.notes}",
    ]
    return "\n".join(lines)


def summary_instruction(hints: DesignHints) -> str:
    return f"{SUMMARY_PROMPT}\n\n{hint_context(hints)}"
