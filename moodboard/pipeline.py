"""
pipeline.py — Sequences the stages for each inbound call shape.

  analyze_image     image            → gateway → sanitize → parse          → record
  summarize         hints [+ image]  → gateway → sanitize → parse
                                       → merge(hints as fallback) → normalize → summary + record
  render_moodboard  record [+ overrides] → merge(overrides on top) → synthesize
                                       → gateway (image model) → base64 image

Each call is independent: one outbound request, no shared state.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional, Union

from .config import CallKind
from .errors import InvalidInputError, NoImageProducedError
from .gateway import ModelGateway
from .media import InlineMedia
from .normalizer import normalize_hints, normalize_record
from .prompts import ANALYSIS_PROMPT, summary_instruction
from .records import AttributeRecord, DesignHints, StyleOverrides
from .resolver import merge, pick
from .sanitizer import ensure_usable, extract_record
from .synthesizer import Directive, synthesize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Raw inputs of one inbound call."""
    media: Optional[InlineMedia] = None
    hints: Optional[DesignHints] = None
    record: Optional[AttributeRecord] = None
    overrides: Optional[StyleOverrides] = None


@dataclass(frozen=True)
class SummaryResult:
    summary: str
    record: AttributeRecord
    hints: DesignHints        # the form, refilled from the merged record

    def to_wire(self) -> Dict[str, object]:
        return {
            "summary": self.summary,
            "record": self.record.to_wire(),
            "autoFill": self.hints.to_wire(),
        }


@dataclass(frozen=True)
class MoodboardResult:
    image_base64: str
    mime_type: str
    directive: Directive

    def to_wire(self) -> Dict[str, str]:
        return {"image": self.image_base64}


def build_directive(
    record: AttributeRecord,
    overrides: Optional[StyleOverrides] = None,
) -> Directive:
    """Apply regeneration overrides on top of the record and render the prompt."""
    final = merge(
        record,
        AttributeRecord(),
        overrides.as_record() if overrides else None,
    )
    return synthesize(final)


class MoodboardPipeline:
    def __init__(self, gateway: ModelGateway) -> None:
        self.gateway = gateway

    # ── 1. Image-only extraction ─────────────────────────────────────────────

    def analyze_image(self, media: InlineMedia) -> AttributeRecord:
        if media is None or not media.data:
            raise InvalidInputError("No image file provided.")
        if not media.is_image:
            raise InvalidInputError("File must be an image.")

        t0 = time.monotonic()
        raw = self.gateway.invoke(ANALYSIS_PROMPT, media, kind=CallKind.ANALYSIS)
        record = extract_record(ensure_usable(raw))
        logger.info(f"Image analysis done in {time.monotonic() - t0:.1f}s")
        return record

    # ── 2. Combined summary ──────────────────────────────────────────────────

    def summarize(self, hints: DesignHints, media: Optional[InlineMedia] = None) -> SummaryResult:
        if media is not None and not media.is_image:
            raise InvalidInputError("File must be an image.")

        t0 = time.monotonic()
        raw = self.gateway.invoke(summary_instruction(hints), media, kind=CallKind.ANALYSIS)
        extracted = extract_record(ensure_usable(raw))

        record = normalize_record(merge(extracted, hints.as_record()))
        summary = pick(extracted.summary, hints.mood)
        record = record.replace(summary=summary)

        refilled = normalize_hints(hints.model_copy(update={
            "room_type": record.room_type,
            "style": record.aesthetic_style,
            "color_palette": record.color_palette,
            "materials": record.material_preferences,
            "textures": record.texture_preferences,
            "mood": record.theme_mood,
            "furniture": record.furniture_preferences,
            "decor": record.decor_preferences,
            "lighting": record.lighting_preferences,
            "notes": record.notes,
        }))

        logger.info(f"Summary done in {time.monotonic() - t0:.1f}s")
        return SummaryResult(summary=summary, record=record, hints=refilled)

    # ── 3. Moodboard synthesis / regeneration ────────────────────────────────

    def render_moodboard(
        self,
        record: AttributeRecord,
        overrides: Optional[StyleOverrides] = None,
    ) -> MoodboardResult:
        directive = build_directive(record, overrides)

        t0 = time.monotonic()
        reply = self.gateway.generate(CallKind.IMAGE, directive)
        image = reply.first_image()

        if image is None:
            if reply.text.strip():
                logger.error(f"Model returned text instead of image: {reply.text!r}")
                raise NoImageProducedError(
                    reply.text,
                    "The image generation model returned text instead of an image. "
                    "Please check your GEMINI_IMAGE_MODEL configuration. The model may not "
                    "support image generation or may require different parameters.",
                )
            logger.error(f"No inline image in reply ({len(reply.parts)} part(s))")
            raise NoImageProducedError()

        logger.info(
            f"Moodboard generated in {time.monotonic() - t0:.1f}s "
            f"({len(image.data) // 1024} KB {image.mime_type})"
        )
        return MoodboardResult(
            image_base64=image.to_base64(),
            mime_type=image.mime_type,
            directive=directive,
        )

    # ── Dispatch on a request bundle ─────────────────────────────────────────

    def run(self, context: RequestContext) -> Union[AttributeRecord, SummaryResult, MoodboardResult]:
        """Pick the call shape from what the request carries."""
        if context.record is not None:
            return self.render_moodboard(context.record, context.overrides)
        if context.hints is not None:
            return self.summarize(context.hints, context.media)
        if context.media is not None:
            return self.analyze_image(context.media)
        raise InvalidInputError("Nothing to process: provide an image, hints, or a record.")
