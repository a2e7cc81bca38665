"""
gateway.py — The single doorway to the Gemini inference service.

One instruction (plus optional inline image) goes out, one reply comes back.
Each call is bounded by a per-kind deadline and failures are classified:

  deadline expired / SDK timeout   → ModelTimeoutError
  service never reached            → ModelConnectionError
  non-success response             → UpstreamError (body kept for logs only)
  anything else the SDK raises     → UpstreamError with the generic message

Exactly one attempt per call. Retrying is the caller's decision.

The reply is decoded into a flat tuple of tagged parts (TextPart or
InlineMediaPart) so that nothing downstream has to poke at the SDK's nested,
mostly-optional response objects.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import threading
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from .config import IMAGE_TEMPERATURE, CallKind, Settings
from .errors import ModelConnectionError, ModelTimeoutError, MoodboardError, UpstreamError
from .media import InlineMedia

logger = logging.getLogger(__name__)


# ── Reply model ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class InlineMediaPart:
    data: bytes
    mime_type: str

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


ReplyPart = Union[TextPart, InlineMediaPart]


@dataclass(frozen=True)
class ModelReply:
    parts: Tuple[ReplyPart, ...] = ()

    @property
    def text(self) -> str:
        """First text part, or "" if the reply carried no text."""
        for part in self.parts:
            if isinstance(part, TextPart):
                return part.text
        return ""

    def first_image(self) -> Optional[InlineMediaPart]:
        for part in self.parts:
            if isinstance(part, InlineMediaPart):
                return part
        return None

    @classmethod
    def from_response(cls, response: Any) -> "ModelReply":
        parts: List[ReplyPart] = []
        for candidate in getattr(response, "candidates", None) or []:
            content = getattr(candidate, "content", None)
            for raw in getattr(content, "parts", None) or []:
                part = _decode_part(raw)
                if part is not None:
                    parts.append(part)
        return cls(parts=tuple(parts))


def _decode_part(raw: Any) -> Optional[ReplyPart]:
    blob = getattr(raw, "inline_data", None)
    if blob is not None:
        data = getattr(blob, "data", None)
        if isinstance(data, str):
            try:
                data = base64.b64decode(data)
            except (binascii.Error, ValueError):
                data = None
        if data:
            return InlineMediaPart(data=bytes(data), mime_type=getattr(blob, "mime_type", None) or "image/png")

    # Thinking models may emit reasoning parts; they are not the answer.
    if getattr(raw, "thought", None):
        return None

    text = getattr(raw, "text", None)
    if isinstance(text, str):
        return TextPart(text=text)
    return None


# ── Gateway ──────────────────────────────────────────────────────────────────

class ModelGateway:
    def __init__(self, settings: Settings, client: Optional[Any] = None) -> None:
        self.settings = settings
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self.settings.api_key)
        return self._client

    def invoke(
        self,
        instruction: str,
        media: Optional[InlineMedia] = None,
        kind: CallKind = CallKind.ANALYSIS,
    ) -> str:
        """Send one instruction and return the reply's text."""
        return self.generate(kind, instruction, media).text

    def generate(
        self,
        kind: CallKind,
        instruction: str,
        media: Optional[InlineMedia] = None,
    ) -> ModelReply:
        model = self.settings.model_for(kind)
        deadline = self.settings.deadline_for(kind)
        contents = _build_contents(instruction, media)
        config = _build_config(kind, deadline)
        client = self.client

        logger.info(
            f"Gemini {kind.value} call → {model} "
            f"(deadline {deadline:.0f}s{', with image' if media else ''})"
        )

        outcome: dict = {}

        def _call() -> None:
            try:
                outcome["response"] = client.models.generate_content(
                    model=model,
                    contents=contents,
                    config=config,
                )
            except Exception as exc:
                outcome["error"] = exc

        # Daemon worker: an abandoned call never holds the process open.
        worker = threading.Thread(target=_call, name=f"gemini-{kind.value}", daemon=True)
        worker.start()
        worker.join(deadline)
        if worker.is_alive():
            logger.error(f"Gemini {kind.value} call exceeded its {deadline:.0f}s deadline")
            raise ModelTimeoutError()

        try:
            if "error" in outcome:
                raise outcome["error"]
            response = outcome["response"]
        except httpx.ConnectTimeout as exc:
            logger.error(f"Gemini {kind.value} connection timeout: {exc}")
            raise ModelTimeoutError(
                "Connection to the AI service timed out. "
                "Please verify network/firewall/VPN settings and try again."
            ) from exc
        except httpx.TimeoutException as exc:
            logger.error(f"Gemini {kind.value} timeout: {exc}")
            raise ModelTimeoutError() from exc
        except genai_errors.APIError as exc:
            body = _error_body(exc)
            logger.error(f"Gemini {kind.value} API error {exc.code}: {body}")
            raise UpstreamError(
                exc.code,
                body,
                f"The AI service returned an error (status {exc.code}).",
            ) from exc
        except (httpx.TransportError, OSError) as exc:
            logger.error(f"Gemini {kind.value} network error: {exc}")
            raise ModelConnectionError() from exc
        except Exception as exc:
            logger.exception(f"Gemini {kind.value} call failed unexpectedly")
            raise UpstreamError(None, str(exc), MoodboardError.default_message) from exc

        reply = ModelReply.from_response(response)
        logger.debug(f"Gemini {kind.value} reply: {len(reply.parts)} part(s)")
        return reply


def _build_contents(instruction: str, media: Optional[InlineMedia]) -> List[types.Part]:
    parts: List[types.Part] = []
    if media is not None:
        parts.append(types.Part.from_bytes(data=media.data, mime_type=media.mime_type))
    parts.append(types.Part.from_text(text=instruction))
    return parts


def _build_config(kind: CallKind, deadline: float) -> types.GenerateContentConfig:
    # The HTTP request itself is bounded by the same per-kind deadline.
    http_options = types.HttpOptions(timeout=int(deadline * 1000))
    if kind is CallKind.IMAGE:
        return types.GenerateContentConfig(
            http_options=http_options,
            response_modalities=["IMAGE"],
            temperature=IMAGE_TEMPERATURE,
        )
    return types.GenerateContentConfig(http_options=http_options)


def _error_body(exc: genai_errors.APIError) -> str:
    details = getattr(exc, "details", None)
    if details is None:
        return str(exc)
    try:
        return json.dumps(details)
    except (TypeError, ValueError):
        return str(details)
