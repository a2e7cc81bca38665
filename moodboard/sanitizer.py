"""
sanitizer.py — Recover the JSON object from a model's free-text reply.

The model is asked for bare JSON but its wrapping is not guaranteed. Accepted,
in order of preference:

  ```json            ```              {"roomType": ...}
  {...}              {...}
  ```                ```

Language-tagged fence, untagged fence, or the raw text itself. Whatever is
left is trimmed to the outermost {...}.
"""

from __future__ import annotations

import json
import logging
import re

from .config import MIN_REPLY_CHARS
from .errors import EmptyResultError, MalformedResponseError, ResponseParseError
from .records import AttributeRecord

logger = logging.getLogger(__name__)

_TAGGED_FENCE_RE = re.compile(r"```[ \t]*[A-Za-z][\w+-]*[ \t]*\r?\n(.*?)```", re.DOTALL)
_PLAIN_FENCE_RE = re.compile(r"```[ \t]*\r?\n?(.*?)```", re.DOTALL)


def ensure_usable(raw_text: object, min_chars: int = MIN_REPLY_CHARS) -> str:
    """Return the reply text, or raise EmptyResultError if it is too short to use."""
    if not isinstance(raw_text, str) or len(raw_text.strip()) < min_chars:
        logger.error(f"Empty or invalid model response: {raw_text!r}")
        raise EmptyResultError()
    return raw_text


def unwrap_fence(raw_text: str) -> str:
    """Strip a markdown code fence if one is present; otherwise return the text."""
    text = raw_text.strip()

    m = _TAGGED_FENCE_RE.search(text)
    if m:
        return m.group(1).strip()

    m = _PLAIN_FENCE_RE.search(text)
    if m:
        return m.group(1).strip()

    # Opening fence without a closing one (truncated reply)
    if text.startswith("```"):
        text = re.sub(r"^```[A-Za-z]*\s*", "", text)
    return text.strip()


def sanitize(raw_text: str) -> str:
    """Locate the JSON object inside a reply and return just that text."""
    text = unwrap_fence(raw_text or "")
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        logger.error(f"No JSON object in model response: {raw_text!r}")
        raise MalformedResponseError(raw_text or "")
    return text[start:end + 1]


def parse(json_text: str) -> AttributeRecord:
    """Decode the located JSON object into a fully-materialized record."""
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as exc:
        logger.error(f"Failed to parse model JSON ({exc}): {json_text!r}")
        raise ResponseParseError(json_text) from exc

    if not isinstance(data, dict):
        logger.error(f"Model JSON is not an object: {json_text!r}")
        raise ResponseParseError(json_text)

    return AttributeRecord.from_mapping(data)


def extract_record(raw_text: str) -> AttributeRecord:
    return parse(sanitize(raw_text))
