"""
config.py — Process configuration, read once at startup.

  GEMINI_API_KEY            required
  GEMINI_TEXT_MODEL         model used for image analysis / summaries
  GEMINI_IMAGE_MODEL        model used for moodboard image generation
  MOODBOARD_TEXT_TIMEOUT    seconds, default 60
  MOODBOARD_IMAGE_TIMEOUT   seconds, default 90

The resulting Settings value is passed into ModelGateway explicitly;
nothing below the CLI reads the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from .errors import ConfigurationError

DEFAULT_TEXT_TIMEOUT = 60.0
DEFAULT_IMAGE_TIMEOUT = 90.0   # image synthesis takes longer
IMAGE_TEMPERATURE = 0.4
MIN_REPLY_CHARS = 10


class CallKind(str, Enum):
    ANALYSIS = "analysis"
    IMAGE = "image"


@dataclass(frozen=True)
class Settings:
    api_key: str
    text_model: Optional[str] = None
    image_model: Optional[str] = None
    text_timeout: float = DEFAULT_TEXT_TIMEOUT
    image_timeout: float = DEFAULT_IMAGE_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        api_key = (env.get("GEMINI_API_KEY") or "").strip()
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not configured.")

        return cls(
            api_key=api_key,
            text_model=(env.get("GEMINI_TEXT_MODEL") or "").strip() or None,
            image_model=(env.get("GEMINI_IMAGE_MODEL") or "").strip() or None,
            text_timeout=_seconds(env, "MOODBOARD_TEXT_TIMEOUT", DEFAULT_TEXT_TIMEOUT),
            image_timeout=_seconds(env, "MOODBOARD_IMAGE_TIMEOUT", DEFAULT_IMAGE_TIMEOUT),
        )

    def model_for(self, kind: CallKind) -> str:
        """Model identifier for a call kind; raises before any traffic if unset."""
        if kind is CallKind.IMAGE:
            if not self.image_model:
                raise ConfigurationError("GEMINI_API_KEY or GEMINI_IMAGE_MODEL is not configured.")
            return self.image_model
        if not self.text_model:
            raise ConfigurationError("GEMINI_API_KEY or GEMINI_TEXT_MODEL is not configured.")
        return self.text_model

    def deadline_for(self, kind: CallKind) -> float:
        return self.image_timeout if kind is CallKind.IMAGE else self.text_timeout


def _seconds(env: Mapping[str, str], name: str, default: float) -> float:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}.")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}.")
    return value
