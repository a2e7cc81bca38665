"""
errors.py — Failure taxonomy for the moodboard pipeline.

Every stage failure is raised as exactly one of these classes. Each carries an
HTTP-like ``status`` and a ``message`` that is safe to show to the caller.
Diagnostic payloads (upstream bodies, raw model replies) live on the exception
for logging only and are never part of ``message``.
"""

from __future__ import annotations

from typing import Optional


class MoodboardError(Exception):
    """Base class for every classified pipeline failure."""

    status: int = 500
    default_message: str = "Unexpected error while processing the request. Please try again."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_wire(self) -> dict:
        return {"error": self.message}


class ConfigurationError(MoodboardError):
    """Missing credentials or model identifiers. No call is attempted."""

    status = 500
    default_message = "GEMINI_API_KEY or the model identifier is not configured."


class InvalidInputError(MoodboardError):
    status = 400
    default_message = "The request input is invalid."


class ModelTimeoutError(MoodboardError):
    """The call to the inference service exceeded its deadline."""

    status = 504
    default_message = (
        "Request to the AI model timed out. "
        "Please check your internet connection and try again."
    )


class ModelConnectionError(MoodboardError):
    """The inference service could not be reached at all."""

    status = 502
    default_message = "Network error while contacting the AI service."


class UpstreamError(MoodboardError):
    """Non-success response from the inference service."""

    status = 500
    default_message = "The AI service rejected the request."

    def __init__(
        self,
        upstream_status: Optional[int],
        body: str = "",
        message: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status
        self.body = body


class MalformedResponseError(MoodboardError):
    """No JSON object could be located in the model reply."""

    status = 502
    default_message = (
        "The AI model returned an unexpected format. "
        "Please try again or update the model configuration."
    )

    def __init__(self, raw_text: str = "", message: Optional[str] = None) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class ResponseParseError(MoodboardError):
    """A JSON object was located but is not valid JSON."""

    status = 502
    default_message = (
        "The AI model returned an unexpected format. "
        "Please try again or update the model configuration."
    )

    def __init__(self, json_text: str = "", message: Optional[str] = None) -> None:
        super().__init__(message)
        self.json_text = json_text


class EmptyResultError(MoodboardError):
    """Reply text missing or shorter than the minimum usable length."""

    status = 502
    default_message = "The AI model did not return a valid analysis. Please try again."


class NoImageProducedError(MoodboardError):
    """The image model replied, but no part carried image data."""

    status = 500
    default_message = "No image data returned from model."

    def __init__(self, text_reply: str = "", message: Optional[str] = None) -> None:
        super().__init__(message)
        self.text_reply = text_reply
