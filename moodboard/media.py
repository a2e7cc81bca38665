"""
media.py — Inline binary media sent alongside an instruction.

Uploaded images arrive either as a file on disk or as a
``data:image/...;base64,...`` URL, as a browser form sends them. Both end up as an
InlineMedia value carrying the raw bytes and the declared media type.
"""

from __future__ import annotations

import base64
import binascii
import io
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from .errors import InvalidInputError

IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".webp", ".gif"}

_DATA_URL_RE = re.compile(r"^data:(image/[a-zA-Z0-9+.-]+);base64,(.+)$", re.DOTALL)

# Pillow format name → MIME type
_FORMAT_MIME = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "HEIF": "image/heic",
}


@dataclass(frozen=True)
class InlineMedia:
    data: bytes
    mime_type: str

    @property
    def is_image(self) -> bool:
        return self.mime_type.lower().startswith("image/")

    @classmethod
    def from_data_url(cls, url: str) -> Optional["InlineMedia"]:
        """Decode a base64 image data URL; returns None when it is not one.

        A data URL whose payload is not valid base64 is an InvalidInputError.
        """
        if not url:
            return None
        m = _DATA_URL_RE.match(url.strip())
        if not m:
            return None
        payload = re.sub(r"\s+", "", m.group(2))
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidInputError("Image data URL is not valid base64.") from exc
        if not data:
            raise InvalidInputError("Image data URL is empty.")
        return cls(data=data, mime_type=m.group(1))

    @classmethod
    def load(cls, source: str) -> "InlineMedia":
        """From a ``data:image/...;base64,`` URL or, failing that, a file path."""
        media = cls.from_data_url(source)
        return media if media is not None else cls.from_path(Path(source))

    @classmethod
    def from_path(cls, path: Path) -> "InlineMedia":
        """Read an image file and declare its type from the actual content."""
        path = Path(path)
        if not path.is_file():
            raise InvalidInputError(f"Image file not found: {path}")
        data = path.read_bytes()
        return cls(data=data, mime_type=sniff_mime_type(data, fallback_name=path.name))


def sniff_mime_type(data: bytes, fallback_name: str = "") -> str:
    """MIME type from image content (Pillow), falling back to the extension."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = (img.format or "").upper()
    except (UnidentifiedImageError, OSError):
        fmt = ""

    if fmt in _FORMAT_MIME:
        return _FORMAT_MIME[fmt]
    if fmt:
        return f"image/{fmt.lower()}"

    ext = Path(fallback_name).suffix.lower().lstrip(".")
    if f".{ext}" in IMAGE_EXTS:
        return f"image/{'jpeg' if ext in ('jpg', 'jpeg') else ext}"
    return "application/octet-stream"


def suffix_for(mime_type: str) -> str:
    """File suffix for an image MIME type, ``.png`` when unknown."""
    subtype = mime_type.lower().partition("/")[2]
    if subtype == "jpeg":
        return ".jpg"
    if f".{subtype}" in IMAGE_EXTS:
        return f".{subtype}"
    return ".png"
