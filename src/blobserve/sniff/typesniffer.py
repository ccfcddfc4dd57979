"""Content type sniffing from the leading bytes of a blob."""

from __future__ import annotations

import re
from enum import StrEnum

import magic
import structlog
from pydantic import BaseModel, ConfigDict

SNIFF_LEN = 1024
"""Number of leading bytes inspected when classifying content."""

SVG_MIME_TYPE = "image/svg+xml"

_logger = structlog.get_logger("blobserve.sniff")

# An SVG document may start with comments and an SVG doctype before the root tag.
_SVG_TAG = re.compile(
    rb"(?si)\A\s*(?:(<!--.*?-->|<!DOCTYPE\s+svg([\s:]+.*?>|>))\s*)*<svg[\s>/]"
)
_SVG_TAG_IN_XML = re.compile(
    rb"(?si)\A<\?xml\b.*?\?>\s*(?:(<!--.*?-->|<!DOCTYPE\s+svg([\s:]+.*?>|>))\s*)*<svg[\s>/]"
)

# libmagic reports these for content a browser happily shows as text.
_TEXTUAL_APPLICATION_TYPES = frozenset(
    {
        "application/json",
        "application/javascript",
        "application/x-javascript",
        "application/xml",
        "application/x-empty",
        "application/x-wine-extension-ini",
        "application/x-ndjson",
    }
)

# Control bytes that never occur in text (tab, LF, FF, CR and ESC are allowed).
_BINARY_BYTES = bytes([*range(0x00, 0x09), 0x0B, *range(0x0E, 0x1B), *range(0x1C, 0x20)])

_UTF16_BOMS = (b"\xfe\xff", b"\xff\xfe")


class ContentKind(StrEnum):
    """Coarse classification that drives the response policy."""

    TEXT = "text"
    IMAGE = "image"
    PDF = "pdf"
    SVG = "svg"
    BINARY = "binary"


class SniffedType(BaseModel):
    """MIME type detected from a content sample."""

    model_config = ConfigDict(frozen=True)

    content_type: str

    @property
    def is_text(self) -> bool:
        return "text/" in self.content_type

    @property
    def is_image(self) -> bool:
        return "image/" in self.content_type

    @property
    def is_svg(self) -> bool:
        return SVG_MIME_TYPE in self.content_type

    @property
    def is_pdf(self) -> bool:
        return "application/pdf" in self.content_type

    @property
    def kind(self) -> ContentKind:
        if self.is_svg:
            return ContentKind.SVG
        if self.is_image:
            return ContentKind.IMAGE
        if self.is_pdf:
            return ContentKind.PDF
        if self.is_text:
            return ContentKind.TEXT
        return ContentKind.BINARY


def looks_like_text(data: bytes) -> bool:
    """Return True when *data* contains no bytes that are illegal in text."""
    if data.startswith(_UTF16_BOMS):
        return True
    return len(data.translate(None, _BINARY_BYTES)) == len(data)


def detect_content_type(data: bytes) -> SniffedType:
    """
    Classify a content sample.

    Only the first :data:`SNIFF_LEN` bytes are inspected. libmagic supplies
    the signature-based answer; generic results are refined with a text
    heuristic, and text or XML that opens with an ``<svg`` root is promoted
    to ``image/svg+xml``.

    Args:
        data: Leading bytes of the content.

    Returns:
        SniffedType. Empty input yields ``"unknown"`` (treated as binary).
    """
    if not data:
        return SniffedType(content_type="unknown")

    sample = data[:SNIFF_LEN]
    try:
        mime = magic.from_buffer(sample, mime=True)
    except magic.MagicException as exc:
        _logger.warning("magic_detection_failed", error=str(exc))
        mime = "application/octet-stream"

    if mime == "application/octet-stream" or mime in _TEXTUAL_APPLICATION_TYPES:
        mime = "text/plain" if looks_like_text(sample) else "application/octet-stream"

    if mime != SVG_MIME_TYPE and ("text/" in mime or mime.endswith("xml")):
        if _SVG_TAG.match(sample) or _SVG_TAG_IN_XML.match(sample):
            mime = SVG_MIME_TYPE

    return SniffedType(content_type=mime)
