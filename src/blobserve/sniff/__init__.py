"""Content classification and charset detection."""

from blobserve.sniff.charset import detect_encoding
from blobserve.sniff.typesniffer import (
    SNIFF_LEN,
    SVG_MIME_TYPE,
    ContentKind,
    SniffedType,
    detect_content_type,
    looks_like_text,
)

__all__ = [
    "SNIFF_LEN",
    "SVG_MIME_TYPE",
    "ContentKind",
    "SniffedType",
    "detect_content_type",
    "detect_encoding",
    "looks_like_text",
]
