"""Charset detection for text samples."""

from __future__ import annotations

import codecs

from charset_normalizer import from_bytes

from blobserve.errors import CharsetDetectionError

_UTF8_BOM = codecs.BOM_UTF8

# Keyed by codecs.lookup().name.
_WHATWG_LABELS = {
    "utf-16-le": "utf-16le",
    "utf-16-be": "utf-16be",
    "mac-roman": "macintosh",
    "mac-cyrillic": "x-mac-cyrillic",
    "cp874": "windows-874",
    "cp932": "shift_jis",
    "shift_jis": "shift_jis",
    "cp949": "euc-kr",
    "cp866": "ibm866",
}


def _is_utf8(data: bytes) -> bool:
    # The sample may cut a multi-byte sequence in half; an incremental
    # decoder accepts a truncated trailing character.
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(data, final=False)
    except UnicodeDecodeError:
        return False
    return True


def _iana_name(encoding: str) -> str:
    """Turn a Python codec name (``cp1252``, ``utf_16_le``) into the label browsers expect."""
    try:
        name = codecs.lookup(encoding).name
    except LookupError:
        name = encoding.lower().replace("_", "-")
    if name in _WHATWG_LABELS:
        return _WHATWG_LABELS[name]
    if name.startswith("cp125"):
        return "windows-" + name[2:]
    if name.startswith("iso8859-"):
        return "iso-8859-" + name[len("iso8859-") :]
    return name.replace("_", "-")


def detect_encoding(data: bytes) -> str:
    """
    Detect the charset of a text sample.

    Valid UTF-8 (with or without BOM, including a truncated final
    character) short-circuits to ``"UTF-8"``. Anything else is handed to
    charset-normalizer.

    Raises:
        CharsetDetectionError: when charset-normalizer finds no match.
    """
    if data.startswith(_UTF8_BOM) or _is_utf8(data):
        return "UTF-8"

    best = from_bytes(data).best()
    if best is None:
        raise CharsetDetectionError(f"no charset matched a {len(data)}-byte sample")
    return _iana_name(best.encoding)
