"""Parsing of single ``bytes=start-end`` Range headers."""

from __future__ import annotations

from blobserve.errors import MalformedRangeError
from blobserve.models.request import RangeSpec

_UNIT_PREFIX = "bytes="


def _parse_bound(raw: str) -> int:
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        raise ValueError(raw)
    return int(raw)


def parse_range(header: str, size: int) -> RangeSpec:
    """
    Parse a Range header against content of *size* bytes.

    Only a single ``bytes=<start>-[<end>]`` range is accepted. A missing end
    means "to the end of the content"; an end past the content is clamped to
    ``size - 1``.

    Raises:
        MalformedRangeError: for any other unit or form (multi-range, suffix
            ``bytes=-N``), non-numeric bounds, ``end < start``, or a start
            at or beyond the end of the content.
    """
    value = header.strip()
    if not value.startswith(_UNIT_PREFIX) or "," in value:
        raise MalformedRangeError(header, size)

    first, sep, last = value[len(_UNIT_PREFIX) :].partition("-")
    if not sep:
        raise MalformedRangeError(header, size)

    try:
        start = _parse_bound(first)
        end = size - 1 if not last.strip() else min(_parse_bound(last), size - 1)
    except ValueError:
        raise MalformedRangeError(header, size) from None

    if end - start + 1 <= 0:
        raise MalformedRangeError(header, size)
    return RangeSpec(start=start, end=end)
