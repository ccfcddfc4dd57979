"""Generic ETag validation for immutable content."""

from __future__ import annotations

from blobserve.serve.writer import ResponseWriter


def _opaque(tag: str) -> str:
    return tag[2:] if tag.startswith("W/") else tag


def etag_matches(if_none_match: str | None, etag: str) -> bool:
    """Return True when an ``If-None-Match`` value lists *etag* (weak comparison)."""
    if not etag or not if_none_match:
        return False
    for item in if_none_match.split(","):
        item = item.strip()
        if item == "*" or _opaque(item) == _opaque(etag):
            return True
    return False


async def handle_etag_cache(if_none_match: str | None, writer: ResponseWriter, etag: str) -> bool:
    """
    Set ``ETag`` and answer ``304 Not Modified`` when the client copy is current.

    Returns:
        True when the response was completed here and the caller must stop.
    """
    if etag:
        writer.set_header("ETag", etag)
    if not etag_matches(if_none_match, etag):
        return False
    writer.set_status(304)
    await writer.finish()
    return True
