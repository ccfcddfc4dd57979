"""Header decisions for served content, free of any I/O."""

from __future__ import annotations

from pathlib import PurePosixPath
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from blobserve.sniff.typesniffer import SVG_MIME_TYPE, ContentKind

SVG_CONTENT_SECURITY_POLICY = "default-src 'none'; style-src 'unsafe-inline'; sandbox"

_INLINE_KINDS = frozenset({ContentKind.IMAGE, ContentKind.PDF})

_NAME_SPACES = str.maketrans({c: " " for c in [",", *map(chr, range(0x20)), "\x7f"]})


class ResponsePolicy(BaseModel):
    """Content-Type, disposition and extra headers chosen for one response."""

    model_config = ConfigDict(frozen=True)

    content_type: str | None = None
    """None leaves Content-Type to the transport default."""
    disposition: str | None = None
    extra_headers: dict[str, str] = Field(default_factory=dict)

    def headers(self) -> dict[str, str]:
        """Flatten into the headers to set on the response."""
        out = dict(self.extra_headers)
        if self.content_type is not None:
            out["Content-Type"] = self.content_type
        if self.disposition is not None:
            out["Content-Disposition"] = self.disposition
        return out


def display_name(name: str) -> str:
    """Base name of *name* with commas and control characters replaced by spaces."""
    # Commas inside Content-Disposition filenames break some browsers; control
    # characters are illegal in header values.
    return PurePosixPath(name.translate(_NAME_SPACES)).name or "."


def file_extension(name: str) -> str:
    """Lowercased extension including the dot, or ``""``."""
    idx = name.rfind(".")
    if idx < 0:
        return ""
    return name[idx:].lower()


def treat_as_text(kind: ContentKind, render: bool) -> bool:
    return kind is ContentKind.TEXT or render


def content_disposition(disposition: str, name: str) -> str:
    """
    Build a Content-Disposition value for *name*.

    ASCII names are quoted as-is (with ``\\`` and ``"`` escaped). Other names
    get an ASCII fallback plus an RFC 5987 ``filename*`` parameter.
    """
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    if name.isascii():
        return f'{disposition}; filename="{escaped}"'
    fallback = escaped.encode("ascii", "replace").decode("ascii")
    return f"{disposition}; filename=\"{fallback}\"; filename*=UTF-8''{quote(name, safe='')}"


def decide(
    kind: ContentKind,
    *,
    name: str,
    render: bool = False,
    mapped_mime: str = "",
    svg_enabled: bool = True,
    charset: str = "utf-8",
) -> ResponsePolicy:
    """
    Decide Content-Type, disposition and security headers.

    Args:
        kind: Sniffed classification of the content.
        name: Normalised display name (see :func:`display_name`).
        render: Client forced text rendering.
        mapped_mime: Extension override from the MIME map, ``""`` if none.
        svg_enabled: Whether SVG may be rendered inline.
        charset: Detected charset; only used for text responses.

    Returns:
        ResponsePolicy for the response.
    """
    if treat_as_text(kind, render):
        return ResponsePolicy(
            content_type=f"{mapped_mime or 'text/plain'}; charset={charset.lower()}",
        )

    extra = {"Access-Control-Expose-Headers": "Content-Disposition"}
    content_type = mapped_mime or None

    if kind in _INLINE_KINDS or (kind is ContentKind.SVG and svg_enabled):
        if kind is ContentKind.SVG:
            extra["Content-Security-Policy"] = SVG_CONTENT_SECURITY_POLICY
            extra["X-Content-Type-Options"] = "nosniff"
            content_type = SVG_MIME_TYPE
        return ResponsePolicy(
            content_type=content_type,
            disposition=content_disposition("inline", name),
            extra_headers=extra,
        )

    return ResponsePolicy(
        content_type=content_type,
        disposition=content_disposition("attachment", name),
        extra_headers=extra,
    )
