"""Exception hierarchy for blobserve."""

from __future__ import annotations


class BlobServeError(Exception):
    """Base class for blobserve errors."""


# ── Request errors ─────────────────────────────────────────────────────────────


class MalformedRangeError(BlobServeError):
    """Raised when a Range header cannot be parsed or cannot be satisfied."""

    def __init__(self, header: str, size: int) -> None:
        super().__init__(f"invalid range header: {header!r}")
        self.header = header
        self.size = size


# ── I/O errors ─────────────────────────────────────────────────────────────────


class SourceReadError(BlobServeError):
    """Raised when reading from the byte source fails."""


class WriteError(BlobServeError):
    """Raised when the response sink rejects a write (usually a gone client)."""


class HeadersCommittedError(BlobServeError):
    """Raised when headers are changed after the first body byte was sent."""


# ── Collaborator errors ────────────────────────────────────────────────────────


class CharsetDetectionError(BlobServeError):
    """Raised when no charset can be determined for a text sample."""


class BlobNotFoundError(BlobServeError):
    """Raised when a blob id does not exist in the store."""

    def __init__(self, blob_id: str) -> None:
        super().__init__(f"Blob not found: {blob_id!r}")
        self.blob_id = blob_id
