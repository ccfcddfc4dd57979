"""In-memory content-addressed blob store with git-compatible blob ids."""

from __future__ import annotations

import hashlib
from collections.abc import Awaitable, Callable, Iterator
from pathlib import Path

import structlog

from blobserve.errors import BlobNotFoundError
from blobserve.serve.source import ByteSource, BytesSource, FileSource

Opener = Callable[[], Awaitable[ByteSource]]

_logger = structlog.get_logger("blobserve.store")


def git_blob_id(data: bytes) -> str:
    """SHA-1 of the git object encoding ``blob <len>\\0<data>``."""
    h = hashlib.sha1()
    h.update(b"blob %d\x00" % len(data))
    h.update(data)
    return h.hexdigest()


class Blob:
    """An immutable byte object addressed by its content hash."""

    __slots__ = ("_opener", "id", "path", "size")

    def __init__(self, id: str, path: str, size: int, opener: Opener) -> None:
        self.id = id
        self.path = path
        self.size = size
        self._opener = opener

    @classmethod
    def from_bytes(cls, path: str, data: bytes) -> Blob:
        async def _open() -> ByteSource:
            return BytesSource(data)

        return cls(git_blob_id(data), path, len(data), _open)

    @classmethod
    def from_file(cls, path: str, file_path: str | Path) -> Blob:
        """Blob backed by a file on disk. The id is computed by reading the file once."""
        file_path = Path(file_path)
        size = file_path.stat().st_size
        h = hashlib.sha1()
        h.update(b"blob %d\x00" % size)
        with file_path.open("rb") as fh:
            for chunk in iter(lambda: fh.read(64 * 1024), b""):
                h.update(chunk)

        async def _open() -> ByteSource:
            return await FileSource.open(file_path)

        return cls(h.hexdigest(), path, size, _open)

    async def data_async(self) -> ByteSource:
        """Open a fresh source over the blob content. The caller must close it."""
        return await self._opener()

    def __repr__(self) -> str:
        return f"Blob(id={self.id[:12]!r}, path={self.path!r}, size={self.size})"


class BlobStore:
    """Dictionary of blobs keyed by id."""

    def __init__(self) -> None:
        self._blobs: dict[str, Blob] = {}

    def add(self, blob: Blob) -> Blob:
        existing = self._blobs.get(blob.id)
        if existing is not None:
            _logger.debug("blob_dedup", blob_id=blob.id[:12], path=blob.path)
            return existing
        self._blobs[blob.id] = blob
        return blob

    def add_bytes(self, path: str, data: bytes) -> Blob:
        return self.add(Blob.from_bytes(path, data))

    def get(self, blob_id: str) -> Blob:
        try:
            return self._blobs[blob_id]
        except KeyError:
            raise BlobNotFoundError(blob_id) from None

    def __contains__(self, blob_id: object) -> bool:
        return blob_id in self._blobs

    def __iter__(self) -> Iterator[Blob]:
        return iter(self._blobs.values())

    def __len__(self) -> int:
        return len(self._blobs)
