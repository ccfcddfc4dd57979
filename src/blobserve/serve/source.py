"""
Async byte sources that content is streamed from.

Every source implements the same small protocol::

    data = await source.read(4096)   # b"" at EOF
    if source.seekable():
        await source.seek(100)
    await source.close()

``BytesSource`` and ``FileSource`` are seekable and therefore eligible for
range requests. ``IteratorSource`` wraps a one-shot async stream (for
example a ``git cat-file`` pipe) and is not.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

from blobserve.errors import SourceReadError


@runtime_checkable
class ByteSource(Protocol):
    async def read(self, size: int = -1) -> bytes: ...

    def seekable(self) -> bool: ...

    async def seek(self, offset: int) -> int: ...

    async def close(self) -> None: ...


# asyncio stream readers signal a truncated pipe with IncompleteReadError (an EOFError).
SOURCE_READ_ERRORS = (OSError, EOFError)


async def read_at_most(source: ByteSource, size: int) -> bytes:
    """
    Read up to *size* bytes, looping over short reads until EOF.

    Raises:
        SourceReadError: when the underlying read fails.
    """
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        try:
            chunk = await source.read(remaining)
        except SOURCE_READ_ERRORS as exc:
            raise SourceReadError(str(exc)) from exc
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


class BytesSource:
    """In-memory seekable source."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0
        self.closed = False

    async def read(self, size: int = -1) -> bytes:
        if self.closed:
            raise SourceReadError("read from closed source")
        end = len(self._data) if size < 0 else min(self._pos + size, len(self._data))
        chunk = self._data[self._pos : end]
        self._pos = end
        return chunk

    def seekable(self) -> bool:
        return True

    async def seek(self, offset: int) -> int:
        if offset < 0:
            raise ValueError(f"negative seek offset: {offset}")
        self._pos = offset
        return self._pos

    async def close(self) -> None:
        self.closed = True


class FileSource:
    """Seekable source over a file on disk; blocking calls run in a worker thread."""

    def __init__(self, fh: BinaryIO) -> None:
        self._fh = fh

    @classmethod
    async def open(cls, path: str | Path) -> FileSource:
        fh = await asyncio.to_thread(open, Path(path), "rb")
        return cls(fh)

    async def read(self, size: int = -1) -> bytes:
        return await asyncio.to_thread(self._fh.read, size)

    def seekable(self) -> bool:
        return self._fh.seekable()

    async def seek(self, offset: int) -> int:
        return await asyncio.to_thread(self._fh.seek, offset)

    async def close(self) -> None:
        await asyncio.to_thread(self._fh.close)


class IteratorSource:
    """Non-seekable source over an async iterator of byte chunks."""

    def __init__(self, chunks: AsyncIterator[bytes]) -> None:
        self._chunks = chunks
        self._pending = b""
        self._exhausted = False

    async def read(self, size: int = -1) -> bytes:
        while not self._exhausted and (size < 0 or len(self._pending) < size):
            try:
                self._pending += await anext(self._chunks)
            except StopAsyncIteration:
                self._exhausted = True
        if size < 0:
            chunk, self._pending = self._pending, b""
        else:
            chunk, self._pending = self._pending[:size], self._pending[size:]
        return chunk

    def seekable(self) -> bool:
        return False

    async def seek(self, offset: int) -> int:
        raise OSError("IteratorSource does not support seeking")

    async def close(self) -> None:
        aclose = getattr(self._chunks, "aclose", None)
        if aclose is not None:
            await aclose()
