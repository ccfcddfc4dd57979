"""Tests for the blob store and byte sources."""

from __future__ import annotations

import asyncio

import pytest

from blobserve.errors import BlobNotFoundError, SourceReadError
from blobserve.serve.source import (
    ByteSource,
    BytesSource,
    FileSource,
    IteratorSource,
    read_at_most,
)
from blobserve.store.blobs import Blob, git_blob_id
from tests.conftest import chunked


class TestGitBlobId:
    def test_empty_blob(self):
        assert git_blob_id(b"") == "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"

    def test_known_blob(self):
        assert git_blob_id(b"hello\n") == "ce013625030ba8dba906f756967f9e9ca394464a"


class TestBlobStore:
    async def test_add_and_get(self, store):
        blob = store.add_bytes("docs/a.md", b"# A\n")
        assert store.get(blob.id) is blob
        assert blob.id in store
        assert blob.size == 4
        source = await blob.data_async()
        assert await source.read() == b"# A\n"
        await source.close()

    async def test_identical_content_dedups(self, store):
        first = store.add_bytes("a.txt", b"same")
        second = store.add_bytes("b.txt", b"same")
        assert second is first
        assert len(store) == 1
        assert [b.path for b in store] == ["a.txt"]

    def test_missing_blob(self, store):
        with pytest.raises(BlobNotFoundError) as excinfo:
            store.get("nope")
        assert excinfo.value.blob_id == "nope"

    async def test_file_blob_matches_bytes_blob(self, tmp_path):
        data = b"line\n" * 10_000
        path = tmp_path / "big.txt"
        path.write_bytes(data)
        file_blob = Blob.from_file("big.txt", path)
        assert file_blob.id == git_blob_id(data)
        assert file_blob.size == len(data)
        source = await file_blob.data_async()
        try:
            assert source.seekable()
            await source.seek(5)
            assert await source.read(5) == b"line\n"
        finally:
            await source.close()


class TestSources:
    async def test_sources_satisfy_protocol(self, tmp_path):
        path = tmp_path / "f"
        path.write_bytes(b"x")
        file_source = await FileSource.open(path)
        for source in (BytesSource(b""), IteratorSource(chunked(b"", 1)), file_source):
            assert isinstance(source, ByteSource)
        await file_source.close()

    async def test_read_at_most_loops_over_short_reads(self):
        source = IteratorSource(chunked(b"abcdefghij", 3))
        assert await read_at_most(source, 8) == b"abcdefgh"
        assert await read_at_most(source, 8) == b"ij"
        assert await read_at_most(source, 8) == b""

    async def test_read_at_most_wraps_os_errors(self):
        class _Broken(BytesSource):
            async def read(self, size: int = -1) -> bytes:
                raise OSError("boom")

        with pytest.raises(SourceReadError):
            await read_at_most(_Broken(b"abc"), 4)

    async def test_read_at_most_wraps_truncated_pipe(self):
        async def _chunks():
            yield b"abc"
            raise asyncio.IncompleteReadError(b"de", 10)

        with pytest.raises(SourceReadError):
            await read_at_most(IteratorSource(_chunks()), 10)

    async def test_iterator_source_not_seekable(self):
        source = IteratorSource(chunked(b"abc", 1))
        assert not source.seekable()
        with pytest.raises(OSError):
            await source.seek(1)

    async def test_bytes_source_seek_and_read(self):
        source = BytesSource(b"0123456789")
        await source.seek(7)
        assert await source.read(10) == b"789"
        assert await source.read(10) == b""

    async def test_closed_bytes_source_rejects_reads(self):
        source = BytesSource(b"abc")
        await source.close()
        with pytest.raises(SourceReadError):
            await source.read(1)
