"""Response shaping and streaming."""

from blobserve.serve.blob_server import BlobServer
from blobserve.serve.httpcache import etag_matches, handle_etag_cache
from blobserve.serve.policy import ResponsePolicy, decide, display_name, file_extension
from blobserve.serve.ranges import parse_range
from blobserve.serve.responder import ContentResponder
from blobserve.serve.source import (
    ByteSource,
    BytesSource,
    FileSource,
    IteratorSource,
    read_at_most,
)
from blobserve.serve.writer import BufferedResponseWriter, ResponseWriter

__all__ = [
    "BlobServer",
    "ContentResponder",
    "ResponsePolicy",
    "decide",
    "display_name",
    "file_extension",
    "parse_range",
    "etag_matches",
    "handle_etag_cache",
    "ByteSource",
    "BytesSource",
    "FileSource",
    "IteratorSource",
    "read_at_most",
    "ResponseWriter",
    "BufferedResponseWriter",
]
