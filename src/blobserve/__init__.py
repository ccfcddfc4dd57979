"""
blobserve — content classification and response shaping for stored blobs.

Primary entry point::

    from blobserve import BlobServer, BlobServeConfig, BlobRequest, BlobStore

    store = BlobStore()
    blob = store.add_bytes("docs/readme.md", b"# Hello\\n")
    server = BlobServer(BlobServeConfig())
    await server.serve(BlobRequest(), blob, writer)
"""

from blobserve.errors import (
    BlobNotFoundError,
    BlobServeError,
    CharsetDetectionError,
    HeadersCommittedError,
    MalformedRangeError,
    SourceReadError,
    WriteError,
)
from blobserve.models import (
    BlobRequest,
    BlobServeConfig,
    ContentRequest,
    MimeTypeMapConfig,
    RangeSpec,
    ServeConfig,
    SVGConfig,
)
from blobserve.serve import (
    BlobServer,
    BufferedResponseWriter,
    ContentResponder,
    ResponseWriter,
)
from blobserve.sniff import ContentKind, SniffedType
from blobserve.store import Blob, BlobStore

__version__ = "0.1.0"

__all__ = [
    # Core
    "BlobServer",
    "ContentResponder",
    # Config
    "BlobServeConfig",
    "MimeTypeMapConfig",
    "ServeConfig",
    "SVGConfig",
    # Models
    "BlobRequest",
    "ContentRequest",
    "RangeSpec",
    "ContentKind",
    "SniffedType",
    # Writers
    "ResponseWriter",
    "BufferedResponseWriter",
    # Store
    "Blob",
    "BlobStore",
    # Errors
    "BlobServeError",
    "MalformedRangeError",
    "SourceReadError",
    "WriteError",
    "HeadersCommittedError",
    "CharsetDetectionError",
    "BlobNotFoundError",
]
