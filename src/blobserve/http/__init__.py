"""HTTP transport adapters."""

from blobserve.http.asgi import ASGIResponseWriter, BlobResponse, blob_request_from

__all__ = ["ASGIResponseWriter", "BlobResponse", "blob_request_from"]
