"""Serve a stored blob: ETag short-circuit, then delegate to ContentResponder."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from blobserve.models.config import BlobServeConfig
from blobserve.models.request import BlobRequest, ContentRequest
from blobserve.serve.httpcache import handle_etag_cache
from blobserve.serve.responder import ContentResponder
from blobserve.serve.writer import ResponseWriter

if TYPE_CHECKING:
    from blobserve.store.blobs import Blob


class BlobServer:
    """
    Serve :class:`~blobserve.store.blobs.Blob` objects over a ResponseWriter.

    Usage::

        server = BlobServer(BlobServeConfig())
        await server.serve(BlobRequest(range="bytes=0-99"), blob, writer)
    """

    def __init__(
        self,
        config: BlobServeConfig,
        responder: ContentResponder | None = None,
    ) -> None:
        self._config = config
        self._responder = responder or ContentResponder(config)
        self._logger = structlog.get_logger("blobserve.serve")

    async def serve(self, request: BlobRequest, blob: Blob, writer: ResponseWriter) -> None:
        """
        Write *blob* as the response.

        Returns without touching the content when the client's cached copy
        matches the blob id. The opened source is always closed; a close
        failure is logged and never replaces the outcome of the response.

        Raises:
            Whatever :meth:`ContentResponder.respond` raises, unchanged.
        """
        if await handle_etag_cache(request.if_none_match, writer, f'"{blob.id}"'):
            self._logger.debug("etag_cache_hit", blob_id=blob.id[:12], path=blob.path)
            return

        source = await blob.data_async()
        try:
            await self._responder.respond(
                ContentRequest(
                    name=blob.path,
                    declared_size=blob.size,
                    range_header=request.range,
                    render=request.render,
                    supports_seek=source.seekable(),
                ),
                source,
                writer,
            )
        finally:
            try:
                await source.close()
            except Exception as exc:
                self._logger.error("source_close_failed", blob_id=blob.id[:12], error=str(exc))

        self._logger.info(
            "blob_served",
            blob_id=blob.id[:12],
            path=blob.path,
            status=writer.status_code,
        )
