"""Starlette/ASGI adapter for BlobServer."""

from __future__ import annotations

import structlog
from starlette.background import BackgroundTask
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import Receive, Scope, Send

from blobserve.errors import BlobServeError, MalformedRangeError
from blobserve.models.request import BlobRequest, parse_form_bool
from blobserve.serve.blob_server import BlobServer
from blobserve.serve.writer import ResponseWriter
from blobserve.store.blobs import Blob

_logger = structlog.get_logger("blobserve.http")


class ASGIResponseWriter(ResponseWriter):
    """ResponseWriter that emits ASGI ``http.response.*`` messages."""

    def __init__(self, send: Send) -> None:
        super().__init__()
        self._send = send

    async def _send_start(self, status_code: int, raw_headers: list[tuple[bytes, bytes]]) -> None:
        await self._send(
            {"type": "http.response.start", "status": status_code, "headers": raw_headers}
        )

    async def _send_body(self, data: bytes, *, more_body: bool) -> None:
        await self._send({"type": "http.response.body", "body": data, "more_body": more_body})


def blob_request_from(request: Request) -> BlobRequest:
    """Extract the validator, Range header and render flag from a starlette request."""
    return BlobRequest(
        if_none_match=request.headers.get("if-none-match"),
        range=request.headers.get("range"),
        render=parse_form_bool(request.query_params.get("render")),
    )


class BlobResponse(Response):
    """
    Starlette response that streams a blob through :class:`BlobServer`.

    Errors raised before the headers go out become proper status codes:
    ``416`` for an unusable Range header, ``500`` for anything else. Once
    the body has started the error propagates to the ASGI server.

    Example::

        async def raw(request: Request) -> Response:
            blob = store.get(request.path_params["blob_id"])
            return BlobResponse(server, blob, blob_request_from(request))
    """

    def __init__(
        self,
        server: BlobServer,
        blob: Blob,
        request: BlobRequest,
        background: BackgroundTask | None = None,
    ) -> None:
        super().__init__(background=background)
        self._server = server
        self._blob = blob
        self._request = request

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        writer = ASGIResponseWriter(send)
        try:
            await self._server.serve(self._request, self._blob, writer)
        except MalformedRangeError as exc:
            if writer.committed:
                raise
            _logger.info("range_not_satisfiable", path=self._blob.path, range=exc.header)
            error = PlainTextResponse(
                str(exc),
                status_code=416,
                headers={"Content-Range": f"bytes */{exc.size}"},
            )
            await error(scope, receive, send)
            return
        except BlobServeError as exc:
            if writer.committed:
                raise
            _logger.error("blob_serve_failed", path=self._blob.path, error=str(exc))
            await PlainTextResponse("Internal Server Error", status_code=500)(scope, receive, send)
            return

        await writer.finish()
        if self.background is not None:
            await self.background()
