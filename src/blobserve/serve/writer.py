"""Response sinks that enforce header-before-body ordering."""

from __future__ import annotations

from abc import ABC, abstractmethod

from starlette.datastructures import Headers, MutableHeaders

from blobserve.errors import HeadersCommittedError, WriteError


class ResponseWriter(ABC):
    """
    Base response sink.

    Headers and status may be changed freely until the first body write (or
    :meth:`finish`) commits them; afterward any change raises
    :class:`HeadersCommittedError`. Subclasses implement the two transport
    hooks :meth:`_send_start` and :meth:`_send_body`.
    """

    def __init__(self) -> None:
        self._headers = MutableHeaders()
        self._status_code = 200
        self._committed = False
        self._finished = False

    @property
    def headers(self) -> Headers:
        """Read-only view of the headers set so far."""
        return Headers(raw=list(self._headers.raw))

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def committed(self) -> bool:
        return self._committed

    def set_header(self, name: str, value: str) -> None:
        self._check_mutable()
        self._headers[name] = value

    def delete_header(self, name: str) -> None:
        self._check_mutable()
        if name in self._headers:
            del self._headers[name]

    def set_status(self, status_code: int) -> None:
        self._check_mutable()
        self._status_code = status_code

    async def write(self, data: bytes) -> None:
        """Write body bytes, committing headers first if needed."""
        if self._finished:
            raise WriteError("write after finish")
        await self._commit()
        if not data:
            return
        try:
            await self._send_body(data, more_body=True)
        except OSError as exc:
            raise WriteError(str(exc)) from exc

    async def finish(self) -> None:
        """Commit headers if still pending and end the body. Idempotent."""
        if self._finished:
            return
        await self._commit()
        self._finished = True
        try:
            await self._send_body(b"", more_body=False)
        except OSError as exc:
            raise WriteError(str(exc)) from exc

    def _check_mutable(self) -> None:
        if self._committed:
            raise HeadersCommittedError("response headers were already sent")

    async def _commit(self) -> None:
        if self._committed:
            return
        self._committed = True
        try:
            await self._send_start(self._status_code, list(self._headers.raw))
        except OSError as exc:
            raise WriteError(str(exc)) from exc

    @abstractmethod
    async def _send_start(self, status_code: int, raw_headers: list[tuple[bytes, bytes]]) -> None:
        """Transmit the status line and headers."""

    @abstractmethod
    async def _send_body(self, data: bytes, *, more_body: bool) -> None:
        """Transmit a body chunk."""


class BufferedResponseWriter(ResponseWriter):
    """Collects the response in memory. Useful for embedding and tests."""

    def __init__(self) -> None:
        super().__init__()
        self.sent_headers: Headers | None = None
        self.body = bytearray()

    async def _send_start(self, status_code: int, raw_headers: list[tuple[bytes, bytes]]) -> None:
        self.sent_headers = Headers(raw=raw_headers)

    async def _send_body(self, data: bytes, *, more_body: bool) -> None:
        self.body.extend(data)
