"""Content classification and response shaping for a single byte stream."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from blobserve.errors import CharsetDetectionError, SourceReadError
from blobserve.models.config import BlobServeConfig
from blobserve.models.request import ContentRequest, RangeSpec
from blobserve.serve.policy import decide, display_name, file_extension, treat_as_text
from blobserve.serve.ranges import parse_range
from blobserve.serve.source import SOURCE_READ_ERRORS, ByteSource, read_at_most
from blobserve.serve.writer import ResponseWriter
from blobserve.sniff.charset import detect_encoding
from blobserve.sniff.typesniffer import SNIFF_LEN, SniffedType, detect_content_type

Sniffer = Callable[[bytes], SniffedType]
CharsetDetector = Callable[[bytes], str]


class ContentResponder:
    """
    Classify a byte stream and write it as an HTTP response.

    The sequence per request is fixed: validate any Range header, read the
    first :data:`SNIFF_LEN` bytes, set every header, then write the body.
    Nothing reaches the writer before the headers are final, so a failure
    before the body starts leaves the response free to become an error page.

    The sniffer and charset detector default to the libmagic and
    charset-normalizer backed implementations and can be swapped out::

        responder = ContentResponder(config, sniffer=lambda _: SniffedType(content_type="text/plain"))
        await responder.respond(ContentRequest(name="a.txt", declared_size=5), source, writer)
    """

    def __init__(
        self,
        config: BlobServeConfig,
        *,
        sniffer: Sniffer = detect_content_type,
        charset_detector: CharsetDetector = detect_encoding,
    ) -> None:
        self._config = config
        self._sniffer = sniffer
        self._charset_detector = charset_detector
        self._logger = structlog.get_logger("blobserve.serve")

    async def respond(
        self,
        req: ContentRequest,
        source: ByteSource,
        writer: ResponseWriter,
    ) -> None:
        """
        Write *source* to *writer* with headers derived from its content.

        Args:
            req: Name, size and client hints for this response.
            source: Byte source positioned at the start of the content.
            writer: Uncommitted response sink.

        Raises:
            MalformedRangeError: Range header present but unusable. Raised
                before anything is written.
            SourceReadError: Reading the source failed.
            WriteError: The sink failed; output already sent stays sent.
        """
        byte_range = self._check_range(req, writer)

        sample = await read_at_most(source, SNIFF_LEN)

        serve_cfg = self._config.serve
        writer.set_header("Cache-Control", f"public, max-age={serve_cfg.cache_max_age}")
        if req.declared_size >= 0:
            writer.set_header("Content-Length", str(req.declared_size))
        else:
            self._logger.error(
                "negative_declared_size", name=req.name, declared_size=req.declared_size
            )

        name = display_name(req.name)
        mapped_mime = self._config.mime_type_map.lookup(file_extension(name))
        kind = self._sniffer(sample).kind

        charset = "utf-8"
        if treat_as_text(kind, req.render):
            try:
                charset = self._charset_detector(sample)
            except CharsetDetectionError as exc:
                self._logger.error(
                    "charset_detection_failed", name=name, error=str(exc), fallback=charset
                )

        policy = decide(
            kind,
            name=name,
            render=req.render,
            mapped_mime=mapped_mime,
            svg_enabled=self._config.svg.enabled,
            charset=charset,
        )
        for header, value in policy.headers().items():
            writer.set_header(header, value)

        if byte_range is not None:
            await self._write_range(req, byte_range, source, writer)
            return

        await writer.write(sample)
        await self._copy(source, writer, limit=None)

    def _check_range(self, req: ContentRequest, writer: ResponseWriter) -> RangeSpec | None:
        # Ranges need random access and a known size to clamp against.
        if not req.supports_seek or req.declared_size < 0:
            return None
        if not req.range_header:
            writer.set_header("Accept-Ranges", "bytes")
            return None
        byte_range = parse_range(req.range_header, req.declared_size)
        self._logger.debug(
            "range_request",
            name=req.name,
            start=byte_range.start,
            end=byte_range.end,
            length=byte_range.length,
        )
        return byte_range

    async def _write_range(
        self,
        req: ContentRequest,
        byte_range: RangeSpec,
        source: ByteSource,
        writer: ResponseWriter,
    ) -> None:
        writer.set_status(206)
        writer.set_header("Content-Length", str(byte_range.length))
        writer.set_header("Content-Range", byte_range.content_range(req.declared_size))
        try:
            await source.seek(byte_range.start)
        except SOURCE_READ_ERRORS as exc:
            raise SourceReadError(str(exc)) from exc
        await self._copy(source, writer, limit=byte_range.length)

    async def _copy(self, source: ByteSource, writer: ResponseWriter, *, limit: int | None) -> None:
        chunk_size = self._config.serve.copy_chunk_size
        remaining = limit
        while remaining is None or remaining > 0:
            want = chunk_size if remaining is None else min(chunk_size, remaining)
            try:
                chunk = await source.read(want)
            except SOURCE_READ_ERRORS as exc:
                raise SourceReadError(str(exc)) from exc
            if not chunk:
                break
            await writer.write(chunk)
            if remaining is not None:
                remaining -= len(chunk)
