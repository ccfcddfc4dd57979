"""Shared fixtures for blobserve tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import pytest

from blobserve.models.config import BlobServeConfig, MimeTypeMapConfig, SVGConfig
from blobserve.serve.responder import ContentResponder
from blobserve.serve.writer import BufferedResponseWriter
from blobserve.sniff.typesniffer import SniffedType
from blobserve.store.blobs import BlobStore

TEXT_TYPE = "text/plain"
PNG_TYPE = "image/png"
PDF_TYPE = "application/pdf"
SVG_TYPE = "image/svg+xml"
BINARY_TYPE = "application/octet-stream"


@pytest.fixture
def config():
    """BlobServeConfig with a small extension map enabled."""
    return BlobServeConfig(
        mime_type_map=MimeTypeMapConfig(
            enabled=True,
            map={".md": "text/markdown", ".svg": "text/x-not-svg", ".bin": "application/x-custom"},
        ),
    )


@pytest.fixture
def no_svg_config(config):
    """Config with inline SVG rendering switched off."""
    return config.model_copy(update={"svg": SVGConfig(enabled=False)})


@pytest.fixture
def writer():
    return BufferedResponseWriter()


@pytest.fixture
def store():
    return BlobStore()


def fixed_sniffer(content_type: str) -> Callable[[bytes], SniffedType]:
    """Sniffer that ignores the sample and returns *content_type*."""

    def _sniff(_sample: bytes) -> SniffedType:
        return SniffedType(content_type=content_type)

    return _sniff


def make_responder(
    config: BlobServeConfig,
    content_type: str | None = TEXT_TYPE,
    charset: str = "UTF-8",
) -> ContentResponder:
    """ContentResponder with deterministic collaborators.

    ``content_type=None`` keeps the real libmagic sniffer.
    """
    kwargs: dict = {"charset_detector": lambda _sample: charset}
    if content_type is not None:
        kwargs["sniffer"] = fixed_sniffer(content_type)
    return ContentResponder(config, **kwargs)


async def chunked(data: bytes, size: int) -> AsyncIterator[bytes]:
    """Yield *data* in pieces of *size* bytes."""
    for i in range(0, len(data), size):
        yield data[i : i + size]
