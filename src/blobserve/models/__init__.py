"""blobserve data models."""

from blobserve.models.config import (
    BlobServeConfig,
    MimeTypeMapConfig,
    ServeConfig,
    SVGConfig,
)
from blobserve.models.request import (
    BlobRequest,
    ContentRequest,
    RangeSpec,
    parse_form_bool,
)

__all__ = [
    # Config
    "BlobServeConfig",
    "MimeTypeMapConfig",
    "ServeConfig",
    "SVGConfig",
    # Request
    "BlobRequest",
    "ContentRequest",
    "RangeSpec",
    "parse_form_bool",
]
