"""Configuration models for blobserve components."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class MimeTypeMapConfig(BaseModel):
    """Extension to MIME type overrides applied to served files."""

    enabled: bool = False
    """Whether the extension map is consulted at all."""

    map: dict[str, str] = Field(
        default_factory=dict,
        description="Lowercase extension (with leading dot) to MIME type, e.g. '.md': 'text/markdown'.",
    )

    @field_validator("map", mode="before")
    @classmethod
    def normalise_extensions(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        normalised: dict[str, str] = {}
        for ext, mime in value.items():
            key = str(ext).strip().lower()
            if key and not key.startswith("."):
                key = "." + key
            normalised[key] = mime
        return normalised

    def lookup(self, extension: str) -> str:
        """Return the mapped MIME type for *extension*, or ``""`` when unmapped or disabled."""
        if not self.enabled:
            return ""
        return self.map.get(extension.lower(), "")


class SVGConfig(BaseModel):
    """Controls whether SVG images are rendered inline."""

    enabled: bool = True
    """When False, SVG content is always served as an attachment."""


class ServeConfig(BaseModel):
    """Response shaping knobs."""

    cache_max_age: int = Field(
        default=86_400,
        ge=0,
        description="Seconds placed in the public Cache-Control max-age directive.",
    )

    copy_chunk_size: int = Field(
        default=32 * 1024,
        ge=1024,
        description="Bytes read from the source per write when streaming the body.",
    )


class BlobServeConfig(BaseModel):
    """
    Top-level configuration for serving blobs.

    All sub-configs have sensible defaults and can be overridden individually.

    Example::

        config = BlobServeConfig(
            mime_type_map=MimeTypeMapConfig(enabled=True, map={".md": "text/markdown"}),
            svg=SVGConfig(enabled=False),
        )
    """

    mime_type_map: MimeTypeMapConfig = Field(default_factory=MimeTypeMapConfig)
    svg: SVGConfig = Field(default_factory=SVGConfig)
    serve: ServeConfig = Field(default_factory=ServeConfig)

    @classmethod
    def default(cls) -> BlobServeConfig:
        """Return a config instance with all defaults."""
        return cls()

    @classmethod
    def from_yaml(cls, path: str | Path) -> BlobServeConfig:
        """
        Load a config from a YAML file.

        An empty document yields the defaults. Unknown keys are ignored by
        pydantic; invalid values raise ``pydantic.ValidationError``.
        """
        text = Path(path).expanduser().read_text(encoding="utf-8")
        data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
        return cls.model_validate(data)
