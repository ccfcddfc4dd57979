"""Request-scoped models passed between the serving components."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

_TRUE_VALUES = frozenset({"1", "t", "T", "true", "TRUE", "True"})


def parse_form_bool(value: str | None) -> bool:
    """Interpret a query/form value as a boolean flag (``1``, ``t``, ``true`` ...)."""
    if value is None:
        return False
    return value.strip() in _TRUE_VALUES


class ContentRequest(BaseModel):
    """Everything ContentResponder needs to shape one response."""

    model_config = ConfigDict(frozen=True)

    name: str
    """Display filename. Directory components are stripped before use."""
    declared_size: int = -1
    """Exact byte size of the content, or -1 when unknown."""
    range_header: str | None = None
    """Raw ``Range`` header value, if the client sent one."""
    render: bool = False
    """Client asked for the content to be rendered as text regardless of type."""
    supports_seek: bool = False
    """Whether the byte source allows random access."""


class RangeSpec(BaseModel):
    """An inclusive byte range ``start..end`` within the content."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def _ordered(self) -> RangeSpec:
        if self.end < self.start:
            raise ValueError("range end must not precede start")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, size: int) -> str:
        """Value for the ``Content-Range`` header of a 206 response."""
        return f"bytes {self.start}-{self.end}/{size}"


class BlobRequest(BaseModel):
    """Client-side inputs that BlobServer consumes."""

    model_config = ConfigDict(frozen=True)

    if_none_match: str | None = None
    range: str | None = None
    render: bool = False
