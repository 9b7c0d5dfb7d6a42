"""
Pydantic models for extraction results.

These models define the public contract handed to callers:
- ExtractionResult: normalized text plus provenance
- UploadedText: caller-facing result of an upload after policy checks

All models are frozen; a result is created once and never mutated.
"""

from hashlib import sha256

from pydantic import BaseModel, ConfigDict, Field, computed_field

from docingest.formats import DocumentFormat


class ExtractionResult(BaseModel):
    """
    Result of extracting text from a document.

    Downstream analysis consumes only `text`; the remaining fields are
    diagnostics.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    text: str = Field(
        ...,
        description="Normalized extracted text",
    )

    format: DocumentFormat = Field(
        ...,
        description="Format the text was extracted from",
    )

    source_byte_length: int = Field(
        ...,
        ge=0,
        description="Size of the source buffer in bytes",
    )

    source_name: str | None = Field(
        default=None,
        description="Filename the document was uploaded under",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def character_count(self) -> int:
        """Number of characters in the normalized text."""
        return len(self.text)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def content_hash(self) -> str:
        """SHA-256 of the normalized text."""
        return sha256(self.text.encode("utf-8")).hexdigest()


class UploadMetadata(BaseModel):
    """Metadata describing an uploaded file."""

    model_config = ConfigDict(frozen=True)

    name: str
    size: int = Field(..., ge=0)
    content_type: str | None = None
    format: DocumentFormat


class UploadedText(BaseModel):
    """Text accepted from an upload, possibly truncated."""

    model_config = ConfigDict(frozen=True)

    text: str
    truncated: bool = False
    metadata: UploadMetadata
