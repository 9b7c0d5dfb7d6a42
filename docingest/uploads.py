"""
Upload policy for callers of the extraction service.

Size limits and minimum/maximum text lengths are business rules owned by
the upload endpoint, not by the extraction core. This module bundles the
policy the resume upload endpoint applies around `ExtractionService`.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field

from docingest.config import Settings, get_settings
from docingest.models import UploadedText, UploadMetadata
from docingest.service import ExtractionService

logger = logging.getLogger(__name__)


class UploadRejected(Exception):
    """Raised when an upload violates the upload policy."""

    def __init__(self, message: str, filename: str | None = None):
        self.filename = filename
        super().__init__(message)


class UploadPolicy(BaseModel):
    """Limits applied to an upload before and after extraction."""

    model_config = ConfigDict(frozen=True)

    max_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    min_characters: int = Field(default=50, ge=0)
    max_characters: int = Field(default=20000, gt=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadPolicy":
        return cls(
            max_bytes=settings.max_upload_bytes,
            min_characters=settings.min_text_characters,
            max_characters=settings.max_text_characters,
        )


def prepare_upload(
    data: bytes,
    filename: str,
    content_type: str | None = None,
    *,
    service: ExtractionService | None = None,
    policy: UploadPolicy | None = None,
) -> UploadedText:
    """
    Validate an upload, extract its text and apply the length policy.

    Args:
        data: Uploaded file body.
        filename: Original filename of the upload.
        content_type: Declared MIME type, recorded as metadata only.
        service: Extraction service to use. A new one is created if omitted.
        policy: Upload limits. Loaded from settings if omitted.

    Returns:
        UploadedText with the (possibly truncated) text and file metadata.

    Raises:
        UploadRejected: If the upload is empty, too large, or its text is
            too short to be useful.
        ExtractionError: Propagated unchanged from the extraction service.
    """
    policy = policy or UploadPolicy.from_settings(get_settings())
    service = service or ExtractionService()

    if not data:
        raise UploadRejected("No file uploaded", filename)

    if len(data) > policy.max_bytes:
        limit_mb = policy.max_bytes / (1024 * 1024)
        raise UploadRejected(f"File too large (max {limit_mb:g}MB)", filename)

    result = service.extract_text(data, filename)

    if len(result.text) < policy.min_characters:
        raise UploadRejected("Parsed text too short or unreadable", filename)

    truncated = len(result.text) > policy.max_characters
    if truncated:
        logger.info(
            "Truncating text of '%s' from %d to %d characters",
            filename,
            len(result.text),
            policy.max_characters,
        )

    return UploadedText(
        text=result.text[: policy.max_characters],
        truncated=truncated,
        metadata=UploadMetadata(
            name=filename,
            size=len(data),
            content_type=content_type,
            format=result.format,
        ),
    )
