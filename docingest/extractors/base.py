"""
Base classes for format handlers.

Defines the error taxonomy shared by the whole extraction pipeline and the
abstract interface every format handler implements, so the service can
treat PDF, Word and plain-text documents uniformly.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from docingest.formats import DocumentFormat


class ExtractionError(Exception):
    """
    Base class for every failure raised by the extraction pipeline.

    Carries the source filename (once known) and the underlying exception,
    if any. `user_message` is safe to show to end users.
    """

    user_message: ClassVar[str] = "The document could not be read."

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        cause: Exception | None = None,
    ):
        self.message = message
        self.filename = filename
        self.cause = cause
        super().__init__(message)

    def with_filename(self, filename: str) -> "ExtractionError":
        """Attach the source filename unless one is already set."""
        if self.filename is None:
            self.filename = filename
        return self

    def __str__(self) -> str:
        if self.filename:
            return f"Failed to extract '{self.filename}': {self.message}"
        return self.message


class UnsupportedFormat(ExtractionError):
    """The file extension is not one of the recognized formats."""

    user_message = "This file type is not supported. Upload a PDF, DOCX or TXT file, or paste the text instead."

    def __init__(self, extension: str, filename: str | None = None):
        self.extension = extension
        shown = extension or "<none>"
        super().__init__(f"Unsupported file format '{shown}'", filename)


class LibraryUnavailable(ExtractionError):
    """
    No usable calling convention was found for a required library.

    This is a service-health problem rather than a problem with the
    document, and stays in effect until the process restarts.
    """

    user_message = "Document processing is temporarily unavailable."

    def __init__(self, library: str, filename: str | None = None):
        self.library = library
        super().__init__(f"{library} is not available", filename)


class ExtractionFailed(ExtractionError):
    """A working handler could not parse this particular document."""

    user_message = "The file appears to be corrupted or unreadable. Try re-saving it or paste the text instead."


class EmptyResult(ExtractionError):
    """Extraction ran but produced no usable characters (e.g. a scanned PDF)."""

    user_message = "No text could be found in this document. It may be a scanned image; try pasting the text instead."

    def __init__(self, document_format: DocumentFormat, filename: str | None = None):
        self.format = document_format
        super().__init__(
            f"No text could be extracted from the {document_format.value} document",
            filename,
        )


@dataclass(frozen=True)
class RawExtraction:
    """Unnormalized text produced by a handler."""

    text: str


class DocumentHandler(ABC):
    """
    Abstract base class for format handlers.

    Each subclass wraps exactly one `DocumentFormat`, declared via `FORMAT`.
    """

    FORMAT: ClassVar[DocumentFormat]

    @abstractmethod
    def extract(self, data: bytes) -> RawExtraction:
        """
        Extract raw text from a document buffer.

        Args:
            data: The complete file contents.

        Returns:
            RawExtraction holding the text exactly as the library produced it.

        Raises:
            ExtractionError: If extraction fails for any reason.
        """
        ...

    def _require_content(self, data: bytes) -> None:
        """
        Reject empty buffers before handing them to a parsing library.

        Raises:
            ExtractionFailed: If the buffer is empty.
        """
        if not data:
            raise ExtractionFailed(f"Empty {self.FORMAT.value} buffer")
