"""
Extraction service.

Orchestrates format detection, the format handler and text normalization,
and packages the outcome as an `ExtractionResult`. Each stage
short-circuits on failure; nothing is retried and nothing is kept between
calls apart from the shared PDF adapter.
"""

import asyncio
import logging
from pathlib import Path

from docingest.extractors.base import (
    EmptyResult,
    ExtractionError,
    ExtractionFailed,
    UnsupportedFormat,
)
from docingest.extractors.factory import create_handler
from docingest.extractors.resolver import AdapterResolver
from docingest.formats import DocumentFormat, detect, extension_of, is_zip, sniff
from docingest.models import ExtractionResult
from docingest.normalizer import normalize

logger = logging.getLogger(__name__)


class ExtractionService:
    """
    Turns uploaded documents into normalized text.

    Safe to share between threads; the only shared state is the PDF
    resolver, which resolves at most once.
    """

    def __init__(self, pdf_resolver: AdapterResolver | None = None):
        """
        Initialize the service.

        Args:
            pdf_resolver: Resolver for PDF extraction. Uses the process-wide
                resolver if not provided.
        """
        self._pdf_resolver = pdf_resolver

    def extract_text(self, data: bytes, filename: str) -> ExtractionResult:
        """
        Extract normalized text from a document buffer.

        Args:
            data: The complete file contents.
            filename: Name the file was uploaded under; only its extension
                is used.

        Returns:
            ExtractionResult with the normalized text and its provenance.

        Raises:
            UnsupportedFormat: If the extension is not recognized.
            LibraryUnavailable: If the library for the format cannot be used.
            ExtractionFailed: If the document could not be parsed.
            EmptyResult: If the document contains no extractable text.
        """
        document_format = detect(filename)
        if document_format is None:
            raise UnsupportedFormat(extension_of(filename), filename)

        self._check_content(data, document_format, filename)
        handler = create_handler(document_format, self._pdf_resolver)

        try:
            raw = handler.extract(data)
        except ExtractionError as e:
            logger.debug("Extraction of '%s' failed: %s", filename, e)
            raise e.with_filename(filename)

        text = normalize(raw.text)
        if not text:
            raise EmptyResult(document_format, filename)

        logger.debug(
            "Extracted %d characters from '%s' (%s, %d bytes)",
            len(text),
            filename,
            document_format.value,
            len(data),
        )
        return ExtractionResult(
            text=text,
            format=document_format,
            source_byte_length=len(data),
            source_name=filename,
        )

    def extract_file(self, file_path: Path | str) -> ExtractionResult:
        """
        Extract normalized text from a file on disk.

        The format is checked before the file is read.

        Args:
            file_path: Path to the document file.

        Returns:
            ExtractionResult for the file.

        Raises:
            ExtractionError: As for `extract_text`; an unreadable path raises
                ExtractionFailed.
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        if detect(path.name) is None:
            raise UnsupportedFormat(extension_of(path.name), str(path))

        try:
            data = path.read_bytes()
        except OSError as e:
            raise ExtractionFailed(f"Could not read file: {e.strerror or e}", str(path), cause=e) from e

        return self.extract_text(data, path.name)

    async def extract_text_async(self, data: bytes, filename: str) -> ExtractionResult:
        """
        Run `extract_text` in a worker thread.

        PDF and Word decoding is CPU and I/O heavy; this keeps an event loop
        responsive while a document is processed.
        """
        return await asyncio.to_thread(self.extract_text, data, filename)

    def _check_content(self, data: bytes, declared: DocumentFormat, filename: str) -> None:
        """Log when the buffer's signature disagrees with its extension."""
        # python-docx opens the package itself; the signature is enough here
        if declared is DocumentFormat.DOCX and is_zip(data):
            return

        sniffed = sniff(data)
        if sniffed is not None and sniffed is not declared:
            logger.warning(
                "'%s' is named as %s but its content looks like %s",
                filename,
                declared.value,
                sniffed.value,
            )


_default_service = ExtractionService()


def extract_text(data: bytes, filename: str) -> ExtractionResult:
    """
    Extract normalized text from a document buffer.

    Convenience function using a shared `ExtractionService`.
    """
    return _default_service.extract_text(data, filename)


def extract_file(file_path: Path | str) -> ExtractionResult:
    """
    Extract normalized text from a file on disk.

    Convenience function using a shared `ExtractionService`.
    """
    return _default_service.extract_file(file_path)
