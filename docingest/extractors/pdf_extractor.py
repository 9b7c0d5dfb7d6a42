"""
PDF document handler using PyMuPDF.

PyMuPDF has changed its public surface across releases: the import name
moved from `fitz` to `pymupdf`, the implementation has lived in a nested
`fitz.fitz` module, and older builds only offered camelCase page methods.
The handler never talks to the library directly; it goes through a
process-wide `AdapterResolver` that picks one calling convention on first
use.
"""

import importlib
import logging
from collections.abc import Callable
from types import ModuleType
from typing import Any, ClassVar

from docingest.extractors.base import (
    DocumentHandler,
    ExtractionError,
    ExtractionFailed,
    RawExtraction,
)
from docingest.extractors.resolver import AdapterResolver, Probe, TextAdapter
from docingest.formats import DocumentFormat

logger = logging.getLogger(__name__)

PDF_LIBRARY = "PyMuPDF"

# Import names, newest first.
_PDF_MODULES: tuple[str, ...] = ("pymupdf", "fitz")

# Attributes under which some builds nest the real implementation module.
_WRAPPED_ATTRIBUTES: tuple[str, ...] = ("pymupdf", "fitz")

# Implementation-path modules for builds that only expose them directly.
_INTERNAL_MODULES: tuple[str, ...] = ("fitz.fitz",)

# Page text methods, current name first.
_TEXT_METHODS: tuple[str, ...] = ("get_text", "getText")


def load_pdf_library() -> ModuleType | None:
    """Import PyMuPDF under whichever name is installed."""
    for name in _PDF_MODULES:
        try:
            return importlib.import_module(name)
        except ImportError:
            logger.debug("PDF library module '%s' is not importable", name)
    return None


def _text_method(library: Any) -> str | None:
    page_cls = getattr(library, "Page", None)
    if page_cls is None:
        return None
    for name in _TEXT_METHODS:
        if callable(getattr(page_cls, name, None)):
            return name
    return None


def _document_adapter(open_document: Callable[[bytes], Any], text_method: str) -> TextAdapter:
    """
    Build the normalized adapter around a document opener.

    Args:
        open_document: Opens a PDF from bytes and returns a page iterable.
        text_method: Name of the per-page text method.

    Returns:
        A callable taking PDF bytes and returning the text of all pages.
    """

    def extract(data: bytes) -> str:
        try:
            document = open_document(data)
        except Exception as e:
            raise ExtractionFailed("PDF file is corrupted or invalid", cause=e) from e

        try:
            if len(document) == 0:
                raise ExtractionFailed("PDF has no pages")
            pages = [getattr(page, text_method)() for page in document]
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionFailed(f"Could not read PDF pages: {e}", cause=e) from e
        finally:
            close = getattr(document, "close", None)
            if callable(close):
                close()

        return "\n".join(pages)

    return extract


def _probe_open_function(library: Any) -> TextAdapter | None:
    opener = getattr(library, "open", None)
    text_method = _text_method(library)
    if not callable(opener) or text_method is None:
        return None
    return _document_adapter(lambda data: opener(stream=data, filetype="pdf"), text_method)


def _probe_wrapped_module(library: Any) -> TextAdapter | None:
    for attribute in _WRAPPED_ATTRIBUTES:
        inner = getattr(library, attribute, None)
        if inner is None or inner is library:
            continue
        adapter = _probe_open_function(inner)
        if adapter is not None:
            return adapter
    return None


def _probe_document_class(library: Any) -> TextAdapter | None:
    document_cls = getattr(library, "Document", None)
    text_method = _text_method(library)
    if not isinstance(document_cls, type) or text_method is None:
        return None
    return _document_adapter(lambda data: document_cls(stream=data, filetype="pdf"), text_method)


def _probe_internal_path(
    library: Any,
    import_module: Callable[[str], Any] = importlib.import_module,
) -> TextAdapter | None:
    for name in _INTERNAL_MODULES:
        try:
            internal = import_module(name)
        except ImportError:
            continue
        adapter = _probe_open_function(internal)
        if adapter is not None:
            return adapter
    return None


# Fixed resolution order. Not configurable, so every process resolves the
# same installed library the same way.
PDF_PROBES: tuple[Probe, ...] = (
    Probe("open_function", _probe_open_function),
    Probe("wrapped_module", _probe_wrapped_module),
    Probe("document_class", _probe_document_class),
    Probe("internal_path", _probe_internal_path),
)

_pdf_resolver = AdapterResolver(load_pdf_library, PDF_PROBES, library=PDF_LIBRARY)


def get_pdf_resolver() -> AdapterResolver:
    """Return the process-wide PDF resolver."""
    return _pdf_resolver


class PdfHandler(DocumentHandler):
    """
    Extracts text content from PDF files.

    Image-only (scanned) PDFs come back as empty text; OCR is not attempted.
    """

    FORMAT: ClassVar[DocumentFormat] = DocumentFormat.PDF

    def __init__(self, resolver: AdapterResolver | None = None):
        self._resolver = resolver or get_pdf_resolver()

    def extract(self, data: bytes) -> RawExtraction:
        """
        Extract text from a PDF buffer.

        Args:
            data: PDF file contents.

        Returns:
            RawExtraction with the text of every page.

        Raises:
            LibraryUnavailable: If PyMuPDF could not be resolved.
            ExtractionFailed: If the PDF cannot be read or is corrupted.
        """
        self._require_content(data)
        adapter = self._resolver.require()

        try:
            text = adapter(data)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionFailed(f"Unexpected error: {e}", cause=e) from e

        if not isinstance(text, str):
            raise ExtractionFailed(f"PDF adapter returned {type(text).__name__}, expected text")

        return RawExtraction(text=text)
