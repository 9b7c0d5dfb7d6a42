"""
Format handlers.

One handler per supported document format:
- PDF (.pdf), through a resolved PyMuPDF adapter
- Word (.docx)
- Plain text (.txt)
"""

from docingest.extractors.base import (
    DocumentHandler,
    EmptyResult,
    ExtractionError,
    ExtractionFailed,
    LibraryUnavailable,
    RawExtraction,
    UnsupportedFormat,
)
from docingest.extractors.factory import HANDLERS, create_handler
from docingest.extractors.pdf_extractor import get_pdf_resolver

__all__ = [
    "DocumentHandler",
    "EmptyResult",
    "ExtractionError",
    "ExtractionFailed",
    "HANDLERS",
    "LibraryUnavailable",
    "RawExtraction",
    "UnsupportedFormat",
    "create_handler",
    "get_pdf_resolver",
]
