"""
docingest - document ingestion and text extraction.

Turns uploaded resumes, job descriptions and similar documents into
normalized plain text for downstream analysis. Supported formats:
- PDF (.pdf)
- Word (.docx)
- Plain text (.txt)
"""

from docingest.extractors.base import (
    EmptyResult,
    ExtractionError,
    ExtractionFailed,
    LibraryUnavailable,
    UnsupportedFormat,
)
from docingest.formats import DocumentFormat, detect
from docingest.models import ExtractionResult
from docingest.normalizer import normalize
from docingest.service import ExtractionService, extract_file, extract_text

__version__ = "1.0.0"

__all__ = [
    "DocumentFormat",
    "EmptyResult",
    "ExtractionError",
    "ExtractionFailed",
    "ExtractionResult",
    "ExtractionService",
    "LibraryUnavailable",
    "UnsupportedFormat",
    "detect",
    "extract_file",
    "extract_text",
    "normalize",
]
