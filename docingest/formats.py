"""
Format detection for uploaded documents.

The declared filename extension is the only input to `detect`. Content
sniffing is available separately for diagnostics but never changes
which handler is selected.
"""

import zipfile
from enum import Enum
from io import BytesIO
from pathlib import PurePath


class DocumentFormat(str, Enum):
    """Closed set of document formats the extraction service understands."""

    PDF = "pdf"
    DOCX = "docx"
    PLAIN_TEXT = "txt"

    @property
    def extension(self) -> str:
        return f".{self.value}"


_BY_EXTENSION: dict[str, DocumentFormat] = {fmt.extension: fmt for fmt in DocumentFormat}

_PDF_MAGIC = b"%PDF-"
_ZIP_MAGIC = b"PK\x03\x04"
_DOCX_MAIN_PART = "word/document.xml"

# zipfile raises more than BadZipFile on corrupted headers
_DAMAGED_ZIP_ERRORS = (zipfile.BadZipFile, NotImplementedError, ValueError, EOFError, OSError)


def extension_of(filename: str) -> str:
    """
    Return the lowercased extension of a filename or path.

    Args:
        filename: File name or path, possibly empty.

    Returns:
        The extension including the leading dot, or "" if there is none.
    """
    return PurePath(filename).suffix.lower()


def detect(filename: str) -> DocumentFormat | None:
    """
    Map a filename to its document format.

    Only the extension is significant and it is compared case-insensitively,
    so "resume.PDF" and "resume.pdf" both map to `DocumentFormat.PDF`.

    Args:
        filename: File name or path of the uploaded document.

    Returns:
        The matching DocumentFormat, or None for unrecognized extensions.
    """
    return _BY_EXTENSION.get(extension_of(filename))


def supported_extensions() -> tuple[str, ...]:
    """Return every recognized extension, sorted."""
    return tuple(sorted(_BY_EXTENSION))


def is_zip(data: bytes) -> bool:
    """Return True if the buffer starts with a ZIP local file header."""
    return data.startswith(_ZIP_MAGIC)


def sniff(data: bytes) -> DocumentFormat | None:
    """
    Guess a binary format from the leading bytes of a buffer.

    Plain text has no signature, so only PDF and DOCX can be recognized.
    Never raises: a damaged archive is reported as unrecognized.
    """
    if data.startswith(_PDF_MAGIC):
        return DocumentFormat.PDF
    if is_zip(data):
        try:
            with zipfile.ZipFile(BytesIO(data)) as archive:
                if _DOCX_MAIN_PART in archive.namelist():
                    return DocumentFormat.DOCX
        except _DAMAGED_ZIP_ERRORS:
            return None
    return None
