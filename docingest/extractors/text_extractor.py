"""
Plain text document handler.

Decodes .txt uploads as strict UTF-8; no library dependency.
"""

from typing import ClassVar

from docingest.extractors.base import DocumentHandler, ExtractionFailed, RawExtraction
from docingest.formats import DocumentFormat


class PlainTextHandler(DocumentHandler):
    """Extracts text from UTF-8 encoded plain text files."""

    FORMAT: ClassVar[DocumentFormat] = DocumentFormat.PLAIN_TEXT

    ENCODING: ClassVar[str] = "utf-8"

    def extract(self, data: bytes) -> RawExtraction:
        """
        Decode a plain text buffer.

        An empty buffer decodes to empty text; the service reports that as
        an empty result rather than a failure.

        Raises:
            ExtractionFailed: If the buffer is not valid UTF-8.
        """
        try:
            return RawExtraction(text=data.decode(self.ENCODING))
        except UnicodeDecodeError as e:
            raise ExtractionFailed(
                f"File is not valid {self.ENCODING} text (byte {e.start})", cause=e
            ) from e
