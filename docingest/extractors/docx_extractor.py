"""
Microsoft Word document handler using python-docx.

Extracts raw text from .docx files (modern Word format); styling is
ignored. Legacy .doc files are not supported.
"""

from io import BytesIO
from typing import ClassVar

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table

from docingest.extractors.base import DocumentHandler, ExtractionFailed, RawExtraction
from docingest.formats import DocumentFormat


class DocxHandler(DocumentHandler):
    """
    Extracts text content from Word documents (.docx).

    Paragraphs and tables are emitted in document order; a table becomes
    one line per row with cells separated by " | ".
    """

    FORMAT: ClassVar[DocumentFormat] = DocumentFormat.DOCX

    def extract(self, data: bytes) -> RawExtraction:
        """
        Extract text from a Word document buffer.

        Args:
            data: .docx file contents.

        Returns:
            RawExtraction with paragraph and table text.

        Raises:
            ExtractionFailed: If the buffer is not a valid .docx package.
        """
        self._require_content(data)

        try:
            doc = Document(BytesIO(data))
            text_parts: list[str] = []

            for block in doc.iter_inner_content():
                if isinstance(block, Table):
                    block_text = self._extract_table(block)
                else:
                    block_text = block.text if block.text.strip() else ""
                if block_text:
                    text_parts.append(block_text)

        except PackageNotFoundError as e:
            raise ExtractionFailed(
                "File is not a valid .docx document or is corrupted", cause=e
            ) from e
        except Exception as e:
            raise ExtractionFailed(f"Unexpected error: {e}", cause=e) from e

        return RawExtraction(text="\n\n".join(text_parts))

    def _extract_table(self, table: Table) -> str:
        """
        Convert a Word table to text.

        Args:
            table: python-docx Table object.

        Returns:
            One line per non-empty row.
        """
        rows: list[str] = []

        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells]
            if any(cells):
                rows.append(" | ".join(cells))

        return "\n".join(rows)
