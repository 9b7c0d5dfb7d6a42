"""
Handler registry.

Maps each `DocumentFormat` to the handler class that implements it.
"""

from docingest.extractors.base import DocumentHandler
from docingest.extractors.docx_extractor import DocxHandler
from docingest.extractors.pdf_extractor import PdfHandler
from docingest.extractors.resolver import AdapterResolver
from docingest.extractors.text_extractor import PlainTextHandler
from docingest.formats import DocumentFormat

HANDLERS: dict[DocumentFormat, type[DocumentHandler]] = {
    DocumentFormat.PDF: PdfHandler,
    DocumentFormat.DOCX: DocxHandler,
    DocumentFormat.PLAIN_TEXT: PlainTextHandler,
}


def create_handler(
    document_format: DocumentFormat,
    pdf_resolver: AdapterResolver | None = None,
) -> DocumentHandler:
    """
    Create the handler for a format.

    Args:
        document_format: Format detected for the upload.
        pdf_resolver: Resolver to use for PDFs. Defaults to the shared one.

    Returns:
        A handler instance for the format.
    """
    if document_format is DocumentFormat.PDF:
        return PdfHandler(pdf_resolver)
    return HANDLERS[document_format]()
