"""
Pytest configuration and fixtures.

Provides sample documents (generated with PyMuPDF and python-docx) and
fake PDF libraries exposing each calling convention the resolver knows.
"""

import zipfile
from collections.abc import Callable, Generator
from io import BytesIO
from types import SimpleNamespace
from typing import Any

import docx
import pymupdf
import pytest

from docingest.config import get_settings
from docingest.extractors import pdf_extractor
from docingest.extractors.pdf_extractor import PDF_PROBES
from docingest.extractors.resolver import AdapterResolver


# ==============================================================================
# Sample Text Fixtures
# ==============================================================================


@pytest.fixture
def sample_resume_text() -> str:
    """Sample resume text."""
    return (
        "Jane Doe\n"
        "Senior Backend Engineer\n"
        "Experience: Python, PostgreSQL, Kubernetes\n"
        "Built document ingestion pipelines for hiring platforms."
    )


@pytest.fixture
def three_paragraph_text() -> str:
    """Three paragraphs with trailing spaces on every line."""
    return (
        "Jane Doe   \n"
        "Software Engineer \n"
        "\n"
        "Summary of experience with Python services.\t \n"
        "Led a team of four.  \n"
        "\n"
        "Skills: Python, SQL, Docker   \n"
    )


# ==============================================================================
# Document Fixtures
# ==============================================================================


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Factory building a PDF with one page per text argument."""

    def _make(*pages: str) -> bytes:
        doc = pymupdf.open()
        for page_text in pages:
            page = doc.new_page()
            if page_text:
                page.insert_text((72, 72), page_text, fontsize=11)
        data = doc.tobytes()
        doc.close()
        return data

    return _make


@pytest.fixture
def resume_pdf(make_pdf: Callable[..., bytes]) -> bytes:
    """Two-page PDF with text on both pages."""
    return make_pdf("Jane Doe\nSenior Backend Engineer", "Skills: Python, SQL")


@pytest.fixture
def image_only_pdf() -> bytes:
    """Valid PDF whose only page contains vector graphics and no glyphs."""
    doc = pymupdf.open()
    page = doc.new_page()
    page.draw_rect(pymupdf.Rect(72, 72, 300, 200), color=(0, 0, 0), fill=(0.6, 0.6, 0.6))
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def resume_docx() -> bytes:
    """Word document with paragraphs and a skills table."""
    document = docx.Document()
    document.add_heading("Jane Doe", level=1)
    document.add_paragraph("Senior Backend Engineer")
    document.add_paragraph("")
    document.add_paragraph("Built document ingestion pipelines.")

    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Skill"
    table.cell(0, 1).text = "Years"
    table.cell(1, 0).text = "Python"
    table.cell(1, 1).text = "8"

    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def empty_docx() -> bytes:
    """Word document without any text."""
    buffer = BytesIO()
    docx.Document().save(buffer)
    return buffer.getvalue()


@pytest.fixture
def docx_like_zip() -> bytes:
    """Minimal ZIP holding only a Word main part, with fixed timestamps."""
    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        info = zipfile.ZipInfo("word/document.xml", date_time=(2024, 1, 1, 0, 0, 0))
        archive.writestr(info, "<w:document/>")
    return buffer.getvalue()


# ==============================================================================
# Fake PDF Libraries
# ==============================================================================


class FakePage:
    """Page exposing the current `get_text` method."""

    def __init__(self, text: str):
        self._text = text

    def get_text(self) -> str:
        return self._text


class LegacyPage:
    """Page exposing only the legacy camelCase `getText` method."""

    def __init__(self, text: str):
        self._text = text

    def getText(self) -> str:  # noqa: N802
        return self._text


class FakeDocument:
    """In-memory document; pages are separated by form feeds in the stream."""

    page_cls: type = FakePage

    def __init__(self, stream: bytes, filetype: str = "pdf"):
        if not stream.startswith(b"%PDF"):
            raise ValueError("cannot open broken document")
        body = stream[len(b"%PDF"):].decode("utf-8")
        self.pages = [self.page_cls(text) for text in body.split("\f")]
        self.closed = False

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self):
        return iter(self.pages)

    def close(self) -> None:
        self.closed = True


class LegacyDocument(FakeDocument):
    page_cls = LegacyPage


def _encode_fake_pdf(*pages: str) -> bytes:
    return b"%PDF" + "\f".join(pages).encode("utf-8")


@pytest.fixture
def fake_pdf() -> Callable[..., bytes]:
    """Encode pages in the format understood by the fake libraries."""
    return _encode_fake_pdf


@pytest.fixture
def open_function_library() -> SimpleNamespace:
    """Library exposing a top-level `open` function."""
    return SimpleNamespace(open=FakeDocument, Page=FakePage)


@pytest.fixture
def wrapped_library(open_function_library: SimpleNamespace) -> SimpleNamespace:
    """Library whose implementation is nested under a `fitz` attribute."""
    return SimpleNamespace(fitz=open_function_library)


@pytest.fixture
def document_class_library() -> SimpleNamespace:
    """Legacy library exposing only a `Document` class with camelCase pages."""
    return SimpleNamespace(Document=LegacyDocument, Page=LegacyPage)


@pytest.fixture
def unrecognized_library() -> SimpleNamespace:
    """Library with none of the known shapes."""
    return SimpleNamespace(version="99.0", render=lambda data: data)


@pytest.fixture
def make_resolver(monkeypatch: pytest.MonkeyPatch) -> Callable[[Any], AdapterResolver]:
    """
    Factory building a PDF resolver around a fixed library handle.

    The implementation-path probe is pointed at a module that does not
    exist, so an installed PyMuPDF cannot leak into the result.
    """
    monkeypatch.setattr(pdf_extractor, "_INTERNAL_MODULES", ("docingest_tests_missing.internal",))

    def _make(library: Any) -> AdapterResolver:
        return AdapterResolver(lambda: library, PDF_PROBES, library="FakePDF")

    return _make


# ==============================================================================
# Settings Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Make every test load settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
