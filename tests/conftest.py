"""Shared fixtures for the test suite."""

import pymupdf
import pytest


@pytest.fixture
def pdf_bytes():
    """Factory building a PDF whose pages read "<label> page <n>"."""

    def _build(label: str, pages: int) -> bytes:
        doc = pymupdf.open()
        for i in range(pages):
            page = doc.new_page(width=612, height=792)
            page.insert_text((100, 100), f'{label} page {i + 1}')
        data = doc.tobytes()
        doc.close()
        return data

    return _build


@pytest.fixture
def make_pdf(tmp_path, pdf_bytes):
    """Factory writing a labelled PDF to tmp_path and returning its path."""

    def _make(label: str, pages: int):
        path = tmp_path / f'{label}.pdf'
        path.write_bytes(pdf_bytes(label, pages))
        return path

    return _make


@pytest.fixture
def page_texts():
    """Return the stripped text of every page of a PDF path or byte string."""

    def _texts(source) -> list:
        if isinstance(source, (bytes, bytearray)):
            doc = pymupdf.open(stream=bytes(source), filetype='pdf')
        else:
            doc = pymupdf.open(str(source))
        try:
            return [page.get_text().strip() for page in doc]
        finally:
            doc.close()

    return _texts
