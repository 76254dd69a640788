from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import NameObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Blank pages compress to a few hundred bytes; the padding keeps fixtures
# above the minimum document size.
PADDING = "pdfimposex test fixture " * 60

PdfBytesFactory = Callable[..., bytes]


def _write(writer: PdfWriter) -> bytes:
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def pdf_bytes_factory() -> PdfBytesFactory:
    def _create(
        pages: Sequence[tuple[float, float]] = ((595, 842),),
        *,
        title: str | None = None,
        user_password: str | None = None,
        owner_password: str | None = None,
    ) -> bytes:
        writer = PdfWriter()
        for width, height in pages:
            writer.add_blank_page(width=width, height=height)
        metadata = {"/Producer": "pdfimposex-tests", "/Subject": PADDING}
        if title is not None:
            metadata["/Title"] = title
        writer.add_metadata(metadata)
        if user_password is not None:
            writer.encrypt(
                user_password=user_password,
                owner_password=owner_password or "owner",
                algorithm="RC4-128",
            )
        return _write(writer)

    return _create


@pytest.fixture()
def one_page_pdf(pdf_bytes_factory: PdfBytesFactory) -> bytes:
    return pdf_bytes_factory()


@pytest.fixture()
def three_page_pdf(pdf_bytes_factory: PdfBytesFactory) -> bytes:
    return pdf_bytes_factory([(595, 842), (842, 595), (300, 300)])


@pytest.fixture()
def empty_pdf() -> bytes:
    writer = PdfWriter()
    writer.add_metadata({"/Subject": PADDING})
    return _write(writer)


@pytest.fixture()
def bad_header() -> bytes:
    return b"GIF89a" + b"\x00" * 2048


@pytest.fixture()
def pdf_factory(tmp_path: Path, pdf_bytes_factory: PdfBytesFactory) -> Callable[..., Path]:
    def _create(filename: str, pages: Sequence[tuple[float, float]] = ((595, 842),)) -> Path:
        path = tmp_path / filename
        path.write_bytes(pdf_bytes_factory(pages))
        return path

    return _create


@pytest.fixture()
def no_media_box_pdf() -> bytes:
    writer = PdfWriter()
    page = writer.add_blank_page(width=200, height=200)
    del page[NameObject("/MediaBox")]
    writer.add_metadata({"/Subject": PADDING})
    return _write(writer)
