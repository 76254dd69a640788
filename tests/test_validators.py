from __future__ import annotations

import pytest

from pdfimposex.exceptions import DocumentRejectedError
from pdfimposex.validators import (
    BAD_HEADER_MESSAGE,
    EMPTY_DOCUMENT_MESSAGE,
    MIN_DOCUMENT_SIZE,
    check_document,
    is_probably_pdf,
    validate_document,
)


def test_fixture_is_above_minimum_size(one_page_pdf: bytes) -> None:
    assert len(one_page_pdf) >= MIN_DOCUMENT_SIZE
    assert is_probably_pdf(one_page_pdf)


def test_validate_document_success(three_page_pdf: bytes) -> None:
    opened = validate_document("three.pdf", three_page_pdf)

    assert opened.name == "three.pdf"
    assert opened.page_count == 3
    assert opened.page_size(1) == pytest.approx((842.0, 595.0))


def test_too_small_buffer_is_rejected(one_page_pdf: bytes) -> None:
    small = one_page_pdf[: MIN_DOCUMENT_SIZE - 1]
    assert not is_probably_pdf(small)
    with pytest.raises(DocumentRejectedError) as excinfo:
        validate_document("small.pdf", small)
    assert excinfo.value.message == BAD_HEADER_MESSAGE


def test_bad_magic_is_rejected(bad_header: bytes) -> None:
    with pytest.raises(DocumentRejectedError) as excinfo:
        validate_document("image.gif", bad_header)
    assert str(excinfo.value) == BAD_HEADER_MESSAGE


def test_unparseable_body_reports_parser_message() -> None:
    data = b"%PDF-1.7\n" + b"garbage " * 256
    with pytest.raises(DocumentRejectedError) as excinfo:
        validate_document("broken.pdf", data)
    assert excinfo.value.message
    assert excinfo.value.message != BAD_HEADER_MESSAGE


def test_zero_page_document_is_rejected(empty_pdf: bytes) -> None:
    with pytest.raises(DocumentRejectedError) as excinfo:
        validate_document("empty.pdf", empty_pdf)
    assert excinfo.value.message == EMPTY_DOCUMENT_MESSAGE


def test_owner_password_only_document_opens(pdf_bytes_factory) -> None:
    data = pdf_bytes_factory([(200, 200), (200, 200)], user_password="", owner_password="owner")
    opened = validate_document("protected.pdf", data)
    assert opened.page_count == 2


def test_user_password_document_is_rejected(pdf_bytes_factory) -> None:
    data = pdf_bytes_factory(user_password="secret", owner_password="owner")
    ok, reason = check_document("locked.pdf", data)
    assert not ok
    assert reason


def test_check_document_success(one_page_pdf: bytes) -> None:
    assert check_document("one.pdf", one_page_pdf) == (True, "")


def test_page_without_media_box_is_rejected(no_media_box_pdf: bytes) -> None:
    ok, reason = check_document("nobox.pdf", no_media_box_pdf)
    assert not ok
    assert reason
