"""Validation of candidate source documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .backends import BackendDocument, ImpositionBackend, PypdfBackend
from .exceptions import DocumentRejectedError
from .utils import get_logger

LOGGER = get_logger("pdfimposex.validators")

MIN_DOCUMENT_SIZE = 1024
PDF_MAGIC = b"%PDF-"

BAD_HEADER_MESSAGE = "Not a valid PDF (bad header or too small)"
EMPTY_DOCUMENT_MESSAGE = "0 pages"


@dataclass(eq=False)
class OpenedDocument:
    """A parsed source document shared by all of its page references.

    Instances compare and hash by identity so they can key per-document
    bookkeeping during assembly.
    """

    name: str
    document: BackendDocument
    backend: ImpositionBackend

    @property
    def page_count(self) -> int:
        return self.backend.page_count(self.document)

    def page_size(self, index: int) -> Tuple[float, float]:
        return self.backend.page_size(self.document, index)


def is_probably_pdf(data: bytes) -> bool:
    """Cheap pre-check on size and the ``%PDF-`` signature."""

    if len(data) < MIN_DOCUMENT_SIZE:
        return False
    return bytes(data[: len(PDF_MAGIC)]) == PDF_MAGIC


def validate_document(
    name: str,
    data: bytes,
    backend: Optional[ImpositionBackend] = None,
) -> OpenedDocument:
    """Open *data* and return an :class:`OpenedDocument`.

    Raises:
        DocumentRejectedError: If the buffer is too small, lacks the PDF
            signature, cannot be parsed or contains no pages. The message
            is suitable for reporting back to the caller.
    """

    if not is_probably_pdf(data):
        raise DocumentRejectedError(BAD_HEADER_MESSAGE)

    backend = backend or PypdfBackend()
    document = backend.open(bytes(data))
    opened = OpenedDocument(name=name, document=document, backend=backend)

    if opened.page_count == 0:
        raise DocumentRejectedError(EMPTY_DOCUMENT_MESSAGE)

    LOGGER.debug("Validated %s (%d pages)", name, opened.page_count)
    return opened


def check_document(
    name: str,
    data: bytes,
    backend: Optional[ImpositionBackend] = None,
) -> Tuple[bool, str]:
    """Return ``(True, "")`` for a usable document, ``(False, reason)`` otherwise."""

    try:
        validate_document(name, data, backend)
    except DocumentRejectedError as exc:
        return False, exc.message
    return True, ""


__all__ = [
    "BAD_HEADER_MESSAGE",
    "EMPTY_DOCUMENT_MESSAGE",
    "MIN_DOCUMENT_SIZE",
    "OpenedDocument",
    "PDF_MAGIC",
    "check_document",
    "is_probably_pdf",
    "validate_document",
]
