"""Custom exceptions for the :mod:`pdfimposex` package."""

from __future__ import annotations


class PdfImposeError(Exception):
    """Base exception for all imposition errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown imposition error occurred."


class DocumentRejectedError(PdfImposeError):
    """Raised when a source document cannot contribute pages."""

    @property
    def default_message(self) -> str:
        return "Not a valid PDF (bad header or too small)"


class AssemblyError(PdfImposeError):
    """Raised when pages cannot be placed onto their sheets."""

    @property
    def default_message(self) -> str:
        return "Unable to assemble imposed sheets."


class EncodingError(PdfImposeError):
    """Raised when the imposed document cannot be serialised."""

    @property
    def default_message(self) -> str:
        return "Unable to serialise the imposed PDF."


class InvalidOptionsError(PdfImposeError, ValueError):
    """Raised when layout options supplied by a caller are out of range."""

    @property
    def default_message(self) -> str:
        return "Invalid imposition options."


class UploadLimitError(PdfImposeError, ValueError):
    """Raised when a batch exceeds the file count or file size limits."""

    @property
    def default_message(self) -> str:
        return "Upload limits exceeded."
