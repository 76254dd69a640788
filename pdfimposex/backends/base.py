"""Backend protocol for opening, placing and writing PDF pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Protocol, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from ..assembler import Placement


@dataclass(eq=False)
class BackendDocument:
    """Represents a parsed source document with backend-specific helpers."""

    num_pages: int
    file_size: int

    def get_page(self, index: int) -> object:
        raise NotImplementedError

    def page_size(self, index: int) -> Tuple[float, float]:
        raise NotImplementedError


class ImpositionBackend(Protocol):
    """Capabilities the engine needs from a concrete document codec."""

    def open(self, data: bytes) -> BackendDocument:
        """Parse *data* and return a queryable document.

        Implementations raise :class:`~pdfimposex.exceptions.DocumentRejectedError`
        carrying the parser's message when the structure cannot be read.
        """

    def page_count(self, document: BackendDocument) -> int:
        """Return the number of pages of *document*."""

    def page_size(self, document: BackendDocument, index: int) -> Tuple[float, float]:
        """Return the native ``(width, height)`` of a page in points."""

    def new_document(self) -> object:
        """Return an empty output document."""

    def add_sheet(self, output: object, width: float, height: float) -> object:
        """Append a blank sheet of the given size to *output* and return it."""

    def place_page(
        self,
        sheet: object,
        document: BackendDocument,
        index: int,
        placement: "Placement",
    ) -> None:
        """Draw page *index* of *document* onto *sheet* as described by *placement*."""

    def sheet_count(self, output: object) -> int:
        """Return the number of sheets in *output*."""

    def set_metadata(self, output: object, metadata: Mapping[str, str]) -> None:
        """Apply document information entries to *output*."""

    def serialize(self, output: object) -> bytes:
        """Return *output* as a complete, standalone byte string."""
