"""pypdf backend implementation for the imposition engine."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Mapping, Tuple

from pypdf import PageObject, PdfReader, PdfWriter, Transformation
from pypdf.errors import PdfReadError

from ..exceptions import DocumentRejectedError
from ..utils import get_logger
from .base import BackendDocument, ImpositionBackend

if TYPE_CHECKING:  # pragma: no cover
    from ..assembler import Placement

LOGGER = get_logger("pdfimposex.backends.pypdf")


def _media_box_size(page: PageObject) -> Tuple[float, float]:
    box = page.mediabox
    return float(box.width), float(box.height)


@dataclass(eq=False)
class PypdfDocument(BackendDocument):
    reader: PdfReader
    sizes: List[Tuple[float, float]] = field(default_factory=list)

    def get_page(self, index: int) -> PageObject:
        return self.reader.pages[index]

    def page_size(self, index: int) -> Tuple[float, float]:
        if index < len(self.sizes):
            return self.sizes[index]
        return _media_box_size(self.reader.pages[index])


class PypdfBackend(ImpositionBackend):
    """Backend implementation that uses `pypdf` under the hood."""

    def open(self, data: bytes) -> PypdfDocument:
        # Pages are read lazily; sizing every page here surfaces a broken
        # page tree as a rejection of this input.
        try:
            reader = PdfReader(io.BytesIO(data))
            if reader.is_encrypted:
                self._try_empty_password(reader)
            sizes = [_media_box_size(page) for page in reader.pages]
        except PdfReadError as exc:
            raise DocumentRejectedError(str(exc) or "Corrupted or invalid PDF") from exc
        except Exception as exc:  # pypdf raises a wide range of errors on broken input
            raise DocumentRejectedError(str(exc) or exc.__class__.__name__) from exc

        return PypdfDocument(num_pages=len(sizes), file_size=len(data), reader=reader, sizes=sizes)

    @staticmethod
    def _try_empty_password(reader: PdfReader) -> None:
        # Owner-password-only files open with an empty user password; anything
        # stronger fails later when the page tree is read.
        LOGGER.debug("Attempting to open encrypted PDF with an empty password")
        try:
            reader.decrypt("")
        except Exception as exc:  # pragma: no cover - decrypt errors vary
            LOGGER.debug("Empty-password decrypt failed: %s", exc)

    def page_count(self, document: BackendDocument) -> int:
        return document.num_pages

    def page_size(self, document: BackendDocument, index: int) -> Tuple[float, float]:
        return document.page_size(index)

    def new_document(self) -> PdfWriter:
        return PdfWriter()

    def add_sheet(self, output: PdfWriter, width: float, height: float) -> PageObject:
        return output.add_blank_page(width=width, height=height)

    def place_page(
        self,
        sheet: PageObject,
        document: BackendDocument,
        index: int,
        placement: "Placement",
    ) -> None:
        page = document.get_page(index)
        box = page.mediabox
        # Media boxes do not always start at the origin.
        tx = placement.x - float(box.left) * placement.scale
        ty = placement.y - float(box.bottom) * placement.scale
        transform = Transformation().scale(sx=placement.scale, sy=placement.scale).translate(tx=tx, ty=ty)
        sheet.merge_transformed_page(page, transform)

    def sheet_count(self, output: PdfWriter) -> int:
        return len(output.pages)

    def set_metadata(self, output: PdfWriter, metadata: Mapping[str, str]) -> None:
        entries = {
            key if key.startswith("/") else f"/{key}": str(value)
            for key, value in metadata.items()
            if value is not None
        }
        if entries:
            output.add_metadata(entries)

    def serialize(self, output: PdfWriter) -> bytes:
        buffer = io.BytesIO()
        output.write(buffer)
        return buffer.getvalue()
