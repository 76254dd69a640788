"""Placement of flattened pages onto grid sheets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .backends import ImpositionBackend, PypdfBackend
from .exceptions import AssemblyError
from .flattener import PageRef
from .geometry import Cell, Geometry
from .utils import get_logger
from .validators import OpenedDocument

LOGGER = get_logger("pdfimposex.assembler")


@dataclass(frozen=True)
class Placement:
    """Where and how large a page is drawn on its sheet, in points."""

    page: PageRef
    cell_index: int
    x: float
    y: float
    width: float
    height: float
    scale: float


@dataclass
class Sheet:
    index: int
    placements: List[Placement] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.placements)


class DocumentCursor:
    """Hands out the pages of one shared document in flatten order."""

    def __init__(self, document: OpenedDocument) -> None:
        self.document = document
        self.position = 0

    def take(self, page: PageRef) -> int:
        if page.document is not self.document:
            raise AssemblyError(
                f"Page {page.global_order} does not belong to {self.document.name}"
            )
        if page.page_index != self.position:
            raise AssemblyError(
                f"Page {page.global_order} of {self.document.name} expected at index "
                f"{self.position}, got {page.page_index}"
            )
        self.position += 1
        return page.page_index

    @property
    def exhausted(self) -> bool:
        return self.position >= self.document.page_count


class CursorTable:
    """One :class:`DocumentCursor` per source document seen so far."""

    def __init__(self) -> None:
        self._cursors: Dict[OpenedDocument, DocumentCursor] = {}

    def take(self, page: PageRef) -> int:
        cursor = self._cursors.get(page.document)
        if cursor is None:
            cursor = self._cursors[page.document] = DocumentCursor(page.document)
        return cursor.take(page)

    def __len__(self) -> int:
        return len(self._cursors)


def chunk_pages(pages: Sequence[PageRef], size: int) -> Iterator[Sequence[PageRef]]:
    """Yield consecutive chunks of *size* pages; the last one may be short."""

    if size < 1:
        raise ValueError("Chunk size must be at least 1")
    for start in range(0, len(pages), size):
        yield pages[start : start + size]


def fit_to_cell(width: float, height: float, cell: Cell) -> Tuple[float, float, float, float, float]:
    """Scale a ``width`` x ``height`` page into *cell* and centre it.

    Returns ``(scale, x, y, scaled_width, scaled_height)``. The scale is
    the largest one that keeps the whole page inside the cell; degenerate
    pages or cells collapse to a zero-area placement at the cell centre.
    """

    if width <= 0 or height <= 0:
        scale = 0.0
    else:
        scale = max(0.0, min(cell.width / width, cell.height / height))
    scaled_width = width * scale
    scaled_height = height * scale
    x = cell.x + (cell.width - scaled_width) / 2
    y = cell.y + (cell.height - scaled_height) / 2
    return scale, x, y, scaled_width, scaled_height


def plan_sheets(pages: Sequence[PageRef], geometry: Geometry) -> List[Sheet]:
    """Assign *pages* to sheets and cells without rendering anything."""

    cursors = CursorTable()
    sheets: List[Sheet] = []

    for sheet_index, chunk in enumerate(chunk_pages(pages, geometry.capacity)):
        sheet = Sheet(index=sheet_index)
        for position, page in enumerate(chunk):
            page_index = cursors.take(page)
            width, height = page.document.page_size(page_index)
            cell = geometry.cells[position]
            scale, x, y, scaled_width, scaled_height = fit_to_cell(width, height, cell)
            sheet.placements.append(
                Placement(
                    page=page,
                    cell_index=position,
                    x=x,
                    y=y,
                    width=scaled_width,
                    height=scaled_height,
                    scale=scale,
                )
            )
        sheets.append(sheet)

    LOGGER.debug(
        "Planned %d sheet(s) for %d page(s) from %d document(s)",
        len(sheets),
        len(pages),
        len(cursors),
    )
    return sheets


def assemble_sheets(
    pages: Sequence[PageRef],
    geometry: Geometry,
    output: object,
    backend: Optional[ImpositionBackend] = None,
) -> List[Sheet]:
    """Plan the sheets for *pages* and draw them into *output*."""

    backend = backend or PypdfBackend()
    sheets = plan_sheets(pages, geometry)

    for sheet in sheets:
        target = backend.add_sheet(output, geometry.sheet_width, geometry.sheet_height)
        for placement in sheet.placements:
            page = placement.page
            LOGGER.debug(
                "Sheet %d cell %d: %s page %d at scale %.4f",
                sheet.index,
                placement.cell_index,
                page.document.name,
                page.page_index,
                placement.scale,
            )
            backend.place_page(target, page.document.document, page.page_index, placement)

    return sheets


__all__ = [
    "CursorTable",
    "DocumentCursor",
    "Placement",
    "Sheet",
    "assemble_sheets",
    "chunk_pages",
    "fit_to_cell",
    "plan_sheets",
]
