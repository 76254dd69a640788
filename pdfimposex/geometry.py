"""Sheet and cell geometry for N-up imposition."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .utils import mm_to_pt


class Paper(str, Enum):
    """Supported output paper kinds."""

    A4 = "A4"
    A3 = "A3"


class Orientation(str, Enum):
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


# Portrait axis lengths in points.
PAPER_SIZES: dict[Paper, Tuple[float, float]] = {
    Paper.A4: (595.0, 842.0),
    Paper.A3: (842.0, 1191.0),
}


@dataclass(frozen=True)
class Grid:
    """Number of columns and rows of cells on a sheet."""

    cols: int
    rows: int

    @property
    def capacity(self) -> int:
        return self.cols * self.rows

    @classmethod
    def parse(cls, value: str) -> "Grid":
        """Parse the ``"<cols>x<rows>"`` notation, e.g. ``"4x2"``."""

        cols, sep, rows = value.strip().lower().partition("x")
        if not sep:
            raise ValueError(f"Grid must look like '<cols>x<rows>', got {value!r}")
        return cls(cols=int(cols), rows=int(rows))

    def __str__(self) -> str:
        return f"{self.cols}x{self.rows}"


@dataclass(frozen=True)
class LayoutConfig:
    """Validated layout parameters; margin and gap are in millimetres."""

    paper: Paper = Paper.A4
    orientation: Orientation = Orientation.LANDSCAPE
    grid: Grid = Grid(4, 2)
    margin_mm: float = 6.0
    gap_mm: float = 3.0

    def __post_init__(self) -> None:
        # Accept plain strings such as "A3", "portrait" or "2x4".
        object.__setattr__(self, "paper", Paper(self.paper))
        object.__setattr__(self, "orientation", Orientation(self.orientation))
        if isinstance(self.grid, str):
            object.__setattr__(self, "grid", Grid.parse(self.grid))


@dataclass(frozen=True)
class Cell:
    """A rectangular slot on a sheet, in PDF points with a bottom-left origin."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Geometry:
    sheet_width: float
    sheet_height: float
    cols: int
    rows: int
    cells: Tuple[Cell, ...]

    @property
    def capacity(self) -> int:
        return len(self.cells)


def sheet_size(paper: Paper, orientation: Orientation) -> Tuple[float, float]:
    """Return the ``(width, height)`` of a sheet in points."""

    width, height = PAPER_SIZES[Paper(paper)]
    if Orientation(orientation) is Orientation.LANDSCAPE:
        width, height = height, width
    return width, height


def compute_geometry(config: LayoutConfig) -> Geometry:
    """Compute the sheet size and the row-major cell table for *config*.

    Cell 0 is the top-left cell. Because PDF coordinates grow upwards the
    row index is inverted when computing ``y``. Margins and gaps that
    leave no usable room produce zero or negative cell sizes rather than
    an error; range checking belongs to the caller.
    """

    width, height = sheet_size(config.paper, config.orientation)
    cols, rows = config.grid.cols, config.grid.rows
    margin = mm_to_pt(config.margin_mm)
    gap = mm_to_pt(config.gap_mm)

    cell_width = (width - 2 * margin - (cols - 1) * gap) / cols
    cell_height = (height - 2 * margin - (rows - 1) * gap) / rows

    cells = []
    for row in range(rows):
        y = height - margin - (row + 1) * cell_height - row * gap
        for col in range(cols):
            x = margin + col * (cell_width + gap)
            cells.append(Cell(x=x, y=y, width=cell_width, height=cell_height))

    return Geometry(
        sheet_width=width,
        sheet_height=height,
        cols=cols,
        rows=rows,
        cells=tuple(cells),
    )


__all__ = [
    "Cell",
    "Geometry",
    "Grid",
    "LayoutConfig",
    "Orientation",
    "PAPER_SIZES",
    "Paper",
    "compute_geometry",
    "sheet_size",
]
