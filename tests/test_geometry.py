from __future__ import annotations

import pytest

from pdfimposex.geometry import (
    Grid,
    LayoutConfig,
    Orientation,
    Paper,
    compute_geometry,
    sheet_size,
)
from pdfimposex.utils import MM_TO_PT


@pytest.mark.parametrize(
    ("paper", "orientation", "expected"),
    [
        (Paper.A4, Orientation.PORTRAIT, (595.0, 842.0)),
        (Paper.A4, Orientation.LANDSCAPE, (842.0, 595.0)),
        (Paper.A3, Orientation.PORTRAIT, (842.0, 1191.0)),
        (Paper.A3, Orientation.LANDSCAPE, (1191.0, 842.0)),
    ],
)
def test_sheet_size(paper: Paper, orientation: Orientation, expected: tuple[float, float]) -> None:
    assert sheet_size(paper, orientation) == expected


def test_cells_are_row_major_from_top_left() -> None:
    config = LayoutConfig(grid=Grid(4, 2), margin_mm=6.0, gap_mm=3.0)
    geometry = compute_geometry(config)

    margin = 6.0 * MM_TO_PT
    gap = 3.0 * MM_TO_PT
    cell_w = (842 - 2 * margin - 3 * gap) / 4
    cell_h = (595 - 2 * margin - 1 * gap) / 2

    assert geometry.capacity == 8
    first = geometry.cells[0]
    assert first.x == pytest.approx(margin)
    assert first.y == pytest.approx(595 - margin - cell_h)
    assert first.width == pytest.approx(cell_w)
    assert first.height == pytest.approx(cell_h)

    # same row, moving right
    assert geometry.cells[1].x == pytest.approx(margin + cell_w + gap)
    assert geometry.cells[1].y == pytest.approx(first.y)
    # next row starts back at the left edge, lower on the sheet
    assert geometry.cells[4].x == pytest.approx(first.x)
    assert geometry.cells[4].y == pytest.approx(595 - margin - 2 * cell_h - gap)
    assert geometry.cells[4].y < first.y


def test_cells_tile_the_sheet_without_margin_or_gap() -> None:
    geometry = compute_geometry(
        LayoutConfig(paper=Paper.A3, orientation=Orientation.PORTRAIT, grid=Grid(2, 4), margin_mm=0, gap_mm=0)
    )

    assert geometry.sheet_width == 842.0
    assert geometry.sheet_height == 1191.0
    assert sum(cell.width for cell in geometry.cells[:2]) == pytest.approx(842.0)
    assert sum(cell.height for cell in geometry.cells[::2]) == pytest.approx(1191.0)
    assert geometry.cells[-1].x + geometry.cells[-1].width == pytest.approx(842.0)
    assert geometry.cells[-1].y == pytest.approx(0.0)


def test_non_square_cells_are_computed_per_axis() -> None:
    geometry = compute_geometry(LayoutConfig(grid=Grid(2, 4), margin_mm=10, gap_mm=5))
    cell = geometry.cells[0]
    assert cell.width != pytest.approx(cell.height)


def test_degenerate_layout_returns_negative_cells() -> None:
    geometry = compute_geometry(
        LayoutConfig(orientation=Orientation.PORTRAIT, grid=Grid(4, 2), margin_mm=50, gap_mm=50)
    )

    assert geometry.capacity == 8
    assert geometry.cells[0].width < 0


def test_grid_parse() -> None:
    assert Grid.parse("4x2") == Grid(4, 2)
    assert Grid.parse(" 2X4 ") == Grid(2, 4)
    assert str(Grid(2, 4)) == "2x4"
    assert Grid(4, 2).capacity == 8
    with pytest.raises(ValueError):
        Grid.parse("42")


def test_layout_config_coerces_strings() -> None:
    config = LayoutConfig(paper="A3", orientation="portrait", grid="2x4")
    assert config.paper is Paper.A3
    assert config.orientation is Orientation.PORTRAIT
    assert config.grid == Grid(2, 4)
    with pytest.raises(ValueError):
        LayoutConfig(paper="Letter")
