from __future__ import annotations

from datetime import datetime

import pytest

from pdfimposex.config import (
    MAX_FILE_SIZE,
    MAX_FILES,
    ImpositionOptions,
    check_upload_limits,
    output_filename,
)
from pdfimposex.exceptions import InvalidOptionsError, UploadLimitError
from pdfimposex.geometry import Grid, Orientation, Paper


def test_defaults_apply_to_blank_fields() -> None:
    options = ImpositionOptions.from_form(None, "", None, None, "")

    assert options == ImpositionOptions("A4", "landscape", "4x2", 6.0, 3.0)
    layout = options.to_layout()
    assert layout.paper is Paper.A4
    assert layout.orientation is Orientation.LANDSCAPE
    assert layout.grid == Grid(4, 2)


def test_paper_is_case_insensitive() -> None:
    options = ImpositionOptions.from_form("a3", "portrait", "2x4", "0", "50")
    assert options.to_layout().paper is Paper.A3
    assert options.to_layout().grid == Grid(2, 4)


@pytest.mark.parametrize(
    ("fields", "message"),
    [
        ({"paper": "Letter"}, "Paper must be A4 or A3"),
        ({"orientation": "sideways"}, "Orientation must be landscape or portrait"),
        ({"layout": "3x3"}, "Layout must be 4x2 or 2x4"),
        ({"margin_mm": "-1"}, "margin_mm must be between 0 and 50"),
        ({"margin_mm": "abc"}, "margin_mm must be between 0 and 50"),
        ({"gap_mm": "50.5"}, "gap_mm must be between 0 and 50"),
    ],
)
def test_invalid_options(fields: dict[str, str], message: str) -> None:
    with pytest.raises(InvalidOptionsError) as excinfo:
        ImpositionOptions.from_form(**fields)
    assert excinfo.value.message == message


def test_upload_limits() -> None:
    check_upload_limits([("a.pdf", 10)])

    with pytest.raises(UploadLimitError, match="No files uploaded"):
        check_upload_limits([])
    with pytest.raises(UploadLimitError, match=r"Too many files \(801\)\. Maximum is 800\."):
        check_upload_limits([("a.pdf", 1)] * (MAX_FILES + 1))
    with pytest.raises(UploadLimitError, match='File "big.pdf" exceeds 100 MB limit.'):
        check_upload_limits([("big.pdf", MAX_FILE_SIZE + 1)])


def test_output_filename() -> None:
    assert output_filename(datetime(2024, 1, 31, 15, 45, 0)) == "LOT_20240131_154500.pdf"
    assert output_filename().startswith("LOT_")
