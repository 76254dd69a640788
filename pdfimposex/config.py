"""Caller-side option parsing and upload limits."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple, Union

from .exceptions import InvalidOptionsError, UploadLimitError
from .geometry import Grid, LayoutConfig, Orientation, Paper

MAX_FILES = 800
MAX_FILE_SIZE = 100 * 1024 * 1024

MIN_SPACING_MM = 0.0
MAX_SPACING_MM = 50.0

SUPPORTED_LAYOUTS = ("4x2", "2x4")

DEFAULT_PAPER = "A4"
DEFAULT_ORIENTATION = "landscape"
DEFAULT_LAYOUT = "4x2"
DEFAULT_MARGIN_MM = 6.0
DEFAULT_GAP_MM = 3.0

NumberLike = Union[str, float, int, None]


@dataclass(frozen=True)
class ImpositionOptions:
    """Imposition options as received from a form or command line."""

    paper: str = DEFAULT_PAPER
    orientation: str = DEFAULT_ORIENTATION
    layout: str = DEFAULT_LAYOUT
    margin_mm: float = DEFAULT_MARGIN_MM
    gap_mm: float = DEFAULT_GAP_MM

    @classmethod
    def from_form(
        cls,
        paper: Optional[str] = None,
        orientation: Optional[str] = None,
        layout: Optional[str] = None,
        margin_mm: NumberLike = None,
        gap_mm: NumberLike = None,
    ) -> "ImpositionOptions":
        """Build validated options from raw strings, applying defaults for blanks."""

        options = cls(
            paper=(paper or DEFAULT_PAPER).strip().upper(),
            orientation=(orientation or DEFAULT_ORIENTATION).strip(),
            layout=(layout or DEFAULT_LAYOUT).strip(),
            margin_mm=_parse_number(margin_mm, DEFAULT_MARGIN_MM),
            gap_mm=_parse_number(gap_mm, DEFAULT_GAP_MM),
        )
        options.validate()
        return options

    def validate(self) -> None:
        if self.paper not in {paper.value for paper in Paper}:
            raise InvalidOptionsError("Paper must be A4 or A3")
        if self.orientation not in {orientation.value for orientation in Orientation}:
            raise InvalidOptionsError("Orientation must be landscape or portrait")
        if self.layout not in SUPPORTED_LAYOUTS:
            raise InvalidOptionsError("Layout must be 4x2 or 2x4")
        if not _in_range(self.margin_mm):
            raise InvalidOptionsError("margin_mm must be between 0 and 50")
        if not _in_range(self.gap_mm):
            raise InvalidOptionsError("gap_mm must be between 0 and 50")

    def to_layout(self) -> LayoutConfig:
        self.validate()
        return LayoutConfig(
            paper=Paper(self.paper),
            orientation=Orientation(self.orientation),
            grid=Grid.parse(self.layout),
            margin_mm=float(self.margin_mm),
            gap_mm=float(self.gap_mm),
        )


def _parse_number(value: NumberLike, default: float) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


def _in_range(value: float) -> bool:
    # NaN fails both comparisons.
    return MIN_SPACING_MM <= value <= MAX_SPACING_MM


def check_upload_limits(
    files: Iterable[Tuple[str, int]],
    *,
    max_files: int = MAX_FILES,
    max_file_size: int = MAX_FILE_SIZE,
) -> None:
    """Enforce the batch limits on ``(name, size)`` pairs.

    Raises:
        UploadLimitError: If there are no files, too many files or a file
            larger than ``max_file_size``.
    """

    entries = list(files)
    if not entries:
        raise UploadLimitError("No files uploaded")
    if len(entries) > max_files:
        raise UploadLimitError(f"Too many files ({len(entries)}). Maximum is {max_files}.")
    limit_mb = max_file_size // (1024 * 1024)
    for name, size in entries:
        if size > max_file_size:
            raise UploadLimitError(f'File "{name}" exceeds {limit_mb} MB limit.')


def output_filename(now: Optional[datetime] = None) -> str:
    """Return a timestamped output name such as ``LOT_20240131_154500.pdf``."""

    now = now or datetime.now()
    return f"LOT_{now:%Y%m%d_%H%M%S}.pdf"


__all__ = [
    "DEFAULT_GAP_MM",
    "DEFAULT_LAYOUT",
    "DEFAULT_MARGIN_MM",
    "DEFAULT_ORIENTATION",
    "DEFAULT_PAPER",
    "ImpositionOptions",
    "MAX_FILES",
    "MAX_FILE_SIZE",
    "SUPPORTED_LAYOUTS",
    "check_upload_limits",
    "output_filename",
]
