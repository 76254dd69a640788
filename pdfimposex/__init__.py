"""N-up PDF imposition toolkit.

Pages from many independent PDF documents are placed, in order, onto
larger A4/A3 sheets arranged in a fixed grid. Each page is scaled to fit
its cell with its aspect ratio kept and centred in it; inputs that cannot
be used are reported without aborting the batch.

Quick Start:
    >>> from pdfimposex import impose_pdfs, LayoutConfig
    >>> result = impose_pdfs([("a.pdf", data)], LayoutConfig())
    >>> result.sheets
    1
"""

from __future__ import annotations

from .assembler import Placement, Sheet, assemble_sheets, plan_sheets
from .backends import ImpositionBackend, PypdfBackend
from .config import ImpositionOptions, check_upload_limits, output_filename
from .exceptions import (
    AssemblyError,
    DocumentRejectedError,
    EncodingError,
    InvalidOptionsError,
    PdfImposeError,
    UploadLimitError,
)
from .flattener import FlattenResult, PageRef, SourceInput, flatten_documents
from .geometry import Cell, Geometry, Grid, LayoutConfig, Orientation, Paper, compute_geometry
from .imposer import ImpositionResult, impose_files, impose_pdfs, write_result
from .report import BadFileRecord, FailureAggregator
from .validators import OpenedDocument, is_probably_pdf, validate_document

__version__ = "1.0.0"

__all__ = [
    "AssemblyError",
    "BadFileRecord",
    "Cell",
    "DocumentRejectedError",
    "EncodingError",
    "FailureAggregator",
    "FlattenResult",
    "Geometry",
    "Grid",
    "ImpositionBackend",
    "ImpositionOptions",
    "ImpositionResult",
    "InvalidOptionsError",
    "LayoutConfig",
    "OpenedDocument",
    "Orientation",
    "PageRef",
    "Paper",
    "PdfImposeError",
    "Placement",
    "PypdfBackend",
    "Sheet",
    "SourceInput",
    "UploadLimitError",
    "assemble_sheets",
    "check_upload_limits",
    "compute_geometry",
    "flatten_documents",
    "impose_files",
    "impose_pdfs",
    "is_probably_pdf",
    "output_filename",
    "plan_sheets",
    "validate_document",
    "write_result",
    "__version__",
]
