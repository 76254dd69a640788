"""N-up imposition entry points for the :mod:`pdfimposex` package."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .assembler import assemble_sheets
from .backends import ImpositionBackend, PypdfBackend
from .encoder import encode_document, new_output_document
from .exceptions import EncodingError
from .flattener import InputLike, SourceInput, flatten_documents
from .geometry import LayoutConfig, compute_geometry
from .report import MAX_REPORTED_BAD_FILES, BadFileRecord, FailureAggregator
from .utils import PathLike, ensure_iterable, ensure_path, get_logger

LOGGER = get_logger("pdfimposex.imposer")

NO_VALID_PDF_MESSAGE = "No valid PDF could be opened."


@dataclass
class ImpositionResult:
    """
    Result of an imposition run.

    Attributes:
        success: Whether an output document was produced
        pdf_bytes: The serialised output document on success
        total_pages: Number of source pages placed
        sheets: Number of output sheets
        bad_files: Rejected inputs, capped to the first 50
        total_bad: True number of rejected inputs
        error: Error message if the run failed
    """

    success: bool
    pdf_bytes: Optional[bytes] = None
    total_pages: int = 0
    sheets: int = 0
    bad_files: List[BadFileRecord] = field(default_factory=list)
    total_bad: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the result without the output bytes, ready for JSON."""

        payload: Dict[str, Any] = {
            "success": self.success,
            "total_pages": self.total_pages,
            "sheets": self.sheets,
            "bad_files": [entry.to_dict() for entry in self.bad_files],
            "total_bad": self.total_bad,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload

    def __str__(self) -> str:
        if self.success:
            return (
                f"ImpositionResult(success=True, pages={self.total_pages}, "
                f"sheets={self.sheets}, bad={self.total_bad})"
            )
        return f"ImpositionResult(success=False, error='{self.error}')"


def _failure(message: str, failures: FailureAggregator) -> ImpositionResult:
    return ImpositionResult(
        success=False,
        error=message,
        bad_files=failures.reported,
        total_bad=failures.total,
    )


def impose_pdfs(
    inputs: Iterable[InputLike],
    config: Optional[LayoutConfig] = None,
    *,
    backend: Optional[ImpositionBackend] = None,
    workers: int = 1,
    metadata: Optional[Mapping[str, str]] = None,
    bad_file_limit: int = MAX_REPORTED_BAD_FILES,
) -> ImpositionResult:
    """Impose every page of *inputs* onto grid sheets described by *config*.

    Args:
        inputs: Ordered ``(name, bytes)`` pairs or :class:`SourceInput`
            objects. Input order defines page order.
        config: Layout parameters; assumed to be range checked already.
        backend: Document codec, :class:`PypdfBackend` by default.
        workers: Number of threads used to validate inputs.
        metadata: Extra document information for the output PDF.
        bad_file_limit: Maximum number of rejection records returned.

    Inputs that cannot be used are reported in ``bad_files`` and
    ``total_bad``; the run only fails when no page survives or the output
    cannot be written.
    """

    config = config or LayoutConfig()
    backend = backend or PypdfBackend()
    failures = FailureAggregator(limit=bad_file_limit)

    flattened = flatten_documents(inputs, backend, workers=workers)
    failures.extend(flattened.bad_files)

    if not flattened.pages:
        LOGGER.error("No valid PDF among %d input(s)", failures.total)
        return _failure(NO_VALID_PDF_MESSAGE, failures)

    geometry = compute_geometry(config)
    output = new_output_document(backend, metadata)
    sheets = assemble_sheets(flattened.pages, geometry, output, backend)

    try:
        pdf_bytes = encode_document(output, backend)
    except EncodingError as exc:
        return _failure(exc.message, failures)

    LOGGER.info(
        "Imposed %d page(s) onto %d %s %s sheet(s) (%s); %d input(s) rejected",
        flattened.total_pages,
        len(sheets),
        config.paper.value,
        config.orientation.value,
        config.grid,
        failures.total,
    )
    return ImpositionResult(
        success=True,
        pdf_bytes=pdf_bytes,
        total_pages=flattened.total_pages,
        sheets=backend.sheet_count(output),
        bad_files=failures.reported,
        total_bad=failures.total,
    )


def impose_files(
    inputs: Iterable[PathLike],
    output: PathLike,
    config: Optional[LayoutConfig] = None,
    **options: Any,
) -> ImpositionResult:
    """Impose PDF files from disk and write the result to *output*.

    A path that cannot be read is passed on as an empty input, so it is
    rejected and reported in place like any other bad file. The output
    file is only written when the run succeeds.
    """

    sources: List[SourceInput] = []
    for path in ensure_iterable(inputs):
        try:
            data = path.read_bytes()
        except OSError as exc:
            LOGGER.warning("Unable to read %s: %s", path, exc)
            data = b""
        sources.append(SourceInput(name=path.name, data=data))

    result = impose_pdfs(sources, config, **options)
    if result.success:
        output_path = write_result(result, output)
        LOGGER.info("Wrote imposed PDF to %s", output_path)
    return result


def write_result(result: ImpositionResult, output: PathLike) -> Path:
    """Persist a successful *result* to *output* and return the path."""

    if not result.success or result.pdf_bytes is None:
        raise EncodingError(result.error or "Imposition failed")
    output_path = ensure_path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(result.pdf_bytes)
    return output_path


__all__ = ["ImpositionResult", "NO_VALID_PDF_MESSAGE", "impose_files", "impose_pdfs", "write_result"]
