"""FastAPI application exposing N-up imposition from the shared library."""

from __future__ import annotations

import json
from typing import List, Optional

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse, Response

from pdfimposex import (
    ImpositionOptions,
    ImpositionResult,
    InvalidOptionsError,
    SourceInput,
    UploadLimitError,
    check_upload_limits,
    impose_pdfs,
    output_filename,
)
from pdfimposex.config import MAX_FILE_SIZE, MAX_FILES
from pdfimposex.utils import get_logger

LOGGER = get_logger("pdfimposex.api")

app = FastAPI(title="pdfimposex API", version="1.0.0")
DOCS_PREFIX = "/api"


def _error(message: str, status_code: int, **extra: object) -> JSONResponse:
    payload: dict[str, object] = {"error": message}
    payload.update(extra)
    return JSONResponse(payload, status_code=status_code)


def _safe_filename(filename: str | None, default: str) -> str:
    """Return the final path component of user supplied *filename*."""

    if not filename:
        return default
    candidate = filename.replace("\\", "/").rsplit("/", 1)[-1]
    return candidate or default


def _result_headers(result: ImpositionResult, filename: str) -> dict[str, str]:
    return {
        "Content-Disposition": f'attachment; filename="{filename}"',
        "X-Total-Pages": str(result.total_pages),
        "X-Sheets": str(result.sheets),
        "X-Bad-Files": json.dumps([entry.to_dict() for entry in result.bad_files]),
        "X-Total-Bad": str(result.total_bad),
    }


@app.get("/health", response_class=JSONResponse)
async def health() -> dict[str, str]:
    """Lightweight health endpoint for uptime checks."""
    return {"status": "ok"}


@app.get(
    f"{DOCS_PREFIX}/openapi.json",
    include_in_schema=False,
    name="prefixed_openapi",
)
async def prefixed_openapi() -> JSONResponse:
    """Expose the OpenAPI schema under the gateway's ``/api`` prefix."""

    return JSONResponse(app.openapi())


@app.get(f"{DOCS_PREFIX}/docs", include_in_schema=False)
async def prefixed_swagger_ui(request: Request) -> HTMLResponse:
    """Serve Swagger UI from the same ``/api`` prefix used by the gateway."""

    return get_swagger_ui_html(
        openapi_url=str(request.url_for("prefixed_openapi")),
        title=f"{app.title} - Swagger UI",
    )


@app.post(
    "/impose-8up",
    summary="Impose PDFs N-up onto grid sheets",
    response_description="PDF document containing the imposed sheets.",
)
async def impose_8up(
    files: Optional[List[UploadFile]] = File(None, description="PDF files to impose, in order."),
    paper: str | None = Form(None, description="Paper size: A4 or A3."),
    orientation: str | None = Form(None, description="Sheet orientation: landscape or portrait."),
    layout: str | None = Form(None, description="Grid layout: 4x2 or 2x4."),
    margin_mm: str | None = Form(None, description="Sheet margin in millimetres (0-50)."),
    gap_mm: str | None = Form(None, description="Spacing between cells in millimetres (0-50)."),
) -> Response:
    """Impose every page of the uploaded PDFs onto grid sheets.

    Files that cannot be used are skipped and reported through the
    ``X-Bad-Files`` and ``X-Total-Bad`` headers. When no file yields a
    page the endpoint answers 422 with the rejection details.
    """

    try:
        options = ImpositionOptions.from_form(paper, orientation, layout, margin_mm, gap_mm)
        check_upload_limits(
            [(upload.filename or "", upload.size or 0) for upload in files or []],
            max_files=MAX_FILES,
            max_file_size=MAX_FILE_SIZE,
        )

        inputs: list[SourceInput] = []
        for index, upload in enumerate(files or [], start=1):
            contents = await upload.read()
            name = _safe_filename(upload.filename, f"document_{index}.pdf")
            check_upload_limits([(name, len(contents))], max_file_size=MAX_FILE_SIZE)
            inputs.append(SourceInput(name=name, data=contents))

        result = await run_in_threadpool(impose_pdfs, inputs, options.to_layout())
    except (InvalidOptionsError, UploadLimitError) as exc:
        return _error(exc.message, 400)
    except Exception as exc:  # pragma: no cover - defensive conversion to HTTP error
        LOGGER.exception("Imposition error: %s", exc)
        return _error(str(exc) or "Unknown error", 500)

    if not result.success or result.pdf_bytes is None:
        return _error(
            result.error or "Imposition failed",
            422,
            bad_files=[entry.to_dict() for entry in result.bad_files],
            total_bad=result.total_bad,
        )

    return Response(
        content=result.pdf_bytes,
        media_type="application/pdf",
        headers=_result_headers(result, output_filename()),
    )


__all__ = ["app"]
