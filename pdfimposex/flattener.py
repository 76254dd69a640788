"""Flattening of many source documents into one ordered page sequence."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .backends import ImpositionBackend, PypdfBackend
from .exceptions import DocumentRejectedError
from .report import BadFileRecord
from .utils import get_logger
from .validators import OpenedDocument, validate_document

LOGGER = get_logger("pdfimposex.flattener")


@dataclass(frozen=True)
class SourceInput:
    """One caller-supplied document: a display name and its raw bytes."""

    name: str
    data: bytes


@dataclass(frozen=True)
class PageRef:
    """A single page of a shared :class:`OpenedDocument`.

    ``global_order`` is the page's position in the flattened sequence.
    """

    document: OpenedDocument
    page_index: int
    global_order: int


@dataclass
class FlattenResult:
    pages: List[PageRef] = field(default_factory=list)
    bad_files: List[BadFileRecord] = field(default_factory=list)
    documents: List[OpenedDocument] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return len(self.pages)


InputLike = Union[SourceInput, Tuple[str, bytes]]
_Outcome = Tuple[SourceInput, Optional[OpenedDocument], Optional[str]]


def coerce_inputs(inputs: Iterable[InputLike]) -> List[SourceInput]:
    """Accept :class:`SourceInput` objects or ``(name, bytes)`` pairs."""

    sources: List[SourceInput] = []
    for item in inputs:
        if isinstance(item, SourceInput):
            sources.append(item)
        else:
            name, data = item
            sources.append(SourceInput(name=str(name), data=bytes(data)))
    return sources


def _open_source(source: SourceInput, backend: ImpositionBackend) -> _Outcome:
    try:
        return source, validate_document(source.name, source.data, backend), None
    except DocumentRejectedError as exc:
        return source, None, exc.message


def flatten_documents(
    inputs: Iterable[InputLike],
    backend: Optional[ImpositionBackend] = None,
    *,
    workers: int = 1,
) -> FlattenResult:
    """Validate *inputs* and flatten their pages in supplied order.

    Rejected inputs are recorded as :class:`BadFileRecord` entries and
    never abort the batch. With ``workers > 1`` validation runs on a
    thread pool; outcomes are consumed in input order regardless of
    completion order.
    """

    backend = backend or PypdfBackend()
    sources: Sequence[SourceInput] = coerce_inputs(inputs)

    if workers > 1 and len(sources) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(lambda source: _open_source(source, backend), sources))
    else:
        outcomes = [_open_source(source, backend) for source in sources]

    result = FlattenResult()
    for source, opened, reason in outcomes:
        if opened is None:
            LOGGER.warning("Skipping %s: %s", source.name, reason)
            result.bad_files.append(BadFileRecord(path=source.name, error=reason or ""))
            continue

        result.documents.append(opened)
        for page_index in range(opened.page_count):
            result.pages.append(
                PageRef(
                    document=opened,
                    page_index=page_index,
                    global_order=len(result.pages),
                )
            )

    LOGGER.debug(
        "Flattened %d input(s) into %d page(s); %d rejected",
        len(sources),
        len(result.pages),
        len(result.bad_files),
    )
    return result


__all__ = ["FlattenResult", "InputLike", "PageRef", "SourceInput", "coerce_inputs", "flatten_documents"]
