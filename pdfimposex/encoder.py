"""Serialisation of the imposed output document."""

from __future__ import annotations

from typing import Mapping, Optional

from .backends import ImpositionBackend, PypdfBackend
from .exceptions import EncodingError
from .utils import format_file_size, get_logger

LOGGER = get_logger("pdfimposex.encoder")

DEFAULT_METADATA = {"/Producer": "pdfimposex", "/Creator": "pdfimposex"}


def new_output_document(
    backend: Optional[ImpositionBackend] = None,
    metadata: Optional[Mapping[str, str]] = None,
) -> object:
    """Create an empty output document carrying *metadata*."""

    backend = backend or PypdfBackend()
    output = backend.new_document()
    entries = dict(DEFAULT_METADATA)
    if metadata:
        entries.update(metadata)
    backend.set_metadata(output, entries)
    return output


def encode_document(output: object, backend: Optional[ImpositionBackend] = None) -> bytes:
    """Serialise *output* to bytes.

    Raises:
        EncodingError: If the writer runs out of memory or fails for any
            other reason. The error is fatal to the whole run.
    """

    backend = backend or PypdfBackend()
    try:
        data = backend.serialize(output)
    except MemoryError as exc:
        LOGGER.error("Ran out of memory while writing the imposed PDF")
        raise EncodingError("Out of memory while writing the imposed PDF") from exc
    except Exception as exc:  # pragma: no cover - writer errors vary
        LOGGER.error("Failed to write the imposed PDF: %s", exc)
        raise EncodingError(f"Failed to write the imposed PDF: {exc}") from exc

    LOGGER.debug("Encoded imposed PDF (%s)", format_file_size(len(data)))
    return data


__all__ = ["DEFAULT_METADATA", "encode_document", "new_output_document"]
