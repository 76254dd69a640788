"""Utilities shared by the :mod:`pdfimposex` modules."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Union

PathLike = Union[str, Path]

MM_TO_PT = 72 / 25.4


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def mm_to_pt(value: float) -> float:
    """Convert millimetres to PDF points."""

    return value * MM_TO_PT


def ensure_path(path: PathLike) -> Path:
    """Return a :class:`~pathlib.Path` instance for *path*.

    User-home references are expanded and relative paths are resolved
    against the current working directory.
    """

    return Path(path).expanduser().resolve(strict=False)


def ensure_iterable(paths: Iterable[PathLike]) -> list[Path]:
    """Validate and convert an iterable of paths to :class:`Path` objects."""

    return [ensure_path(path) for path in paths]


def format_file_size(size_bytes: float) -> str:
    """Format *size_bytes* in a human-readable form (e.g. ``"1.5 MB"``)."""

    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"


__all__ = [
    "MM_TO_PT",
    "PathLike",
    "ensure_iterable",
    "ensure_path",
    "format_file_size",
    "get_logger",
    "mm_to_pt",
]
