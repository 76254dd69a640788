"""Document codec backends used by the imposition engine."""

from .base import BackendDocument, ImpositionBackend
from .pypdf_backend import PypdfBackend, PypdfDocument

__all__ = [
    "BackendDocument",
    "ImpositionBackend",
    "PypdfBackend",
    "PypdfDocument",
]
