"""Aggregation of per-input rejection records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

MAX_REPORTED_BAD_FILES = 50


@dataclass(frozen=True)
class BadFileRecord:
    """A source input that contributed no pages, and why."""

    path: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "error": self.error}


class FailureAggregator:
    """Collects rejection records while capping the detail kept for reporting.

    The first ``limit`` records are kept in the order they were recorded;
    :attr:`total` always reflects every record seen.
    """

    def __init__(self, limit: int = MAX_REPORTED_BAD_FILES) -> None:
        if limit < 0:
            raise ValueError("limit must not be negative")
        self.limit = limit
        self._records: List[BadFileRecord] = []
        self._total = 0

    def record(self, path: str, error: str) -> BadFileRecord:
        entry = BadFileRecord(path=path, error=error)
        self.add(entry)
        return entry

    def add(self, entry: BadFileRecord) -> None:
        self._total += 1
        if len(self._records) < self.limit:
            self._records.append(entry)

    def extend(self, entries: Iterable[BadFileRecord]) -> None:
        for entry in entries:
            self.add(entry)

    @property
    def reported(self) -> List[BadFileRecord]:
        return list(self._records)

    @property
    def total(self) -> int:
        return self._total

    def __len__(self) -> int:
        return self._total

    def to_dict(self) -> Dict[str, object]:
        return {
            "bad_files": [entry.to_dict() for entry in self._records],
            "total_bad": self._total,
        }


__all__ = ["BadFileRecord", "FailureAggregator", "MAX_REPORTED_BAD_FILES"]
