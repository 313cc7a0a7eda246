"""Accumulated complexity results for one pass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple


@dataclass(frozen=True)
class ComplexityRecord:
    """A scored function.

    Attributes:
        name: Function name
        score: Cyclomatic complexity, always >= 1
    """

    name: str
    score: int

    def __post_init__(self) -> None:
        if self.score < 1:
            raise ValueError(f"complexity score must be >= 1, got {self.score} for '{self.name}'")


class _EntryView:
    """Re-iterable view over a report's (name, score) pairs."""

    def __init__(self, records: Dict[str, ComplexityRecord]) -> None:
        self._records = records

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return ((record.name, record.score) for record in self._records.values())

    def __len__(self) -> int:
        return len(self._records)


class ComplexityReport:
    """Function name -> ComplexityRecord.

    Recording a name twice keeps the later score. Overloads and same-named
    functions in different scopes therefore collapse to one entry; names are
    not qualified by signature.

    Not safe for concurrent writers. Parallel producers should fill separate
    reports and merge them from one thread.
    """

    def __init__(self, records: Optional[Iterable[ComplexityRecord]] = None) -> None:
        self._records: Dict[str, ComplexityRecord] = {}
        for record in records or ():
            self._records[record.name] = record

    def record(self, name: str, score: int) -> ComplexityRecord:
        entry = ComplexityRecord(name=name, score=score)
        self._records[name] = entry
        return entry

    def entries(self) -> Iterable[Tuple[str, int]]:
        """Lazy (name, score) pairs in no particular order; iterable repeatedly."""
        return _EntryView(self._records)

    def sorted_entries(self) -> list[Tuple[str, int]]:
        return sorted(self.entries(), key=lambda entry: entry[0])

    def get(self, name: str) -> Optional[ComplexityRecord]:
        return self._records.get(name)

    def merge(self, other: "ComplexityReport") -> "ComplexityReport":
        """Fold ``other`` into this report; ``other`` wins on name collisions."""
        for name, score in other.entries():
            self.record(name, score)
        return self

    def as_dict(self) -> Dict[str, int]:
        return dict(self.entries())

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ComplexityReport({len(self._records)} functions)"
