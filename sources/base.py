from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Tuple, Type

from models.records import ExportRecord


RowPredicate = Callable[[ExportRecord], bool]


class HeaderLocator(Protocol):
    def __call__(self, text: str) -> Optional[str]:
        """Return the text starting at the real header row, or None if absent."""
        ...


@dataclass(frozen=True)
class RecordSchema:
    """Describes how one export CSV becomes typed records."""

    kind: str
    file_path: str
    model: Type[ExportRecord]
    date_field: Optional[str] = None
    date_format: Optional[str] = None
    locate_header: Optional[HeaderLocator] = None
    is_valid: Optional[RowPredicate] = None


@dataclass(frozen=True)
class ParseResult:
    kind: str
    records: Tuple[ExportRecord, ...] = ()
    diagnostics: List[str] = field(default_factory=list)
    rows_read: int = 0
    rows_dropped: int = 0
    source_present: bool = False
