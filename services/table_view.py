from __future__ import annotations

import csv
import io
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from models.records import ExportRecord


@dataclass(frozen=True)
class Page:
    items: Tuple[ExportRecord, ...]
    page: int
    page_size: int
    total_items: int
    total_pages: int


def search(records: Sequence[ExportRecord], term: Optional[str], fields: Sequence[str]) -> Tuple[ExportRecord, ...]:
    """Case-insensitive substring search over ``fields``."""
    needle = (term or "").strip().lower()
    if not needle:
        return tuple(records)
    return tuple(
        rec for rec in records
        if any(needle in rec.text(field).lower() for field in fields)
    )


def sort_records(records: Sequence[ExportRecord], field: str, descending: bool = False) -> Tuple[ExportRecord, ...]:
    """Stable sort on a text field; empty values always sort last."""
    filled = [rec for rec in records if rec.text(field)]
    empty = [rec for rec in records if not rec.text(field)]
    filled.sort(key=lambda rec: rec.text(field), reverse=descending)
    return tuple(filled + empty)


def paginate(records: Sequence[ExportRecord], page: int = 1, page_size: int = 10) -> Page:
    page_size = max(1, int(page_size))
    total = len(records)
    total_pages = math.ceil(total / page_size) if total else 0
    page = min(max(1, int(page)), max(1, total_pages))
    start = (page - 1) * page_size
    return Page(
        items=tuple(records[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_items=total,
        total_pages=total_pages,
    )


def filter_options(records: Sequence[ExportRecord], field: str, limit: Optional[int] = None) -> List[str]:
    """Distinct non-empty values of ``field`` in first-seen order."""
    seen: List[str] = []
    for rec in records:
        value = rec.text(field)
        if value and value not in seen:
            seen.append(value)
            if limit is not None and len(seen) >= limit:
                break
    return seen


def to_csv(records: Sequence[ExportRecord], columns: Sequence[str]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(columns)
    for rec in records:
        writer.writerow([rec.get(col) or "" for col in columns])
    return buf.getvalue()
