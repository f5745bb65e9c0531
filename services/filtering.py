"""Composable record filters for the dashboard's current view.

A :class:`Predicate` is an AND of clauses. Clauses only read the record, so the
result does not depend on clause order, and filtering an already-filtered
collection with the same predicate returns it unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, Mapping, Optional, Protocol, Sequence, Tuple

from models.records import ExportRecord
from sources.base import RecordSchema
from sources.linkedin_export import CONNECTIONS, INVITATIONS, JOBS, MESSAGES, RICH_MEDIA
from sources.registry import get_schema
from utils.date_parsing import parse_date, to_naive


UNKNOWN_OPTION = "Unknown"


class Clause(Protocol):
    def matches(self, record: ExportRecord, schema: RecordSchema) -> bool:
        ...


@dataclass(frozen=True)
class DateRange:
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self) -> None:
        # Record dates are naive wall-clock times; compare bounds the same way
        if self.start is not None:
            object.__setattr__(self, "start", to_naive(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", to_naive(self.end))

    @property
    def active(self) -> bool:
        return self.start is not None or self.end is not None

    def matches(self, record: ExportRecord, schema: RecordSchema) -> bool:
        if not self.active:
            return True
        if not schema.date_field:
            return False
        dt = parse_date(record.get(schema.date_field), schema.date_format)
        if dt is None:
            return False
        if self.start is not None and dt < self.start:
            return False
        if self.end is not None and dt > self.end:
            return False
        return True


@dataclass(frozen=True)
class FieldEquals:
    field: str
    value: str

    def matches(self, record: ExportRecord, schema: RecordSchema) -> bool:
        return record.text(self.field) == self.value


@dataclass(frozen=True)
class FieldPresent:
    field: str
    present: bool = True

    def matches(self, record: ExportRecord, schema: RecordSchema) -> bool:
        return bool(record.text(self.field)) is self.present


@dataclass(frozen=True)
class FieldContains:
    field: str
    needle: str

    def matches(self, record: ExportRecord, schema: RecordSchema) -> bool:
        return self.needle.lower() in record.text(self.field).lower()


@dataclass(frozen=True)
class Predicate:
    clauses: Tuple[Clause, ...] = ()

    def matches(self, record: ExportRecord, schema: RecordSchema) -> bool:
        return all(clause.matches(record, schema) for clause in self.clauses)

    @property
    def is_empty(self) -> bool:
        return not any(
            not isinstance(c, DateRange) or c.active for c in self.clauses
        )


def filter_records(
    records: Iterable[ExportRecord],
    predicate: Predicate,
    kind: str,
) -> Tuple[ExportRecord, ...]:
    schema = get_schema(kind)
    return tuple(rec for rec in records if predicate.matches(rec, schema))


# ---------------------------------------------------------------------------
# Dashboard selections
# ---------------------------------------------------------------------------

# selection key -> (field, clause style)
FILTER_KEYS: Dict[str, Dict[str, Tuple[str, str]]] = {
    INVITATIONS: {
        "direction": ("Direction", "equals"),
        "hasMessage": ("Message", "present"),
    },
    JOBS: {
        "jobState": ("Job State", "equals"),
        "company": ("Company Name", "equals"),
        "employmentStatus": ("Employment Status", "equals"),
    },
    MESSAGES: {
        "folder": ("FOLDER", "equals"),
        "isDraft": ("IS MESSAGE DRAFT", "equals"),
    },
    RICH_MEDIA: {
        "mediaType": ("Media Description", "contains"),
    },
    CONNECTIONS: {
        "hasEmail": ("Email Address", "present"),
        "company": ("Company", "equals"),
        "position": ("Position", "equals"),
    },
}

# The dashboard offers "Unknown" for these; choosing it leaves the view unfiltered.
_UNKNOWN_MEANS_ALL = {(CONNECTIONS, "company"), (CONNECTIONS, "position")}


def _clause_for(kind: str, key: str, value: str) -> Optional[Clause]:
    try:
        field, style = FILTER_KEYS[kind][key]
    except KeyError:
        raise ValueError(f"Unknown filter '{key}' for {kind}") from None
    value = (value or "").strip()
    if not value:
        return None
    if style == "present":
        lowered = value.lower()
        if lowered not in ("yes", "no"):
            raise ValueError(f"Filter '{key}' expects yes or no, got '{value}'")
        return FieldPresent(field, present=lowered == "yes")
    if (kind, key) in _UNKNOWN_MEANS_ALL and value == UNKNOWN_OPTION:
        return None
    if style == "contains":
        return FieldContains(field, value)
    return FieldEquals(field, value)


def predicate_from_selection(
    kind: str,
    selections: Optional[Mapping[str, str]] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> Predicate:
    """Translate the dashboard's named filter selections into a predicate."""
    if kind not in FILTER_KEYS:
        raise KeyError(f"Unknown record kind: {kind}")
    clauses = []
    date_range = DateRange(start, end)
    if date_range.active:
        clauses.append(date_range)
    for key, value in (selections or {}).items():
        clause = _clause_for(kind, key, value)
        if clause is not None:
            clauses.append(clause)
    return Predicate(tuple(clauses))


def parse_selection_args(pairs: Sequence[str]) -> Dict[str, str]:
    """Parse ``key=value`` strings from the command line."""
    selections: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected key=value, got '{pair}'")
        selections[key.strip()] = value.strip()
    return selections
