"""Aggregate statistics over export records.

Every function here is pure: it reads a sequence of records and returns a new
value. The dashboard's full-dataset numbers and its filtered-view numbers both
go through these same helpers so the two can never disagree.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence

from models.bundle import ExportBundle
from models.records import ExportRecord
from models.stats import (
    ConnectionStats,
    DashboardStats,
    InvitationStats,
    JobStats,
    MessageStats,
    NamedCount,
    RichMediaStats,
)
from sources.base import RecordSchema
from sources.linkedin_export import CONNECTIONS, INVITATIONS, JOBS, MESSAGES, RICH_MEDIA
from sources.registry import get_schema
from utils.date_parsing import month_label, record_month_key


UNKNOWN = "Unknown"
DEFAULT_TOP_N = 10

JOB_STATE_GROUPS: Dict[str, str] = {
    "OPEN": "active",
    "LISTED": "active",
    "CLOSED": "closed",
    "DRAFT": "draft",
}

# Checked in order; the first matching substring wins.
MEDIA_CATEGORIES = (
    ("profile photo", "Profile Photos"),
    ("feed photo", "Feed Photos"),
    ("background photo", "Background Photos"),
)

KeyFn = Callable[[ExportRecord], Optional[str]]


# ---------------------------------------------------------------------------
# Generic grouping helpers
# ---------------------------------------------------------------------------

def count_by(records: Iterable[ExportRecord], key_fn: KeyFn) -> Dict[str, int]:
    """Count records per key in first-seen order; None keys are skipped."""
    counts: Dict[str, int] = {}
    for rec in records:
        key = key_fn(rec)
        if key is None:
            continue
        counts[key] = counts.get(key, 0) + 1
    return counts


def field_key(field: str, unknown: Optional[str] = None) -> KeyFn:
    """Project a record to its trimmed ``field``; empty maps to ``unknown``."""

    def _key(rec: ExportRecord) -> Optional[str]:
        value = rec.text(field)
        return value if value else unknown

    return _key


def bucket_monthly(records: Iterable[ExportRecord], schema: RecordSchema) -> Dict[str, int]:
    """Sparse ``YYYY-MM`` counts over the schema's date field, sorted by key."""
    if not schema.date_field:
        return {}
    counts = count_by(
        records,
        lambda rec: record_month_key(rec.get(schema.date_field), schema.date_format),
    )
    return dict(sorted(counts.items()))


def distinct_count(records: Iterable[ExportRecord], field: str) -> int:
    return len({rec.text(field) for rec in records} - {""})


def count_present(records: Iterable[ExportRecord], field: str) -> int:
    return sum(1 for rec in records if rec.text(field))


def count_equal(records: Iterable[ExportRecord], field: str, value: str) -> int:
    return sum(1 for rec in records if rec.text(field) == value)


def rank_top(records: Iterable[ExportRecord], field: str, limit: int = DEFAULT_TOP_N) -> List[NamedCount]:
    """Top values of ``field`` by count; ties keep first-seen order."""
    counts = count_by(records, field_key(field))
    # sorted() is stable, so equal counts stay in insertion order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [NamedCount(name=name, value=value) for name, value in ranked[:limit]]


def to_named_counts(counts: Dict[str, int]) -> List[NamedCount]:
    """Counts as chart entries, largest first, zero entries dropped."""
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [NamedCount(name=name, value=value) for name, value in ranked if value > 0]


def monthly_series(monthly: Dict[str, int]) -> List[Dict[str, object]]:
    """Ordered chart series for a sparse monthly map."""
    return [
        {"key": key, "name": month_label(key), "value": monthly[key]}
        for key in sorted(monthly)
    ]


# ---------------------------------------------------------------------------
# Discriminants
# ---------------------------------------------------------------------------

def job_state_group(rec: ExportRecord) -> Optional[str]:
    return JOB_STATE_GROUPS.get(rec.text("Job State"))


def media_category(rec: ExportRecord) -> Optional[str]:
    description = rec.text("Media Description").lower()
    if not description:
        return None
    for needle, label in MEDIA_CATEGORIES:
        if needle in description:
            return label
    return None


def is_draft_message(rec: ExportRecord) -> bool:
    return rec.text("IS MESSAGE DRAFT") == "Yes"


def _media_breakdown_key(rec: ExportRecord) -> Optional[str]:
    if not rec.text("Media Description"):
        return UNKNOWN
    return media_category(rec) or "Other"


_BREAKDOWN_KEYS: Dict[str, KeyFn] = {
    INVITATIONS: field_key("Direction", UNKNOWN),
    JOBS: field_key("Job State", UNKNOWN),
    MESSAGES: field_key("FOLDER", UNKNOWN),
    RICH_MEDIA: _media_breakdown_key,
    CONNECTIONS: field_key("Company", UNKNOWN),
}


def breakdown(records: Sequence[ExportRecord], kind: str) -> List[NamedCount]:
    """User-facing categorical breakdown for ``kind``; absent values count as Unknown."""
    if kind not in _BREAKDOWN_KEYS:
        raise KeyError(f"Unknown record kind: {kind}")
    return to_named_counts(count_by(records, _BREAKDOWN_KEYS[kind]))


# ---------------------------------------------------------------------------
# Per-kind stats
# ---------------------------------------------------------------------------

def invitation_stats(records: Sequence[ExportRecord]) -> InvitationStats:
    return InvitationStats(
        total=len(records),
        outgoing=count_equal(records, "Direction", "OUTGOING"),
        incoming=count_equal(records, "Direction", "INCOMING"),
        with_message=count_present(records, "Message"),
        monthly=bucket_monthly(records, get_schema(INVITATIONS)),
    )


def job_stats(records: Sequence[ExportRecord]) -> JobStats:
    groups = count_by(records, job_state_group)
    return JobStats(
        total=len(records),
        active=groups.get("active", 0),
        closed=groups.get("closed", 0),
        draft=groups.get("draft", 0),
        unique_companies=distinct_count(records, "Company Name"),
    )


def message_stats(records: Sequence[ExportRecord]) -> MessageStats:
    return MessageStats(
        total=len(records),
        inbox=count_equal(records, "FOLDER", "INBOX"),
        sent=count_equal(records, "FOLDER", "SENT"),
        drafts=sum(1 for rec in records if is_draft_message(rec)),
        unique_conversations=distinct_count(records, "CONVERSATION ID"),
    )


def rich_media_stats(records: Sequence[ExportRecord]) -> RichMediaStats:
    categories = count_by(records, media_category)
    return RichMediaStats(
        total=len(records),
        profile_photos=categories.get("Profile Photos", 0),
        feed_photos=categories.get("Feed Photos", 0),
        background_photos=categories.get("Background Photos", 0),
    )


def connection_stats(records: Sequence[ExportRecord], top_n: int = DEFAULT_TOP_N) -> ConnectionStats:
    return ConnectionStats(
        total=len(records),
        with_email=count_present(records, "Email Address"),
        unique_companies=distinct_count(records, "Company"),
        monthly=bucket_monthly(records, get_schema(CONNECTIONS)),
        top_companies=rank_top(records, "Company", top_n),
    )


def aggregate(records: Sequence[ExportRecord], kind: str, top_n: int = DEFAULT_TOP_N):
    """Stats for one kind's records."""
    records = tuple(records)
    if kind == INVITATIONS:
        return invitation_stats(records)
    if kind == JOBS:
        return job_stats(records)
    if kind == MESSAGES:
        return message_stats(records)
    if kind == RICH_MEDIA:
        return rich_media_stats(records)
    if kind == CONNECTIONS:
        return connection_stats(records, top_n)
    raise KeyError(f"Unknown record kind: {kind}")


def aggregate_bundle(bundle: ExportBundle, top_n: int = DEFAULT_TOP_N) -> DashboardStats:
    return DashboardStats(
        invitations=invitation_stats(bundle.invitations),
        jobs=job_stats(bundle.jobs),
        messages=message_stats(bundle.messages),
        rich_media=rich_media_stats(bundle.rich_media),
        connections=connection_stats(bundle.connections, top_n),
    )
