from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from models.bundle import ExportBundle
from models.records import ExportRecord
from models.stats import DashboardStats, NamedCount
from services.aggregation import (
    DEFAULT_TOP_N,
    aggregate,
    aggregate_bundle,
    breakdown,
    bucket_monthly,
    monthly_series,
    rank_top,
)
from services.filtering import UNKNOWN_OPTION, Predicate, filter_records
from services.table_view import filter_options
from sources.linkedin_export import CONNECTIONS, INVITATIONS, JOBS, MESSAGES, RICH_MEDIA
from sources.registry import get_schema


logger = logging.getLogger(__name__)


# Columns shown (and searched) in each kind's table
TABLE_COLUMNS: Dict[str, Tuple[str, ...]] = {
    INVITATIONS: ("From", "To", "Sent At", "Message", "Direction"),
    JOBS: ("Company Name", "Title", "Location Description", "Job State", "Employment Status", "Create Date"),
    MESSAGES: ("FROM", "TO", "DATE", "CONTENT", "FOLDER"),
    RICH_MEDIA: ("Date/Time", "Media Description", "Media Link"),
    CONNECTIONS: ("First Name", "Last Name", "URL", "Email Address", "Company", "Position", "Connected On"),
}


@dataclass(frozen=True)
class DashboardView:
    """Filtered records of one kind plus the charts derived from them."""

    kind: str
    records: Tuple[ExportRecord, ...]
    stats: Any
    monthly: List[Dict[str, object]] = field(default_factory=list)
    breakdown: List[NamedCount] = field(default_factory=list)
    top_companies: List[NamedCount] = field(default_factory=list)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "total": len(self.records),
            "stats": self.stats.to_wire(),
            "monthly": self.monthly,
            "breakdown": [c.to_wire() for c in self.breakdown],
            "topCompanies": [c.to_wire() for c in self.top_companies],
        }


def full_stats(bundle: ExportBundle, top_n: int = DEFAULT_TOP_N) -> DashboardStats:
    return aggregate_bundle(bundle, top_n)


def recompute_view(
    bundle: ExportBundle,
    kind: str,
    predicate: Optional[Predicate] = None,
    top_n: int = DEFAULT_TOP_N,
) -> DashboardView:
    """Filter one kind's records and re-run the same aggregation over the subset."""
    records = bundle.records(kind)
    if predicate is not None and not predicate.is_empty:
        records = filter_records(records, predicate, kind)
    schema = get_schema(kind)
    logger.debug(
        f"Recomputed {kind} view over {len(records)} records",
        extra={"step": "view", "kind": kind, "count": len(records)},
    )
    return DashboardView(
        kind=kind,
        records=records,
        stats=aggregate(records, kind, top_n),
        monthly=monthly_series(bucket_monthly(records, schema)),
        breakdown=breakdown(records, kind),
        top_companies=rank_top(records, "Company", top_n) if kind == CONNECTIONS else [],
    )


def filter_choices(
    bundle: ExportBundle,
    kind: str,
    job_company_limit: int = 20,
    connection_limit: int = 30,
) -> Dict[str, List[str]]:
    """Dropdown values for the kind's free-valued filters, from the unfiltered records."""
    records = bundle.records(kind)
    if kind == JOBS:
        return {"company": filter_options(records, "Company Name", job_company_limit)}
    if kind == CONNECTIONS:
        return {
            "company": [UNKNOWN_OPTION] + filter_options(records, "Company", connection_limit),
            "position": [UNKNOWN_OPTION] + filter_options(records, "Position", connection_limit),
        }
    return {}
