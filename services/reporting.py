from __future__ import annotations

from typing import Dict, List, Optional

from models.stats import DashboardStats
from services.aggregation import monthly_series
from services.dashboard import DashboardView
from services.table_view import Page


def _print_monthly(label: str, monthly: Dict[str, int], last: int = 6) -> None:
    series = monthly_series(monthly)
    if not series:
        return
    print(f"  {label} (last {min(last, len(series))} months):")
    for point in series[-last:]:
        print(f"    {point['name']}: {point['value']}")


def print_summary(
    stats: DashboardStats,
    export_id: Optional[str] = None,
    missing: Optional[List[str]] = None,
    diagnostics: Optional[Dict[str, List[str]]] = None,
) -> None:
    """Print the dashboard overview of an export."""
    print("\n" + "=" * 60)
    print("LINKEDIN EXPORT INSIGHTS - SUMMARY")
    print("=" * 60)
    print(f"Export: {export_id or 'N/A'}")
    if missing:
        print(f"Missing sources: {', '.join(missing)}")
    print()
    inv = stats.invitations
    print(f"Invitations: {inv.total} (outgoing {inv.outgoing}, incoming {inv.incoming}, with message {inv.with_message})")
    _print_monthly("Invitations per month", inv.monthly)
    jobs = stats.jobs
    print(f"Job postings: {jobs.total} (active {jobs.active}, closed {jobs.closed}, draft {jobs.draft}, companies {jobs.unique_companies})")
    msgs = stats.messages
    print(f"Messages: {msgs.total} (inbox {msgs.inbox}, sent {msgs.sent}, drafts {msgs.drafts}, conversations {msgs.unique_conversations})")
    media = stats.rich_media
    print(f"Rich media: {media.total} (profile {media.profile_photos}, feed {media.feed_photos}, background {media.background_photos})")
    conns = stats.connections
    print(f"Connections: {conns.total} (with email {conns.with_email}, companies {conns.unique_companies})")
    _print_monthly("Connections per month", conns.monthly)
    if conns.top_companies:
        print("  Top companies:")
        for entry in conns.top_companies:
            print(f"    {entry.name}: {entry.value}")
    if diagnostics:
        print()
        print("Diagnostics:")
        for kind, notes in diagnostics.items():
            print(f"  {kind}: {'; '.join(notes)}")
    print("=" * 60)


def print_view(view: DashboardView, page: Page, columns: List[str]) -> None:
    """Print one page of a filtered table plus its derived charts."""
    print(f"{view.kind}: {len(view.records)} matching records")
    if view.breakdown:
        print("Breakdown: " + ", ".join(f"{c.name}={c.value}" for c in view.breakdown))
    if view.monthly:
        print("Monthly: " + ", ".join(f"{p['name']}={p['value']}" for p in view.monthly))
    if view.top_companies:
        print("Top companies: " + ", ".join(f"{c.name}={c.value}" for c in view.top_companies))
    print("-" * 60)
    for rec in page.items:
        print(" | ".join(rec.text(col) for col in columns))
    print("-" * 60)
    print(f"Page {page.page}/{max(page.total_pages, 1)} ({page.total_items} rows)")
