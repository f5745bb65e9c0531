from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from pipelines.runner import Pipeline, RunContext
from pipelines.steps import AggregateStats, LoadSnapshot, LocateSources, ParseSources, PersistSnapshot
from services.aggregation import DEFAULT_TOP_N


def ingest_export(
    export_root: Path,
    export_id: Optional[str] = None,
    conn: Optional[sqlite3.Connection] = None,
    max_workers: int = 5,
    top_n: int = DEFAULT_TOP_N,
) -> RunContext:
    """Parse an extracted export directory and compute its stats.

    ``export_id`` identifies which export this is; it is passed in rather than
    read from shared state. With ``conn`` the bundle is also stored as the
    current snapshot. Raises EmptyExportError when no source file exists.
    """
    ctx = RunContext(export_root=Path(export_root), export_id=export_id)
    steps = [
        LocateSources(),
        ParseSources(max_workers=max_workers),
        AggregateStats(top_n=top_n),
    ]
    if conn is not None:
        steps.append(PersistSnapshot(conn))
    return Pipeline(steps).run(ctx)


def load_snapshot(conn: sqlite3.Connection, top_n: int = DEFAULT_TOP_N) -> RunContext:
    """Recompute stats from the stored snapshot (same shape as a fresh ingest)."""
    return Pipeline([LoadSnapshot(conn), AggregateStats(top_n=top_n)]).run(RunContext())
