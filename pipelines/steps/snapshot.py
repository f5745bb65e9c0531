from __future__ import annotations

import logging
import sqlite3

from db import schema
from db.repos.snapshot_repo import SnapshotRepo
from pipelines.runner import RunContext
from ports.repos import SnapshotRepoPort


logger = logging.getLogger(__name__)


class PersistSnapshot:
    def __init__(self, conn: sqlite3.Connection) -> None:
        schema.bootstrap(conn)
        self.repo: SnapshotRepoPort = SnapshotRepo(conn)

    def run(self, ctx: RunContext) -> RunContext:
        if ctx.bundle is None:
            return ctx
        self.repo.save(ctx.bundle)
        ctx.meta["snapshot_saved"] = True
        return ctx


class LoadSnapshot:
    """Re-hydrate the bundle from the store instead of parsing files."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        schema.bootstrap(conn)
        self.repo: SnapshotRepoPort = SnapshotRepo(conn)

    def run(self, ctx: RunContext) -> RunContext:
        bundle = self.repo.load()
        if bundle is None:
            raise LookupError("No stored export found. Run 'ingest' first.")
        ctx.bundle = bundle
        ctx.export_id = bundle.export_id
        ctx.meta["record_counts"] = bundle.counts()
        logger.info(
            "Loaded stored export snapshot",
            extra={
                "step": "load",
                "status": "ok",
                "count": sum(ctx.meta["record_counts"].values()),
                "export_id": bundle.export_id or "-",
            },
        )
        return ctx
