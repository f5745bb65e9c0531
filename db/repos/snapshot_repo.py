from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from models.bundle import ExportBundle


logger = logging.getLogger(__name__)

CURRENT_KEY = "current"


class SnapshotRepo:
    """Key-value blob store for the most recently ingested export."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def save(self, bundle: ExportBundle, key: str = CURRENT_KEY) -> None:
        # Only one current export is kept; storing replaces the previous one
        self.conn.execute(
            (
                "INSERT INTO snapshots (key, export_id, payload, stored_at) "
                "VALUES (?, ?, ?, datetime('now')) "
                "ON CONFLICT(key) DO UPDATE SET export_id = excluded.export_id, "
                "payload = excluded.payload, stored_at = excluded.stored_at"
            ),
            (key, bundle.export_id, bundle.to_blob()),
        )
        self.conn.commit()
        logger.info(
            "Stored export snapshot",
            extra={
                "step": "persist",
                "status": "ok",
                "count": sum(bundle.counts().values()),
                "export_id": bundle.export_id or "-",
            },
        )

    def load(self, key: str = CURRENT_KEY) -> Optional[ExportBundle]:
        cur = self.conn.cursor()
        cur.execute("SELECT payload FROM snapshots WHERE key = ?", (key,))
        row = cur.fetchone()
        if not row:
            return None
        return ExportBundle.from_blob(row[0])

    def stored_export_id(self, key: str = CURRENT_KEY) -> Optional[str]:
        cur = self.conn.cursor()
        cur.execute("SELECT export_id FROM snapshots WHERE key = ?", (key,))
        row = cur.fetchone()
        return row[0] if row else None

    def clear(self) -> int:
        cur = self.conn.cursor()
        cur.execute("DELETE FROM snapshots")
        self.conn.commit()
        return cur.rowcount if cur.rowcount is not None else 0
