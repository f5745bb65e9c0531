from __future__ import annotations

import sqlite3


def bootstrap(conn: sqlite3.Connection) -> None:
    """Create the snapshot table (idempotent)."""
    cur = conn.cursor()
    cur.execute(
        (
            "CREATE TABLE IF NOT EXISTS snapshots (\n"
            "  key TEXT PRIMARY KEY,\n"
            "  export_id TEXT,\n"
            "  payload TEXT NOT NULL,\n"
            "  stored_at TEXT NOT NULL DEFAULT (datetime('now'))\n"
            ")"
        )
    )
    conn.commit()
