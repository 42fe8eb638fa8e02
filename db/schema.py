from __future__ import annotations

import sqlite3


def bootstrap(conn: sqlite3.Connection) -> None:
    """Create the people table and its indexes (idempotent)."""
    cur = conn.cursor()

    cur.execute(
        (
            "CREATE TABLE IF NOT EXISTS people (\n"
            "  id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "  entry_number INTEGER NOT NULL UNIQUE CHECK (entry_number > 0),\n"
            "  name TEXT NOT NULL CHECK (length(name) > 0),\n"
            "  created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),\n"
            "  twitter_handle TEXT,\n"
            "  instagram_handle TEXT\n"
            ")"
        )
    )
    # Name lookups back the search box
    cur.execute("CREATE INDEX IF NOT EXISTS idx_people_name ON people(name);")
    conn.commit()
