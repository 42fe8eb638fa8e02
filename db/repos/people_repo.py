from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional


_COLUMNS = "id, entry_number, name, created_at, twitter_handle, instagram_handle"


def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
    return dict(row)


class PeopleRepo:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def list_people(self) -> List[Dict[str, Any]]:
        """All people in canonical entry-number order."""
        cur = self.conn.cursor()
        cur.execute(f"SELECT {_COLUMNS} FROM people ORDER BY entry_number ASC")
        return [_row_to_dict(r) for r in cur.fetchall()]

    def get_person(self, person_id: int) -> Optional[Dict[str, Any]]:
        cur = self.conn.cursor()
        cur.execute(f"SELECT {_COLUMNS} FROM people WHERE id = ?", (person_id,))
        row = cur.fetchone()
        return _row_to_dict(row) if row else None

    def upsert_person(
        self,
        entry_number: int,
        name: str,
        twitter_handle: Optional[str] = None,
        instagram_handle: Optional[str] = None,
    ) -> int:
        """Insert or update a person by entry_number; returns person id. Seeding only."""
        sql = (
            "INSERT INTO people (entry_number, name, twitter_handle, instagram_handle) "
            "VALUES (?, ?, ?, ?) "
            "ON CONFLICT(entry_number) DO UPDATE SET "
            " name = excluded.name, "
            " twitter_handle = excluded.twitter_handle, "
            " instagram_handle = excluded.instagram_handle "
            "RETURNING id;"
        )
        cur = self.conn.cursor()
        cur.execute(sql, (entry_number, name, twitter_handle, instagram_handle))
        row = cur.fetchone()
        self.conn.commit()
        return int(row["id"])
