"""Storage for the dashboard money summary."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from ..config import DEFAULT_DB_PATH
from ..summary import SummaryTotals
from .schema import ensure_schema


class SummaryDB:
    """Manages the single-row dashboard_summary table."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def save(self, totals: SummaryTotals) -> None:
        conn = self._get_conn()
        conn.execute(
            """INSERT INTO dashboard_summary (id, total_paid, total_received, net_delta)
               VALUES (1, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   total_paid = excluded.total_paid,
                   total_received = excluded.total_received,
                   net_delta = excluded.net_delta,
                   last_updated = datetime('now', 'localtime')""",
            (totals.total_paid, totals.total_received, totals.net_delta),
        )
        conn.commit()

    def get(self) -> SummaryTotals | None:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT total_paid, total_received, net_delta FROM dashboard_summary WHERE id = 1"
        ).fetchone()
        if row is None:
            return None
        return SummaryTotals(
            total_paid=row["total_paid"],
            total_received=row["total_received"],
            net_delta=row["net_delta"],
        )

    def last_updated(self) -> str | None:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT last_updated FROM dashboard_summary WHERE id = 1"
        ).fetchone()
        return row["last_updated"] if row else None
