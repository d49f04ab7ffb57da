"""Database schema definitions and migration helpers."""

from __future__ import annotations

import sqlite3
from pathlib import Path

_SCHEMA_VERSION = 1

_DDL = """
CREATE TABLE IF NOT EXISTS products (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    item TEXT NOT NULL DEFAULT '',
    url TEXT,
    order_date TEXT,
    order_placed INTEGER NOT NULL DEFAULT 1,
    order_delivered INTEGER NOT NULL DEFAULT 0,
    review_added INTEGER NOT NULL DEFAULT 0,
    review_live INTEGER NOT NULL DEFAULT 0,
    review_ss_sent INTEGER NOT NULL DEFAULT 0,
    paid REAL,
    received REAL,
    delta REAL,
    is_void INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL DEFAULT (datetime('now', 'localtime')),
    updated_at TEXT NOT NULL DEFAULT (datetime('now', 'localtime'))
);

CREATE INDEX IF NOT EXISTS idx_products_order_date ON products(order_date);
CREATE INDEX IF NOT EXISTS idx_products_item ON products(item);

CREATE TABLE IF NOT EXISTS dashboard_summary (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    total_paid REAL NOT NULL DEFAULT 0,
    total_received REAL NOT NULL DEFAULT 0,
    net_delta REAL NOT NULL DEFAULT 0,
    last_updated TEXT NOT NULL DEFAULT (datetime('now', 'localtime'))
);

CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);
"""


def ensure_schema(db_path: str | Path) -> sqlite3.Connection:
    """Open (or create) the database and ensure the schema is up to date.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        An open sqlite3.Connection with the schema applied.
    """
    db_path = Path(db_path).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")

    try:
        row = conn.execute("SELECT version FROM schema_version").fetchone()
        current_version = row["version"] if row else 0
    except sqlite3.OperationalError:
        current_version = 0

    if current_version < _SCHEMA_VERSION:
        conn.executescript(_DDL)
        conn.execute("DELETE FROM schema_version")
        conn.execute(
            "INSERT INTO schema_version (version) VALUES (?)",
            (_SCHEMA_VERSION,),
        )
        conn.commit()

    return conn
