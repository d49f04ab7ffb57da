"""Product CRUD operations."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date
from pathlib import Path

from ..config import DEFAULT_DB_PATH
from ..models import Product
from .schema import ensure_schema

logger = logging.getLogger(__name__)

_COLUMNS = (
    "item",
    "url",
    "order_date",
    "order_placed",
    "order_delivered",
    "review_added",
    "review_live",
    "review_ss_sent",
    "paid",
    "received",
    "delta",
    "is_void",
)


def _to_params(product: Product) -> tuple:
    # delta is written from the derived value so stored rows are never stale
    return (
        product.item,
        product.url,
        product.order_date.isoformat() if product.order_date else None,
        int(product.order_placed),
        int(product.order_delivered),
        int(product.review_added),
        int(product.review_live),
        int(product.review_ss_sent),
        product.paid,
        product.received,
        product.delta,
        int(product.is_void),
    )


def _from_row(row: sqlite3.Row) -> Product:
    return Product(
        id=row["id"],
        item=row["item"] or "",
        url=row["url"],
        order_date=date.fromisoformat(row["order_date"]) if row["order_date"] else None,
        order_placed=bool(row["order_placed"]),
        order_delivered=bool(row["order_delivered"]),
        review_added=bool(row["review_added"]),
        review_live=bool(row["review_live"]),
        review_ss_sent=bool(row["review_ss_sent"]),
        paid=row["paid"],
        received=row["received"],
        is_void=bool(row["is_void"]),
    )


class ProductDB:
    """Manages the products table."""

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

    def list(self) -> list[Product]:
        """Return every stored product in insertion order."""
        conn = self._get_conn()
        rows = conn.execute("SELECT * FROM products ORDER BY id").fetchall()
        logger.debug("Loaded %d products", len(rows))
        return [_from_row(r) for r in rows]

    def get(self, product_id: int) -> Product | None:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT * FROM products WHERE id = ?", (product_id,)
        ).fetchone()
        return _from_row(row) if row else None

    def create(self, product: Product) -> int:
        """Insert a product and return its new ID."""
        conn = self._get_conn()
        placeholders = ", ".join("?" for _ in _COLUMNS)
        cur = conn.execute(
            f"INSERT INTO products ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
            _to_params(product),
        )
        conn.commit()
        return cur.lastrowid

    def update(self, product_id: int, product: Product) -> bool:
        """Overwrite a stored product.

        Returns:
            False if no product has that ID.
        """
        conn = self._get_conn()
        assignments = ", ".join(f"{c} = ?" for c in _COLUMNS)
        cur = conn.execute(
            f"""UPDATE products
                SET {assignments},
                    updated_at = datetime('now', 'localtime')
                WHERE id = ?""",
            (*_to_params(product), product_id),
        )
        conn.commit()
        return cur.rowcount > 0

    def delete(self, product_id: int) -> bool:
        """Delete a product by ID. Returns False if it did not exist."""
        conn = self._get_conn()
        cur = conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
        conn.commit()
        return cur.rowcount > 0
