"""Product tracking service: storage calls plus the derived dashboard views."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field

from .db import ProductDB, SummaryDB
from .edits import MarkVoid, ProductEdit, apply_edits
from .filters import DeltaFilter, StatusFilter
from .models import Product
from .receipt import ExtractedOrder
from .receipt.importer import products_from_order
from .sorting import dashboard_view
from .summary import DashboardStats, summarize, summary_totals

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    success: int = 0
    failed: int = 0
    items: list[str] = field(default_factory=list)


class ProductTracker:
    """Keeps a snapshot of every stored product and re-fetches it after each change.

    Mutating methods return False instead of raising when storage fails; the
    error message is kept in ``last_error``.
    """

    def __init__(self, db: ProductDB, summary_db: SummaryDB | None = None) -> None:
        self._db = db
        self._summary_db = summary_db
        self.products: list[Product] = []
        self.last_error: str | None = None

    def refresh(self) -> list[Product]:
        """Reload the full product list from storage."""
        self.products = self._db.list()
        logger.debug("Snapshot refreshed: %d products", len(self.products))
        return self.products

    def find(self, product_id: int) -> Product | None:
        return next((p for p in self.products if p.id == product_id), None)

    def _fail(self, message: str) -> bool:
        self.last_error = message
        return False

    def _save_summary(self) -> None:
        """Store the money totals of the current snapshot.

        The product change is already committed when this runs, so a failure
        here is logged and does not fail the operation.
        """
        if self._summary_db is None:
            return
        try:
            self._summary_db.save(summary_totals(self.products))
        except sqlite3.Error:
            logger.exception("Failed to save dashboard summary")

    def add_product(self, product: Product) -> bool:
        if not product.has_item:
            return self._fail("Cannot add a product without a name")
        try:
            product_id = self._db.create(product)
            logger.info("Added product %r (id=%d)", product.item, product_id)
            self.refresh()
        except sqlite3.Error as e:
            logger.exception("Failed to add product %r", product.item)
            return self._fail(str(e))
        self._save_summary()
        self.last_error = None
        return True

    def update_product(self, product: Product) -> bool:
        """Persist a product that already has a storage ID."""
        if product.id is None:
            logger.error("Cannot update product %r: missing ID", product.item)
            return self._fail("Cannot update product: missing ID")
        try:
            if not self._db.update(product.id, product):
                return self._fail(f"Product not found: {product.id}")
            logger.info("Updated product %r (id=%d)", product.item, product.id)
            self.refresh()
        except sqlite3.Error as e:
            logger.exception("Failed to update product id=%s", product.id)
            return self._fail(str(e))
        self._save_summary()
        self.last_error = None
        return True

    def edit_product(self, product_id: int, *edits: ProductEdit) -> bool:
        """Apply typed edits to a product and save it."""
        current = self.find(product_id)
        if current is None:
            return self._fail(f"Product not found: {product_id}")
        return self.update_product(apply_edits(current, edits))

    def mark_void(self, product_id: int) -> bool:
        return self.edit_product(product_id, MarkVoid())

    def delete_product(self, product_id: int) -> bool:
        try:
            if not self._db.delete(product_id):
                return self._fail(f"Product not found: {product_id}")
            logger.info("Deleted product id=%d", product_id)
            self.refresh()
        except sqlite3.Error as e:
            logger.exception("Failed to delete product id=%s", product_id)
            return self._fail(str(e))
        self._save_summary()
        self.last_error = None
        return True

    def import_order(self, order: ExtractedOrder) -> ImportResult:
        """Add one product per receipt item."""
        result = ImportResult()
        for product in products_from_order(order):
            if self.add_product(product):
                result.success += 1
                result.items.append(product.item)
            else:
                result.failed += 1
                logger.warning("Failed to import %r: %s", product.item, self.last_error)
        return result

    def view(
        self,
        search: str = "",
        status: StatusFilter | str = StatusFilter.ALL,
        delta: DeltaFilter | str = DeltaFilter.ALL,
    ) -> list[Product]:
        return dashboard_view(self.products, search, status, delta)

    def stats(self) -> DashboardStats:
        return summarize(self.products)
