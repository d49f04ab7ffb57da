"""SQLite storage for tracked products and the dashboard summary."""

from .products import ProductDB
from .schema import ensure_schema
from .summary import SummaryDB

__all__ = [
    "ProductDB",
    "SummaryDB",
    "ensure_schema",
]
