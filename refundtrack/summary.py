"""Dashboard statistics over the whole tracked set."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass

from .finance import remaining_exposure, total
from .models import Product
from .status import is_complete


@dataclass
class DashboardStats:
    """Figures shown on the dashboard stat cards.

    Always computed from every tracked product, never from a filtered view.
    """

    total_products: int = 0
    completed_orders: int = 0
    total_paid: float = 0.0
    total_received: float = 0.0
    net_delta: float = 0.0
    remaining_exposure: float = 0.0

    @property
    def is_profitable(self) -> bool:
        return self.net_delta >= 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SummaryTotals:
    """The stored money summary kept next to the product records."""

    total_paid: float = 0.0
    total_received: float = 0.0
    net_delta: float = 0.0


def summarize(products: Iterable[Product]) -> DashboardStats:
    named = [p for p in products if p.has_item]
    return DashboardStats(
        total_products=len(named),
        completed_orders=sum(1 for p in named if is_complete(p)),
        total_paid=total(p.paid for p in named),
        total_received=total(p.received for p in named),
        net_delta=total(p.delta for p in named),
        remaining_exposure=remaining_exposure(named),
    )


def summary_totals(products: Iterable[Product]) -> SummaryTotals:
    """Money totals over every record, including unnamed ones."""
    products = list(products)
    return SummaryTotals(
        total_paid=total(p.paid for p in products),
        total_received=total(p.received for p in products),
        net_delta=total(p.delta for p in products),
    )
