"""Product data model for tracked review/refund purchases."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from .finance import compute_delta
from .status import ProductStatus, classify


class Stage(str, Enum):
    """The five lifecycle flags, in their nominal order.

    Each value is the matching ``Product`` attribute name.
    """

    ORDER_PLACED = "order_placed"
    ORDER_DELIVERED = "order_delivered"
    REVIEW_ADDED = "review_added"
    REVIEW_LIVE = "review_live"
    REVIEW_SS_SENT = "review_ss_sent"


@dataclass
class Product:
    """One tracked purchase.

    ``delta`` is derived from ``paid`` and ``received`` on every read, so a
    product can never carry a stale delta.
    """

    item: str
    url: str | None = None
    order_date: date | None = None
    order_placed: bool = True
    order_delivered: bool = False
    review_added: bool = False
    review_live: bool = False
    review_ss_sent: bool = False
    paid: float | None = None
    received: float | None = None
    is_void: bool = False
    id: int | None = None  # assigned by storage

    def __post_init__(self) -> None:
        if not isinstance(self.item, str):
            raise TypeError(f"item must be a string, got {type(self.item).__name__}")
        for name in [s.value for s in Stage] + ["is_void"]:
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a bool, got {getattr(self, name)!r}")
        for name in ("paid", "received"):
            _check_amount(name, getattr(self, name))
        if self.order_date is not None and not isinstance(self.order_date, date):
            raise TypeError(f"order_date must be a date or None, got {self.order_date!r}")

    @property
    def delta(self) -> float | None:
        return compute_delta(self.paid, self.received)

    @property
    def has_item(self) -> bool:
        """False for empty or whitespace-only names, which are hidden from every view."""
        return bool(self.item.strip())

    @property
    def status(self) -> ProductStatus:
        return classify(self)

    def stage(self, stage: Stage) -> bool:
        return getattr(self, stage.value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "item": self.item,
            "url": self.url,
            "order_date": self.order_date.isoformat() if self.order_date else None,
            "order_placed": self.order_placed,
            "order_delivered": self.order_delivered,
            "review_added": self.review_added,
            "review_live": self.review_live,
            "review_ss_sent": self.review_ss_sent,
            "paid": self.paid,
            "received": self.received,
            "delta": self.delta,
            "is_void": self.is_void,
            "status": self.status.value,
        }


def _check_amount(name: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"{name} must be a number or None, got {value!r}")


def new_product(
    item: str = "",
    *,
    url: str | None = None,
    order_date: date | None = None,
    paid: float | None = None,
) -> Product:
    """Return a product in the state a purchase starts being tracked in."""
    return Product(
        item=item,
        url=url or None,
        order_date=order_date,
        order_placed=True,
        paid=paid,
        received=None,
    )
