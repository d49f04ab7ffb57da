"""Delta derivation and money totals."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Product


def compute_delta(paid: float | None, received: float | None) -> float | None:
    """Return ``received - paid``, using whichever side is known.

    Only paid -> ``-paid``; only received -> ``received``; neither -> None.
    """
    if paid is not None and received is not None:
        return received - paid
    if paid is not None:
        return -paid
    if received is not None:
        return received
    return None


def is_number(value: float | None) -> bool:
    """True for a present, non-NaN amount."""
    return value is not None and not math.isnan(value)


def total(values: Iterable[float | None]) -> float:
    """Sum amounts; None and NaN contribute nothing."""
    return sum((v for v in values if is_number(v)), 0.0)


def is_fully_refunded(product: Product) -> bool:
    """All five stages done and a valid refund recorded."""
    return (
        product.order_placed
        and product.order_delivered
        and product.review_added
        and product.review_live
        and product.review_ss_sent
        and is_number(product.received)
    )


def remaining_exposure(products: Iterable[Product]) -> float:
    """Money paid on purchases that have not been fully refunded yet."""
    return total(p.paid for p in products if not is_fully_refunded(p))


def format_currency(amount: float | None, symbol: str = "$") -> str:
    if amount is None or math.isnan(amount):
        return "-"
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
