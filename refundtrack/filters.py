"""Search, status and delta filtering for the product list.

The status categories here are standalone predicates, maintained separately
from the classifier cascade in :mod:`refundtrack.status`. They overlap but are
not equivalent: a product can match several categories, or none (the
"Send Screenshot" and "Not Started" labels have no category).
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from enum import Enum

from .models import Product


class StatusFilter(str, Enum):
    ALL = ""
    NEW = "new"
    REVIEW_NOT_ADDED = "review-not-added"
    REVIEW_PENDING = "review-pending"
    PENDING_REFUND = "pending-refund"
    COMPLETE = "complete"
    VOID = "void"


class DeltaFilter(str, Enum):
    ALL = ""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    ZERO = "zero"


def matches_search(product: Product, term: str) -> bool:
    return term.lower() in product.item.lower()


def matches_status(product: Product, category: StatusFilter | str) -> bool:
    p = product
    match StatusFilter(category):
        case StatusFilter.ALL:
            return True
        case StatusFilter.VOID:
            return p.is_void
        case StatusFilter.NEW:
            return not p.is_void and p.order_placed and not p.order_delivered
        case StatusFilter.REVIEW_NOT_ADDED:
            return not p.is_void and p.order_delivered and not p.review_added
        case StatusFilter.REVIEW_PENDING:
            return not p.is_void and p.review_added and not p.review_live
        case StatusFilter.PENDING_REFUND:
            return not p.is_void and p.review_ss_sent and p.received is None
        case StatusFilter.COMPLETE:
            return (
                not p.is_void
                and p.order_placed
                and p.order_delivered
                and p.review_added
                and p.review_live
                and p.review_ss_sent
                and p.paid is not None
                and p.received is not None
            )
    return False


def matches_delta(product: Product, category: DeltaFilter | str) -> bool:
    category = DeltaFilter(category)
    if category is DeltaFilter.ALL:
        return True
    delta = product.delta
    if delta is None or math.isnan(delta):
        return False
    match category:
        case DeltaFilter.POSITIVE:
            return delta > 0
        case DeltaFilter.NEGATIVE:
            return delta < 0
        case DeltaFilter.ZERO:
            return delta == 0
    return False


def apply_filters(
    products: Iterable[Product],
    search: str = "",
    status: StatusFilter | str = StatusFilter.ALL,
    delta: DeltaFilter | str = DeltaFilter.ALL,
) -> list[Product]:
    """Return the products matching all three criteria, in input order.

    Products without a name are always dropped. Raises ValueError for an
    unknown status or delta category.
    """
    status = StatusFilter(status)
    delta = DeltaFilter(delta)
    return [
        p
        for p in products
        if p.has_item
        and matches_search(p, search)
        and matches_status(p, status)
        and matches_delta(p, delta)
    ]
