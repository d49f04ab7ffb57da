"""Lifecycle status classification.

A product gets exactly one status. Rules are evaluated top to bottom and the
first match wins; several rules can hold for the same flag combination, so the
order below is significant and must not be rearranged.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Product


class ProductStatus(str, Enum):
    VOID = "Void"
    COMPLETE = "Complete"
    PENDING_REFUND = "Pending Refund"
    REVIEW_PENDING = "Review Pending"
    REVIEW_NOT_ADDED = "Review Not Added"
    NEW = "New"
    SEND_SCREENSHOT = "Send Screenshot"
    NOT_STARTED = "Not Started"

    @property
    def tone(self) -> str:
        """Badge tone used when rendering the status."""
        return _TONES[self]


_TONES: dict[ProductStatus, str] = {
    ProductStatus.VOID: "neutral",
    ProductStatus.COMPLETE: "good",
    ProductStatus.PENDING_REFUND: "info",
    ProductStatus.REVIEW_PENDING: "warn",
    ProductStatus.REVIEW_NOT_ADDED: "alert",
    ProductStatus.NEW: "new",
    ProductStatus.SEND_SCREENSHOT: "new",
    ProductStatus.NOT_STARTED: "neutral",
}


def is_complete(product: Product) -> bool:
    """Every stage done and both amounts recorded. Does not look at ``is_void``."""
    return (
        product.order_placed
        and product.order_delivered
        and product.review_added
        and product.review_live
        and product.review_ss_sent
        and product.paid is not None
        and product.received is not None
    )


def classify(product: Product) -> ProductStatus:
    if product.is_void:
        return ProductStatus.VOID
    if is_complete(product):
        return ProductStatus.COMPLETE
    if product.review_ss_sent and product.received is None:
        return ProductStatus.PENDING_REFUND
    if product.review_added and not product.review_live:
        return ProductStatus.REVIEW_PENDING
    if product.order_delivered and not product.review_added:
        return ProductStatus.REVIEW_NOT_ADDED
    if product.order_placed and not product.order_delivered:
        return ProductStatus.NEW
    if product.review_live and not product.review_ss_sent:
        return ProductStatus.SEND_SCREENSHOT
    return ProductStatus.NOT_STARTED
