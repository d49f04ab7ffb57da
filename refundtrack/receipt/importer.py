"""Turn extracted receipt data into tracked products."""

from __future__ import annotations

from dataclasses import replace

from ..models import Product, new_product
from . import ExtractedOrder


def products_from_order(order: ExtractedOrder) -> list[Product]:
    """One new product per receipt item, marked as ordered.

    A zero or missing item price leaves ``paid`` unknown.
    """
    return [
        new_product(
            item.name,
            order_date=order.order_date,
            paid=item.price or None,
        )
        for item in order.items
    ]


def prefill_product(product: Product, order: ExtractedOrder) -> Product:
    """Fill a draft product from a receipt, keeping fields the receipt lacks.

    Uses the first item's name and the order total as the amount paid. The
    refund amount is never on a receipt and is left as is.
    """
    return replace(
        product,
        item=order.items[0].name if order.items else product.item,
        order_date=order.order_date or product.order_date,
        paid=order.order_total or product.paid,
    )
