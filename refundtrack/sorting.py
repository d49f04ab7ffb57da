"""Display ordering for the product list."""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache

from pyuca import Collator

from .filters import DeltaFilter, StatusFilter, apply_filters
from .models import Product


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Loading the collation table is slow, so build it once
    return Collator()


def _sort_key(product: Product) -> tuple:
    name = _collator().sort_key(product.item)
    if product.order_date is None:
        return (1, 0, name)
    # Newest first
    return (0, -product.order_date.toordinal(), name)


def sort_products(products: Iterable[Product]) -> list[Product]:
    """Dated products first, newest first; ties and undated ones by item name.

    Names compare with the Unicode collation order: accents and case only
    break ties between otherwise equal letters, lowercase first.
    """
    return sorted(products, key=_sort_key)


def dashboard_view(
    products: Iterable[Product],
    search: str = "",
    status: StatusFilter | str = StatusFilter.ALL,
    delta: DeltaFilter | str = DeltaFilter.ALL,
) -> list[Product]:
    return sort_products(apply_filters(products, search, status, delta))
