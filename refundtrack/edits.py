"""Typed edit operations on a product.

Each edit is a small frozen dataclass; ``apply_edit`` returns an updated copy
of the product and never mutates its input.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date

from .models import Product, Stage


@dataclass(frozen=True)
class SetItem:
    item: str


@dataclass(frozen=True)
class SetUrl:
    url: str | None


@dataclass(frozen=True)
class SetOrderDate:
    order_date: date | None


@dataclass(frozen=True)
class SetPaid:
    amount: float | None


@dataclass(frozen=True)
class SetReceived:
    amount: float | None


@dataclass(frozen=True)
class SetStage:
    stage: Stage
    value: bool


@dataclass(frozen=True)
class MarkVoid:
    pass


ProductEdit = SetItem | SetUrl | SetOrderDate | SetPaid | SetReceived | SetStage | MarkVoid


def apply_edit(product: Product, edit: ProductEdit) -> Product:
    match edit:
        case SetItem(item=item):
            return replace(product, item=item)
        case SetUrl(url=url):
            return replace(product, url=url or None)
        case SetOrderDate(order_date=order_date):
            return replace(product, order_date=order_date)
        case SetPaid(amount=amount):
            return replace(product, paid=amount)
        case SetReceived(amount=amount):
            return replace(product, received=amount)
        case SetStage(stage=stage, value=value):
            return replace(product, **{Stage(stage).value: value})
        case MarkVoid():
            return replace(product, is_void=True)
        case _:
            raise TypeError(f"Unknown product edit: {edit!r}")


def apply_edits(product: Product, edits: Iterable[ProductEdit]) -> Product:
    for edit in edits:
        product = apply_edit(product, edit)
    return product
