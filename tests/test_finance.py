"""Tests for delta derivation and money totals."""

import math

import pytest

from refundtrack.finance import (
    compute_delta,
    format_currency,
    is_fully_refunded,
    is_number,
    remaining_exposure,
    total,
)
from refundtrack.models import Product


@pytest.mark.parametrize(
    "paid, received, expected",
    [
        (None, None, None),
        (10.0, None, -10.0),
        (None, 7.5, 7.5),
        (20.0, 20.0, 0.0),
        (20.0, 25.0, 5.0),
        (20.0, 15.0, -5.0),
        (0.0, None, 0.0),
        (None, 0.0, 0.0),
        (-4.0, None, 4.0),
    ],
)
def test_compute_delta(paid, received, expected):
    assert compute_delta(paid, received) == expected


def test_compute_delta_zero_paid_is_not_absent():
    """A zero amount is a real value, not a missing one."""
    assert compute_delta(0.0, 0.0) == 0.0
    assert compute_delta(0.0, None) is not None


def test_is_number():
    assert is_number(1.0)
    assert is_number(0)
    assert not is_number(None)
    assert not is_number(float("nan"))


def test_total_skips_none_and_nan():
    assert total([1.0, None, 2.5, float("nan"), -0.5]) == 3.0


def test_total_empty():
    assert total([]) == 0.0


def _done(**kwargs) -> Product:
    base = dict(
        item="Thing",
        order_placed=True,
        order_delivered=True,
        review_added=True,
        review_live=True,
        review_ss_sent=True,
        paid=10.0,
        received=10.0,
    )
    base.update(kwargs)
    return Product(**base)


def test_is_fully_refunded():
    assert is_fully_refunded(_done())
    assert not is_fully_refunded(_done(received=None))
    assert not is_fully_refunded(_done(received=float("nan")))
    assert not is_fully_refunded(_done(review_live=False))


def test_is_fully_refunded_ignores_paid():
    assert is_fully_refunded(_done(paid=None))


def test_remaining_exposure():
    products = [
        _done(paid=10.0),  # refunded, not exposed
        Product(item="Mug", paid=12.0),
        Product(item="Lamp", paid=float("nan")),
        Product(item="Pen", paid=None),
        _done(paid=8.0, received=None),
    ]
    assert remaining_exposure(products) == 20.0


def test_format_currency():
    assert format_currency(12.5) == "$12.50"
    assert format_currency(-3) == "-$3.00"
    assert format_currency(0.0) == "$0.00"
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(None) == "-"
    assert format_currency(float("nan")) == "-"
    assert format_currency(5, "€") == "€5.00"


def test_nan_delta_stays_nan():
    assert math.isnan(compute_delta(float("nan"), 3.0))
